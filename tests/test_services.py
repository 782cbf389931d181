"""Tests for the transaction service that fronts the store."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ledger.exceptions import RecordNotFoundError, ValidationError


def test_add_validates_and_stores(service, store, observer):
    service.register(observer)
    transaction = service.add({"amount": "12.5", "category": "Food"})

    assert transaction.amount == Decimal("12.50")
    assert transaction.category == "food"
    assert transaction.timestamp.tzinfo is not None
    assert store.get_transactions() == (transaction,)
    assert len(observer.calls) == 1


def test_add_accepts_explicit_timestamp(service):
    transaction = service.add(
        {"amount": 3, "category": "bills", "timestamp": "2024-02-01T10:00:00Z"}
    )
    assert transaction.timestamp == datetime(2024, 2, 1, 10, 0, tzinfo=timezone.utc)


def test_add_invalid_payload_does_not_touch_store(service, store, observer):
    service.register(observer)
    with pytest.raises(ValidationError):
        service.add({"amount": "-1", "category": "food"})
    with pytest.raises(ValidationError):
        service.add({"amount": "1", "category": "rent"})
    assert store.get_transactions() == ()
    assert observer.calls == []


def test_remove_by_index(service):
    first = service.add({"amount": "1", "category": "food"})
    second = service.add({"amount": "2", "category": "travel"})

    removed = service.remove(0)

    assert removed == first
    assert service.list() == [second]


@pytest.mark.parametrize("index", [-1, 1, True])
def test_remove_unknown_index(service, index):
    service.add({"amount": "1", "category": "food"})
    with pytest.raises(RecordNotFoundError):
        service.remove(index)
    assert len(service.list()) == 1


def test_apply_and_clear_filter(service, store):
    service.add({"amount": "5", "category": "food"})
    service.add({"amount": "50", "category": "travel"})
    service.add({"amount": "15", "category": "food"})

    assert service.apply_filter(category="food") == [0, 2]
    assert store.get_matched_filter_indices() == [0, 2]
    assert [item.amount for item in service.matched()] == [Decimal("5.00"), Decimal("15.00")]
    assert service.matched_items()[1][0] == 2

    service.clear_filter()
    assert service.matched_indices() == []


def test_adding_invalidates_filter(service):
    service.add({"amount": "5", "category": "food"})
    service.apply_filter(category="food")
    service.add({"amount": "6", "category": "food"})
    assert service.matched_indices() == []


def test_totals_and_summary(service, observer):
    service.register(observer)
    service.add({"amount": "5", "category": "food"})
    service.add({"amount": "10.25", "category": "travel"})
    service.apply_filter(max_amount="6")

    assert service.total() == Decimal("15.25")
    assert service.total(matched_only=True) == Decimal("5.00")
    assert service.summary() == {
        "count": 2,
        "total": Decimal("15.25"),
        "matched_count": 1,
        "matched_total": Decimal("5.00"),
        "listeners": 1,
    }


def test_unregister_stops_notifications(service, observer):
    service.register(observer)
    service.unregister(observer)
    service.add({"amount": "1", "category": "other"})
    assert observer.calls == []


def test_remove_targets_position_among_equal_transactions(service, observer):
    stamp = "2024-05-01T12:00:00Z"
    for category in ("food", "travel", "food"):
        service.add({"amount": "5", "category": category, "timestamp": stamp})
    service.apply_filter(category="food")
    service.register(observer)

    removed = service.remove(2)

    assert removed.category == "food"
    assert [item.category for item in service.list()] == ["food", "travel"]
    assert service.matched_indices() == []
    assert len(observer.calls) == 1
