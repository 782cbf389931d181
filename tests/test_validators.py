"""Tests for input validation helpers and the transaction model."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ledger.exceptions import ValidationError
from ledger.models import Transaction, isoformat_utc, parse_datetime
from ledger.validators import (
    parse_amount,
    parse_bound,
    validate_category,
    validate_datetime,
    validate_filter_indices,
)


def test_parse_amount_rounds_half_up():
    assert parse_amount("12.345", "amount") == Decimal("12.35")
    assert parse_amount(7, "amount") == Decimal("7.00")
    assert parse_amount("1,000", "amount") == Decimal("1000.00")


@pytest.mark.parametrize("raw", [None, "", "abc", "0", "-3", "1000.01", "NaN", True])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValidationError):
        parse_amount(raw, "amount")


def test_parse_bound_accepts_zero_and_large_values():
    assert parse_bound(None, "min_amount") is None
    assert parse_bound("  ", "min_amount") is None
    assert parse_bound("0", "min_amount") == Decimal("0")
    assert parse_bound(5000, "max_amount") == Decimal("5000")
    assert parse_bound("2.5", "min_amount") == Decimal("2.5")


@pytest.mark.parametrize("raw", ["-0.01", "abc", "Infinity", False])
def test_parse_bound_rejects(raw):
    with pytest.raises(ValidationError):
        parse_bound(raw, "max_amount")


def test_validate_category_normalises():
    assert validate_category(" Food ", "category") == "food"
    with pytest.raises(ValidationError):
        validate_category("groceries", "category")
    with pytest.raises(ValidationError):
        validate_category(None, "category")


def test_validate_datetime():
    naive = datetime(2024, 1, 1, 8, 30)
    assert validate_datetime(naive, "timestamp").tzinfo == timezone.utc
    assert validate_datetime("2024-01-01T08:30:00Z", "timestamp") == naive.replace(tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        validate_datetime("yesterday", "timestamp")
    with pytest.raises(ValidationError):
        validate_datetime(12, "timestamp")


def test_validate_filter_indices():
    assert validate_filter_indices((0, 2, 2), 3) == [0, 2, 2]
    for bad in ([3], [-1], "01", [1.0], 5):
        with pytest.raises(ValidationError):
            validate_filter_indices(bad, 3)


def test_transaction_serialisation():
    transaction = Transaction(
        amount=Decimal("4.5"),
        category="travel",
        timestamp=datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc),
    )
    data = transaction.to_dict()
    assert data == {"amount": "4.50", "category": "travel", "timestamp": "2024-03-02T09:00:00Z"}
    assert Transaction.from_dict(data) == transaction


def test_datetime_helpers_treat_naive_as_utc():
    assert isoformat_utc(datetime(2024, 1, 1)) == "2024-01-01T00:00:00Z"
    assert parse_datetime("2024-01-01T00:00:00").tzinfo == timezone.utc
