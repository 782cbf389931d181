"""Tests for the filter predicates that produce matched indices."""

from decimal import Decimal

import pytest

from ledger.exceptions import ValidationError
from ledger.filters import AmountFilter, CategoryFilter, build_filter


@pytest.fixture
def transactions(make_transaction):
    return [
        make_transaction("5.00", "food"),
        make_transaction("50.00", "travel", minute=1),
        make_transaction("20.00", "food", minute=2),
        make_transaction("500.00", "bills", minute=3),
    ]


def test_amount_filter_bounds_are_inclusive(transactions):
    assert AmountFilter(Decimal("5.00"), Decimal("50.00")).matching_indices(transactions) == [0, 1, 2]
    assert AmountFilter(min_amount=Decimal("50.00")).matching_indices(transactions) == [1, 3]
    assert AmountFilter(max_amount=Decimal("4.99")).matching_indices(transactions) == []


def test_amount_filter_rejects_inverted_bounds():
    with pytest.raises(ValidationError):
        AmountFilter(Decimal("10"), Decimal("1"))


def test_category_filter(transactions):
    assert CategoryFilter("FOOD").matching_indices(transactions) == [0, 2]
    with pytest.raises(ValidationError):
        CategoryFilter("rent")


def test_build_filter_combines_criteria(transactions):
    combined = build_filter(category="food", min_amount="10")
    assert combined.matching_indices(transactions) == [2]


def test_build_filter_requires_a_criterion():
    with pytest.raises(ValidationError):
        build_filter()
    with pytest.raises(ValidationError):
        build_filter(category="", min_amount="")


def test_build_filter_accepts_zero_and_large_bounds(transactions):
    assert build_filter(min_amount=0, max_amount="5000").matching_indices(transactions) == [0, 1, 2, 3]
    with pytest.raises(ValidationError):
        build_filter(min_amount="-1")
