"""Filter predicates used to compute matched-transaction indices.

The store only holds filter results; these helpers produce them.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from .exceptions import ValidationError
from .models import Transaction
from .validators import parse_bound, validate_category

__all__ = ["AmountFilter", "CategoryFilter", "CompositeFilter", "TransactionFilter", "build_filter"]


class TransactionFilter:
    """Base class for predicates over a single transaction."""

    def matches(self, transaction: Transaction) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def matching_indices(self, transactions: Sequence[Transaction]) -> List[int]:
        return [index for index, transaction in enumerate(transactions) if self.matches(transaction)]


class AmountFilter(TransactionFilter):
    """Matches amounts within inclusive bounds; a missing bound is open."""

    def __init__(self, min_amount: Optional[Decimal] = None, max_amount: Optional[Decimal] = None) -> None:
        if min_amount is not None and max_amount is not None and min_amount > max_amount:
            raise ValidationError("min_amount must not be greater than max_amount")
        self.min_amount = min_amount
        self.max_amount = max_amount

    def matches(self, transaction: Transaction) -> bool:
        if self.min_amount is not None and transaction.amount < self.min_amount:
            return False
        if self.max_amount is not None and transaction.amount > self.max_amount:
            return False
        return True


class CategoryFilter(TransactionFilter):
    def __init__(self, category: str) -> None:
        self.category = validate_category(category, "category")

    def matches(self, transaction: Transaction) -> bool:
        return transaction.category.lower() == self.category


class CompositeFilter(TransactionFilter):
    """Matches when every wrapped filter matches."""

    def __init__(self, filters: Iterable[TransactionFilter]) -> None:
        self.filters = list(filters)

    def matches(self, transaction: Transaction) -> bool:
        return all(item.matches(transaction) for item in self.filters)


def build_filter(
    category: Optional[object] = None,
    min_amount: Optional[object] = None,
    max_amount: Optional[object] = None,
) -> CompositeFilter:
    filters: List[TransactionFilter] = []
    if category is not None and not (isinstance(category, str) and not category.strip()):
        filters.append(CategoryFilter(category))  # type: ignore[arg-type]

    lower = parse_bound(min_amount, "min_amount")
    upper = parse_bound(max_amount, "max_amount")
    if lower is not None or upper is not None:
        filters.append(AmountFilter(lower, upper))

    if not filters:
        raise ValidationError("at least one filter criterion is required")
    return CompositeFilter(filters)
