"""Validation helpers shared across the ledger store and services."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional

from .exceptions import ValidationError
from .models import parse_datetime

CATEGORIES = {
    "food",
    "travel",
    "bills",
    "entertainment",
    "other",
}

MAX_AMOUNT = Decimal("1000.00")


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_amount(raw: object, field: str) -> Decimal:
    """Convert raw input to a Decimal in (0, MAX_AMOUNT] with exactly two fraction digits."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        amount = Decimal(str(raw).replace(",", "").strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a numeric value")
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{field} must be at most {MAX_AMOUNT}")

    return _quantize_two_decimals(amount)


def parse_bound(raw: object, field: str) -> Optional[Decimal]:
    """Parse a filter bound: blank means open, otherwise any non-negative number."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a numeric value")
    try:
        bound = Decimal(str(raw).replace(",", "").strip())
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc
    if not bound.is_finite():
        raise ValidationError(f"{field} must be a numeric value")
    if bound < 0:
        raise ValidationError(f"{field} must not be negative")
    return bound


def validate_category(value: object, field: str, allowed: Iterable[str] = CATEGORIES) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    if canonical not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(allowed))}")
    return canonical


def validate_datetime(value: object, field: str) -> datetime:
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, str):
        try:
            dt = parse_datetime(value)
        except ValueError as exc:
            raise ValidationError(f"{field} must be an ISO 8601 datetime") from exc
    else:
        raise ValidationError(f"{field} must be a datetime or ISO 8601 string")
    return dt.astimezone(timezone.utc)


def validate_filter_indices(indices: Optional[Iterable[object]], count: int) -> List[int]:
    """Check every index against ``[0, count)`` and return a copy.

    Nothing is returned unless every element passes, so callers can write the
    result without risking a partially applied update.
    """
    if indices is None:
        raise ValidationError("The matched filter indices list must be non-null.")
    if isinstance(indices, (str, bytes)):
        raise ValidationError("The matched filter indices must be a sequence of integers.")
    try:
        candidates = list(indices)
    except TypeError as exc:
        raise ValidationError("The matched filter indices must be a sequence of integers.") from exc

    for index in candidates:
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValidationError(f"Matched filter index {index!r} is not an integer.")
        if index < 0 or index > count - 1:
            raise ValidationError(
                "Each matched filter index must be between 0 (inclusive) "
                "and the number of transactions (exclusive)."
            )
    return candidates
