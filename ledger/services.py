"""Framework-agnostic business services for the expense ledger."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from .exceptions import RecordNotFoundError
from .filters import build_filter
from .models import Transaction
from .store import StoreObserver, TransactionStore
from .validators import parse_amount, validate_category, validate_datetime


class TransactionService:
    """Validates user input and drives a ``TransactionStore``.

    Every public method runs under a re-entrant lock so the store can be
    shared by threaded hosts such as the Flask development server. Observers
    are notified while the lock is held.
    """

    def __init__(self, store: Optional[TransactionStore] = None) -> None:
        self._store = store if store is not None else TransactionStore()
        self._lock = threading.RLock()

    @property
    def store(self) -> TransactionStore:
        return self._store

    # Public API -----------------------------------------------------------
    def add(self, payload: Dict[str, object]) -> Transaction:
        transaction = Transaction(**self._validate_payload(payload))
        with self._lock:
            self._store.add_transaction(transaction)
        return transaction

    def remove(self, index: int) -> Transaction:
        with self._lock:
            self._get_or_raise(index)
            return self._store.remove_transaction_at(index)

    def get(self, index: int) -> Transaction:
        with self._lock:
            return self._get_or_raise(index)

    def list(self) -> List[Transaction]:
        with self._lock:
            return list(self._store.get_transactions())

    def apply_filter(self, **criteria: object) -> List[int]:
        """Compute indices matching ``criteria`` and store them as the current filter."""
        transaction_filter = build_filter(**criteria)
        with self._lock:
            indices = transaction_filter.matching_indices(self._store.get_transactions())
            self._store.set_matched_filter_indices(indices)
        return indices

    def clear_filter(self) -> None:
        with self._lock:
            self._store.set_matched_filter_indices([])

    def matched_indices(self) -> List[int]:
        with self._lock:
            return self._store.get_matched_filter_indices()

    def matched_items(self) -> List[Tuple[int, Transaction]]:
        """Return (index, transaction) pairs for the current filter result."""
        with self._lock:
            transactions = self._store.get_transactions()
            return [(index, transactions[index]) for index in self._store.get_matched_filter_indices()]

    def matched(self) -> List[Transaction]:
        return [transaction for _, transaction in self.matched_items()]

    def total(self, matched_only: bool = False) -> Decimal:
        records = self.matched() if matched_only else self.list()
        return sum((transaction.amount for transaction in records), start=Decimal("0.00"))

    def summary(self) -> Dict[str, object]:
        with self._lock:
            return {
                "count": len(self._store.get_transactions()),
                "total": self.total(),
                "matched_count": len(self._store.get_matched_filter_indices()),
                "matched_total": self.total(matched_only=True),
                "listeners": self._store.number_of_listeners(),
            }

    def register(self, observer: StoreObserver) -> bool:
        with self._lock:
            return self._store.register(observer)

    def unregister(self, observer: StoreObserver) -> bool:
        with self._lock:
            return self._store.unregister(observer)

    # Internal helpers -----------------------------------------------------
    def _get_or_raise(self, index: int) -> Transaction:
        transactions = self._store.get_transactions()
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(transactions):
            raise RecordNotFoundError(f"Transaction {index} not found")
        return transactions[index]

    def _validate_payload(self, payload: Dict[str, object]) -> Dict[str, object]:
        timestamp = payload.get("timestamp")
        return {
            "amount": parse_amount(payload.get("amount"), "amount"),
            "category": validate_category(payload.get("category"), "category"),
            "timestamp": (
                validate_datetime(timestamp, "timestamp")
                if timestamp is not None
                else datetime.now(timezone.utc)
            ),
        }
