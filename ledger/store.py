"""In-memory transaction store with change notification."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .exceptions import ValidationError
from .models import Transaction
from .validators import validate_filter_indices

__all__ = ["StoreObserver", "TransactionStore"]

logger = logging.getLogger(__name__)


class StoreObserver(Protocol):
    """Anything interested in store changes.

    ``update`` receives the store itself rather than a diff; observers
    re-query ``get_transactions`` and ``get_matched_filter_indices``.
    """

    def update(self, store: "TransactionStore") -> None:
        ...


class TransactionStore:
    """Holds transactions, the last applied filter result and its observers.

    Every mutating call validates its input, applies the change and then
    notifies each registered observer once. Not thread-safe; hosts that
    share a store across threads must serialise access (see
    ``TransactionService``).
    """

    def __init__(self) -> None:
        self._transactions: List[Transaction] = []
        self._matched_filter_indices: List[int] = []
        # Keyed by id() so membership is by identity, not equality.
        self._observers: Dict[int, StoreObserver] = {}

    # Transactions ---------------------------------------------------------
    def add_transaction(self, transaction: Optional[Transaction]) -> None:
        if transaction is None:
            raise ValidationError("The new transaction must be non-null.")
        self._transactions.append(transaction)
        # Old indices no longer describe the list.
        self._matched_filter_indices.clear()
        logger.debug("Added transaction; %d stored", len(self._transactions))
        self._state_changed()

    def remove_transaction(self, transaction: Optional[Transaction]) -> None:
        """Remove the first transaction equal to ``transaction``.

        The filter result is cleared and observers are notified even when no
        matching transaction was stored.
        """
        try:
            self._transactions.remove(transaction)
        except ValueError:
            logger.debug("Remove requested for a transaction that is not stored")
        self._matched_filter_indices.clear()
        self._state_changed()

    def remove_transaction_at(self, index: int) -> Transaction:
        """Remove and return the transaction at ``index``.

        Unlike ``remove_transaction`` this targets a position, so equal
        transactions elsewhere in the list are left alone. An index outside
        ``[0, len)`` raises ``ValidationError`` without touching the store.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._transactions):
            raise ValidationError(f"Transaction index {index!r} is out of range.")
        transaction = self._transactions.pop(index)
        self._matched_filter_indices.clear()
        logger.debug("Removed transaction at %d; %d stored", index, len(self._transactions))
        self._state_changed()
        return transaction

    def get_transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    # Filter result --------------------------------------------------------
    def set_matched_filter_indices(self, indices: Optional[Sequence[int]]) -> None:
        validated = validate_filter_indices(indices, len(self._transactions))
        self._matched_filter_indices = validated
        logger.debug("Matched filter indices set to %s", validated)
        self._state_changed()

    def get_matched_filter_indices(self) -> List[int]:
        return list(self._matched_filter_indices)

    # Observers ------------------------------------------------------------
    def register(self, observer: Optional[StoreObserver]) -> bool:
        """Register ``observer`` for change events.

        Returns True if the observer is non-null and was not already
        registered, False otherwise.
        """
        if observer is not None and id(observer) not in self._observers:
            self._observers[id(observer)] = observer
            return True
        return False

    def unregister(self, observer: Optional[StoreObserver]) -> bool:
        if observer is not None and id(observer) in self._observers:
            del self._observers[id(observer)]
            return True
        return False

    def number_of_listeners(self) -> int:
        return len(self._observers)

    def contains_listener(self, observer: Optional[StoreObserver]) -> bool:
        return observer is not None and id(observer) in self._observers

    def _state_changed(self) -> None:
        # Observers may register or unregister while being notified.
        for observer in list(self._observers.values()):
            observer.update(self)
