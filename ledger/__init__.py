"""Core business logic package for the expense ledger."""

from .models import Transaction
from .store import StoreObserver, TransactionStore
from .services import TransactionService
from .observers import LoggingObserver
from .exceptions import ValidationError, RecordNotFoundError

__all__ = [
    "Transaction",
    "StoreObserver",
    "TransactionStore",
    "TransactionService",
    "LoggingObserver",
    "ValidationError",
    "RecordNotFoundError",
]
