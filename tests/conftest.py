"""Shared fixtures for the ledger tests."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ledger.models import Transaction
from ledger.services import TransactionService
from ledger.store import TransactionStore


class RecordingObserver:
    """Collects every store it is notified with."""

    def __init__(self):
        self.calls = []

    def update(self, store):
        self.calls.append(store)


@pytest.fixture
def store():
    return TransactionStore()


@pytest.fixture
def service(store):
    return TransactionService(store)


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def make_transaction():
    def _make(amount="10.00", category="food", minute=0):
        return Transaction(
            amount=Decimal(amount),
            category=category,
            timestamp=datetime(2024, 5, 1, 12, minute, tzinfo=timezone.utc),
        )

    return _make
