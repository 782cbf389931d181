"""Ready-made store observers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .store import TransactionStore


class LoggingObserver:
    """Logs a one-line summary of the store on every change."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.notifications = 0

    def update(self, store: "TransactionStore") -> None:
        self.notifications += 1
        self.logger.info(
            "Ledger changed: %d transactions, %d matched",
            len(store.get_transactions()),
            len(store.get_matched_filter_indices()),
        )
