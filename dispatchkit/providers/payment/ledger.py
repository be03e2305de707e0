"""Shared transaction ledger recording settled payments."""
import threading
from typing import List, Optional, Tuple

from dispatchkit.infrastructure.patterns.singleton_access import get_singleton
from dispatchkit.infrastructure.patterns.singleton_registry import ManagedSingleton
from dispatchkit.providers.payment.models import PaymentMethod, PaymentResult


class TransactionLedger(ManagedSingleton):
    """
    Append-only in-memory record of settled payments.

    One ledger exists per process; payment strategies reach it through
    get_transaction_ledger() instead of holding shared state of their own.
    """

    def __init__(self):
        self._entries: List[PaymentResult] = []
        self._lock = threading.Lock()

    def record(self, result: PaymentResult) -> None:
        with self._lock:
            self._entries.append(result)

    def entries(self, method: Optional[PaymentMethod] = None) -> Tuple[PaymentResult, ...]:
        """Snapshot of recorded payments, optionally filtered by method."""
        with self._lock:
            if method is None:
                return tuple(self._entries)
            return tuple(e for e in self._entries if e.method == method)

    def close(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def get_transaction_ledger() -> TransactionLedger:
    """Get the process-wide transaction ledger."""
    return get_singleton(TransactionLedger)
