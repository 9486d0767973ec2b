"""
Per-Identity Nonces

Monotonic counters guarding voucher claims. A voucher is valid only when
its nonce equals the claimant's current counter, and the counter is
consumed as part of that same check.
"""
from __future__ import annotations

import threading
from typing import Optional

from core.schemas.allocation import normalize_address
from core.schemas.errors import InvalidNonceError
from core.state.journal import StateJournal


class NonceTracker:
    def __init__(self, journal: Optional[StateJournal] = None) -> None:
        self._nonces: dict[str, int] = {}
        self._journal = journal
        self._lock = threading.Lock()

    def current(self, identity: str) -> int:
        return self._nonces.get(normalize_address(identity), 0)

    def consume_expected(self, identity: str, provided: int) -> int:
        """
        Atomically compare and increment the identity's counter.

        Returns:
            The consumed (pre-increment) nonce

        Raises:
            InvalidNonceError: If provided != current; nothing changes
        """
        key = normalize_address(identity)
        with self._lock:
            expected = self._nonces.get(key, 0)
            if provided != expected:
                raise InvalidNonceError(expected, provided)
            self._nonces[key] = expected + 1
        if self._journal is not None:
            self._journal.record(lambda: self._restore(key, expected))
        return expected

    def _restore(self, key: str, value: int) -> None:
        with self._lock:
            if value:
                self._nonces[key] = value
            else:
                self._nonces.pop(key, None)


__all__ = [
    "NonceTracker",
]
