"""
Claim Event Log

Append-only record of settled claims. Subscribers are notified after the
record is appended.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from core.schemas.allocation import ClaimModule, ClaimRecord
from core.state.journal import StateJournal


logger = logging.getLogger(__name__)

Subscriber = Callable[[ClaimRecord], None]


class ClaimEventLog:
    def __init__(self, journal: Optional[StateJournal] = None) -> None:
        self._records: list[ClaimRecord] = []
        self._subscribers: list[Subscriber] = []
        self._journal = journal
        self._lock = threading.Lock()

    def emit(self, record: ClaimRecord) -> None:
        with self._lock:
            self._records.append(record)
        if self._journal is not None:
            self._journal.record(lambda: self._remove(record))
        logger.info(
            f"Claimed: module={record.module.value} index={record.claim_index} "
            f"claimant={record.claimant} token={record.asset_contract} "
            f"id={record.asset_id} amount={record.amount}"
        )
        for subscriber in list(self._subscribers):
            subscriber(record)

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def records(self, module: Optional[ClaimModule] = None) -> list[ClaimRecord]:
        with self._lock:
            if module is None:
                return list(self._records)
            return [r for r in self._records if r.module == module]

    def __len__(self) -> int:
        return len(self._records)

    def _remove(self, record: ClaimRecord) -> None:
        with self._lock:
            # Identity match: equal records from different attempts must survive
            for i in range(len(self._records) - 1, -1, -1):
                if self._records[i] is record:
                    del self._records[i]
                    break


__all__ = [
    "ClaimEventLog",
    "Subscriber",
]
