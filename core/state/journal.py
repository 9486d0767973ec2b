"""
State Journal

Undo log that makes a claim attempt all-or-nothing. Trackers record an
undo action for every mutation; if the attempt raises, the actions of that
attempt run in reverse order and the exception propagates.

Transactions nest like EVM call frames: a nested transaction that succeeds
folds its undo actions into the parent, so a later failure of the parent
still reverts them; a nested transaction that fails reverts only itself.

The journal holds a re-entrant lock for the whole transaction, so attempts
from different threads are serialized while the thread running a dispatch
may still re-enter (and be stopped by the reentrancy guard).
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator


logger = logging.getLogger(__name__)

UndoAction = Callable[[], None]


class StateJournal:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._frames: list[list[UndoAction]] = []

    @property
    def depth(self) -> int:
        """Number of open transactions (0 when idle)."""
        return len(self._frames)

    @property
    def in_transaction(self) -> bool:
        return bool(self._frames)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            self._frames.append([])
            try:
                yield
            except BaseException:
                undo = self._frames.pop()
                logger.debug(f"Rolling back {len(undo)} state change(s) at depth {len(self._frames)}")
                for action in reversed(undo):
                    action()
                raise
            else:
                done = self._frames.pop()
                if self._frames:
                    self._frames[-1].extend(done)

    def record(self, undo: UndoAction) -> None:
        """Register an undo action; a no-op outside a transaction."""
        if self._frames:
            self._frames[-1].append(undo)


__all__ = [
    "StateJournal",
    "UndoAction",
]
