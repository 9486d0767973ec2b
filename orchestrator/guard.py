"""
Reentrancy Guard

Rejects a nested call into a claim entry point while an earlier call on the
same orchestrator is still in flight (for example from a recipient hook run
during dispatch).
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from core.schemas.errors import ReentrantCallError


class ReentrancyGuard:
    def __init__(self) -> None:
        self._entered = False

    @property
    def entered(self) -> bool:
        return self._entered

    @contextmanager
    def enter(self, entry_point: str) -> Iterator[None]:
        if self._entered:
            raise ReentrantCallError(entry_point)
        self._entered = True
        try:
            yield
        finally:
            self._entered = False


__all__ = [
    "ReentrancyGuard",
]
