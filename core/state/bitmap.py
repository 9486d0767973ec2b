"""
Claimed-State Bitmap

Set-once flags keyed by allocation index, packed into 256-bit words:
index i lives in bit (i & 0xff) of word (i >> 8). A set bit means the
allocation has been dispatched exactly once. Bits are never cleared, except
by the journal rolling back the attempt that set them.
"""
from __future__ import annotations

import threading
from typing import Optional

from core.schemas.allocation import UINT256_MAX
from core.schemas.errors import AlreadyClaimedError
from core.state.journal import StateJournal


WORD_BITS = 256


def _locate(index: int) -> tuple[int, int]:
    if index < 0 or index > UINT256_MAX:
        raise ValueError(f"Index out of uint256 range: {index}")
    return index >> 8, 1 << (index & 0xFF)


class ClaimBitmap:
    """Replay guard for index-addressed (proof-based) claims."""

    def __init__(self, journal: Optional[StateJournal] = None) -> None:
        self._words: dict[int, int] = {}
        self._journal = journal
        self._lock = threading.Lock()

    def is_set(self, index: int) -> bool:
        word_index, mask = _locate(index)
        return bool(self._words.get(word_index, 0) & mask)

    def set_if_unset(self, index: int) -> None:
        """
        Set the bit for index.

        Raises:
            AlreadyClaimedError: If the bit is already set; nothing changes
        """
        word_index, mask = _locate(index)
        with self._lock:
            word = self._words.get(word_index, 0)
            if word & mask:
                raise AlreadyClaimedError(index)
            self._words[word_index] = word | mask
        if self._journal is not None:
            self._journal.record(lambda: self._restore(word_index, word))

    def word(self, word_index: int) -> int:
        """Raw 256-bit storage word."""
        return self._words.get(word_index, 0)

    def claimed_count(self) -> int:
        return sum(bin(w).count("1") for w in self._words.values())

    def _restore(self, word_index: int, word: int) -> None:
        with self._lock:
            if word:
                self._words[word_index] = word
            else:
                self._words.pop(word_index, None)


__all__ = [
    "WORD_BITS",
    "ClaimBitmap",
]
