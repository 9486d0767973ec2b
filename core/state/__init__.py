"""
Claim state: packed claimed-bitmap, per-identity nonces and the undo
journal that keeps every claim attempt atomic.
"""
from .journal import StateJournal, UndoAction
from .bitmap import WORD_BITS, ClaimBitmap
from .nonces import NonceTracker

__all__ = [
    "StateJournal",
    "UndoAction",
    "WORD_BITS",
    "ClaimBitmap",
    "NonceTracker",
]
