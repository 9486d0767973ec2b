"""
Claim Orchestrator Base

Shared machinery for the proof-based and voucher-based claim paths:

- every attempt runs inside one journal transaction, so any failure
  (validation, dispatch, a hook that raises) reverts all of its state
  changes before the error reaches the caller
- a reentrancy guard wraps the entry point
- settlement dispatches the asset and then emits the ClaimRecord

Replay-protection state is always written before _settle is called.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from core.schemas.allocation import Asset, ClaimModule, ClaimRecord
from core.state.journal import StateJournal

from orchestrator.dispatch import AssetDispatcher, dispatch_asset
from orchestrator.events import ClaimEventLog
from orchestrator.guard import ReentrancyGuard


logger = logging.getLogger(__name__)


class ClaimPhase(str, Enum):
    """Claim state machine. Failure can exit from VALIDATING or AUTHORIZED."""
    VALIDATING = "validating"
    AUTHORIZED = "authorized"
    SETTLED = "settled"


class ClaimOrchestrator:
    module: ClaimModule
    entry_point: str

    def __init__(
        self,
        dispatcher: AssetDispatcher,
        *,
        journal: Optional[StateJournal] = None,
        events: Optional[ClaimEventLog] = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._journal = journal if journal is not None else StateJournal()
        self._events = events if events is not None else ClaimEventLog(self._journal)
        self._guard = ReentrancyGuard()

    @property
    def events(self) -> ClaimEventLog:
        return self._events

    @property
    def journal(self) -> StateJournal:
        return self._journal

    @contextmanager
    def _attempt(self) -> Iterator[None]:
        with self._journal.transaction(), self._guard.enter(self.entry_point):
            yield

    def _enter_phase(self, phase: ClaimPhase, claim_index: int) -> None:
        logger.debug(f"{self.module.value} claim {claim_index}: {phase.value}")

    def _settle(
        self,
        *,
        claim_index: int,
        claimant: str,
        asset_contract: str,
        asset_id: int,
        amount: int,
        asset: Asset,
    ) -> ClaimRecord:
        dispatch_asset(self._dispatcher, asset, claimant)
        record = ClaimRecord(
            module=self.module,
            claim_index=claim_index,
            claimant=claimant,
            asset_contract=asset_contract,
            asset_id=asset_id,
            amount=amount,
        )
        self._events.emit(record)
        self._enter_phase(ClaimPhase.SETTLED, claim_index)
        return record


__all__ = [
    "ClaimPhase",
    "ClaimOrchestrator",
]
