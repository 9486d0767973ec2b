"""
Proof-Based Claims

Allocations committed under an immutable Merkle root are claimed once each
by their claimant, guarded by the claimed-bitmap.

Validation order (cheapest first):
1. index not yet claimed
2. proof length within the bound
3. effective caller is the claimant
4. leaf recomputed from the full record verifies against the root
5. allocation resolves to a valid asset
then: mark claimed -> dispatch -> emit.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from core.crypto.hashing import DIGEST_SIZE, digest_from_hex, to_hex
from core.merkle.leaf import hash_leaf
from core.merkle.merkle_tree import DEFAULT_MAX_PROOF_DEPTH, verify_merkle_proof
from core.schemas.allocation import Allocation, ClaimModule, ClaimRecord
from core.schemas.errors import (
    AirdropException,
    AlreadyClaimedError,
    InvalidProofError,
    NotClaimantError,
    ProofTooLongError,
)
from core.state.bitmap import ClaimBitmap
from core.state.journal import StateJournal

from orchestrator.base import ClaimOrchestrator, ClaimPhase
from orchestrator.callers import CallContext, CallerResolver, DirectCallerResolver
from orchestrator.dispatch import AssetDispatcher
from orchestrator.events import ClaimEventLog


logger = logging.getLogger(__name__)

ProofElement = Union[bytes, str]


class MerkleAirdrop(ClaimOrchestrator):
    module = ClaimModule.MERKLE
    entry_point = "claim"

    def __init__(
        self,
        merkle_root: bytes,
        dispatcher: AssetDispatcher,
        *,
        caller_resolver: Optional[CallerResolver] = None,
        max_proof_depth: int = DEFAULT_MAX_PROOF_DEPTH,
        journal: Optional[StateJournal] = None,
        events: Optional[ClaimEventLog] = None,
    ) -> None:
        super().__init__(dispatcher, journal=journal, events=events)
        if len(merkle_root) != DIGEST_SIZE:
            raise ValueError(f"Merkle root must be {DIGEST_SIZE} bytes, got {len(merkle_root)}")
        if max_proof_depth < 0:
            raise ValueError(f"max_proof_depth must be non-negative, got {max_proof_depth}")
        self._merkle_root = bytes(merkle_root)
        self._max_proof_depth = max_proof_depth
        self._caller_resolver = caller_resolver or DirectCallerResolver()
        self._bitmap = ClaimBitmap(self._journal)

    @property
    def merkle_root(self) -> bytes:
        return self._merkle_root

    @property
    def max_proof_depth(self) -> int:
        return self._max_proof_depth

    @property
    def bitmap(self) -> ClaimBitmap:
        return self._bitmap

    def is_claimed(self, index: int) -> bool:
        return self._bitmap.is_set(index)

    def claim(
        self,
        allocation: Allocation,
        proof: Sequence[ProofElement],
        caller: Union[CallContext, str],
    ) -> ClaimRecord:
        """
        Claim an allocation with its inclusion proof.

        Args:
            allocation: The full allocation record (the leaf is recomputed from it)
            proof: Sibling digests as bytes or 0x hex, bottom-up
            caller: Submitter address or a CallContext for forwarded calls

        Returns:
            The emitted ClaimRecord

        Raises:
            AlreadyClaimedError, ProofTooLongError, NotClaimantError,
            InvalidProofError, InvalidAllocationError, TransferFailedError,
            ReentrantCallError. State is unchanged whenever one is raised.
        """
        context = caller if isinstance(caller, CallContext) else CallContext(submitter=caller)
        try:
            with self._attempt():
                return self._claim(allocation, list(proof), context)
        except AirdropException as e:
            logger.warning(f"Merkle claim {allocation.index} rejected: {e.code}: {e.message}")
            raise

    def _claim(
        self,
        allocation: Allocation,
        proof: list[ProofElement],
        context: CallContext,
    ) -> ClaimRecord:
        index = allocation.index
        self._enter_phase(ClaimPhase.VALIDATING, index)

        if self._bitmap.is_set(index):
            raise AlreadyClaimedError(index)

        if len(proof) > self._max_proof_depth:
            raise ProofTooLongError(len(proof), self._max_proof_depth)

        caller = self._caller_resolver.resolve(context)
        if caller != allocation.claimant:
            raise NotClaimantError(allocation.claimant, caller)

        siblings = _decode_proof(proof, index)
        leaf = hash_leaf(allocation)
        if not verify_merkle_proof(leaf, siblings, self._merkle_root, self._max_proof_depth):
            raise InvalidProofError(index, details={"leaf": to_hex(leaf)})

        asset = allocation.to_asset()
        self._enter_phase(ClaimPhase.AUTHORIZED, index)

        self._bitmap.set_if_unset(index)
        return self._settle(
            claim_index=index,
            claimant=allocation.claimant,
            asset_contract=allocation.asset_contract,
            asset_id=allocation.asset_id,
            amount=allocation.amount,
            asset=asset,
        )


def _decode_proof(proof: list[ProofElement], index: int) -> list[bytes]:
    siblings: list[bytes] = []
    for element in proof:
        if isinstance(element, str):
            try:
                element = digest_from_hex(element)
            except ValueError as e:
                raise InvalidProofError(index, details={"reason": str(e)}) from e
        if len(element) != DIGEST_SIZE:
            raise InvalidProofError(index, details={"reason": "proof element is not 32 bytes"})
        siblings.append(bytes(element))
    return siblings


__all__ = [
    "MerkleAirdrop",
]
