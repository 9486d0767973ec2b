"""
Voucher-Based Claims

A trusted party (or the claimant's own wallet) signs an EIP-712 Claim
voucher. Anyone may submit it; the asset always goes to the claimant who
signed.

Order:
1. consume the claimant's nonce (atomic replay guard, fails on mismatch)
2. recover the signer and require it to be the claimant
3. resolve the asset
then: dispatch -> emit, with the nonce as the claim index.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from core.crypto.signatures import Signature
from core.crypto.typed_data import EIP712Domain
from core.crypto.vouchers import VoucherVerifier
from core.schemas.allocation import ClaimModule, ClaimRecord, ClaimVoucher
from core.schemas.errors import AirdropException
from core.state.journal import StateJournal
from core.state.nonces import NonceTracker

from orchestrator.base import ClaimOrchestrator, ClaimPhase
from orchestrator.callers import CallContext
from orchestrator.dispatch import AssetDispatcher
from orchestrator.events import ClaimEventLog


logger = logging.getLogger(__name__)


class SignatureAirdrop(ClaimOrchestrator):
    module = ClaimModule.SIGNATURE
    entry_point = "claimWithSignature"

    def __init__(
        self,
        domain: EIP712Domain,
        dispatcher: AssetDispatcher,
        *,
        journal: Optional[StateJournal] = None,
        events: Optional[ClaimEventLog] = None,
    ) -> None:
        super().__init__(dispatcher, journal=journal, events=events)
        self._domain = domain
        self._verifier = VoucherVerifier(domain.separator())
        self._nonces = NonceTracker(self._journal)

    @property
    def domain(self) -> EIP712Domain:
        return self._domain

    @property
    def domain_separator(self) -> bytes:
        return self._verifier.domain_separator

    def current_nonce(self, identity: str) -> int:
        return self._nonces.current(identity)

    def voucher_digest(self, voucher: ClaimVoucher) -> bytes:
        """The digest a claimant must sign for this voucher."""
        return self._verifier.digest(voucher)

    def claim(
        self,
        voucher: ClaimVoucher,
        signature: Union[Signature, bytes, str],
        submitter: Union[CallContext, str, None] = None,
    ) -> ClaimRecord:
        """
        Claim with a signed voucher.

        Args:
            voucher: The signed payload
            signature: 65-byte r||s||v signature (object, bytes or 0x hex)
            submitter: Who sent the claim; informational only

        Raises:
            InvalidNonceError, InvalidSignatureError, InvalidAllocationError,
            TransferFailedError, ReentrantCallError. State is unchanged
            whenever one is raised.
        """
        if isinstance(submitter, CallContext):
            submitter = submitter.submitter
        if submitter and submitter.lower() != voucher.claimant.lower():
            logger.info(f"Voucher for {voucher.claimant} relayed by {submitter}")
        try:
            with self._attempt():
                return self._claim(voucher, signature)
        except AirdropException as e:
            logger.warning(
                f"Signature claim for {voucher.claimant} nonce {voucher.nonce} rejected: "
                f"{e.code}: {e.message}"
            )
            raise

    def _claim(self, voucher: ClaimVoucher, signature: Union[Signature, bytes, str]) -> ClaimRecord:
        self._enter_phase(ClaimPhase.VALIDATING, voucher.nonce)

        nonce = self._nonces.consume_expected(voucher.claimant, voucher.nonce)
        self._verifier.verify(voucher, signature)
        asset = voucher.to_asset()
        self._enter_phase(ClaimPhase.AUTHORIZED, nonce)

        return self._settle(
            claim_index=nonce,
            claimant=voucher.claimant,
            asset_contract=voucher.asset_contract,
            asset_id=voucher.asset_id,
            amount=voucher.amount,
            asset=asset,
        )


__all__ = [
    "SignatureAirdrop",
]
