"""
Voucher Signing Helper

Produces EIP-712 signatures for claim vouchers. Runs on a trusted backend
or in the claimant's own wallet; the signing key never reaches the claim
service.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from core.crypto.signatures import Signature, parse_private_key, private_key_to_address, sign_digest
from core.crypto.typed_data import EIP712Domain, voucher_digest
from core.schemas.allocation import ClaimVoucher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedVoucher:
    voucher: ClaimVoucher
    signature: Signature

    def to_json_dict(self) -> dict[str, Any]:
        """Payload ready to submit to the claim service."""
        return {
            "voucher": {
                "claimant": self.voucher.claimant,
                "tokenContract": self.voucher.asset_contract,
                "tokenId": str(self.voucher.asset_id),
                "amount": str(self.voucher.amount),
                "nonce": str(self.voucher.nonce),
            },
            "signature": self.signature.to_hex(),
        }


class VoucherSigner:
    def __init__(self, private_key: Union[str, bytes], domain: EIP712Domain) -> None:
        self._private_key = parse_private_key(private_key)
        self.domain = domain
        self.address = private_key_to_address(self._private_key)

    def sign(self, voucher: ClaimVoucher) -> SignedVoucher:
        digest = voucher_digest(self.domain.separator(), voucher)
        signature = sign_digest(digest, self._private_key)
        logger.debug(f"Signed voucher for {voucher.claimant} nonce {voucher.nonce}")
        return SignedVoucher(voucher=voucher, signature=signature)

    def sign_claim(
        self,
        asset_contract: str,
        asset_id: int,
        amount: int,
        nonce: int,
        claimant: str | None = None,
    ) -> SignedVoucher:
        """Sign a voucher; the claimant defaults to the signer's own address."""
        voucher = ClaimVoucher(
            claimant=claimant or self.address,
            asset_contract=asset_contract,
            asset_id=asset_id,
            amount=amount,
            nonce=nonce,
        )
        return self.sign(voucher)


__all__ = [
    "SignedVoucher",
    "VoucherSigner",
]
