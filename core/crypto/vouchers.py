"""
Voucher Verification

Checks that a claim voucher was signed by the claimant it names. The
recovered signer is always compared with voucher.claimant, never with the
party that submitted the claim, so a relayer can submit on the claimant's
behalf but can never redirect the asset.
"""
from __future__ import annotations

import logging

from core.crypto.hashing import DIGEST_SIZE
from core.crypto.signatures import Signature, SignatureFormatError, recover_signer
from core.crypto.typed_data import voucher_digest
from core.schemas.allocation import ZERO_ADDRESS, ClaimVoucher
from core.schemas.errors import InvalidSignatureError


logger = logging.getLogger(__name__)


class VoucherVerifier:
    """Recovers voucher signers against a fixed domain separator."""

    def __init__(self, domain_separator: bytes) -> None:
        if len(domain_separator) != DIGEST_SIZE:
            raise ValueError(f"Domain separator must be {DIGEST_SIZE} bytes")
        self._domain_separator = bytes(domain_separator)

    @property
    def domain_separator(self) -> bytes:
        return self._domain_separator

    def digest(self, voucher: ClaimVoucher) -> bytes:
        return voucher_digest(self._domain_separator, voucher)

    def verify(self, voucher: ClaimVoucher, signature: Signature | bytes | str) -> str:
        """
        Recover the signer and require it to be the voucher's claimant.

        Args:
            voucher: The signed payload
            signature: Signature object, 65 raw bytes or 0x hex

        Returns:
            The recovered (checksummed) signer address

        Raises:
            InvalidSignatureError: If the signature is malformed or was made
                by anyone other than voucher.claimant. A malformed signature
                reports the zero address as recovered.
        """
        try:
            parsed = _coerce_signature(signature)
            recovered = recover_signer(self.digest(voucher), parsed)
        except SignatureFormatError as e:
            logger.debug(f"Malformed signature for {voucher.claimant}: {e}")
            raise InvalidSignatureError(voucher.claimant, ZERO_ADDRESS, reason=str(e)) from e

        if recovered != voucher.claimant:
            raise InvalidSignatureError(voucher.claimant, recovered)
        return recovered


def _coerce_signature(signature: Signature | bytes | str) -> Signature:
    if isinstance(signature, Signature):
        return signature
    if isinstance(signature, (bytes, bytearray)):
        return Signature.from_bytes(bytes(signature))
    return Signature.from_hex(signature)


__all__ = [
    "VoucherVerifier",
]
