"""
secp256k1 Signatures
Recoverable ECDSA signing and signer recovery over 32-byte digests.

Signatures travel as 65 bytes r || s || v with v in {27, 28}. Recovery
follows the EVM ecrecover rules plus the malleability checks applied by
OpenZeppelin's ECDSA library: r and s must be in range and s must be in the
lower half of the curve order.
"""
from __future__ import annotations

from dataclasses import dataclass

from coincurve import PrivateKey, PublicKey
from eth_utils import to_checksum_address

from core.crypto.hashing import DIGEST_SIZE, from_hex, keccak256


SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N = SECP256K1_N // 2
SIGNATURE_SIZE = 65


class SignatureFormatError(ValueError):
    """Raised for signatures that can never recover a valid signer."""


@dataclass(frozen=True)
class Signature:
    r: int
    s: int
    v: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        """Parse r || s || v; a recovery id of 0/1 is normalized to 27/28."""
        if len(data) != SIGNATURE_SIZE:
            raise SignatureFormatError(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(data)}"
            )
        v = data[64]
        if v in (0, 1):
            v += 27
        return cls(
            r=int.from_bytes(data[:32], "big"),
            s=int.from_bytes(data[32:64], "big"),
            v=v,
        )

    @classmethod
    def from_hex(cls, hex_string: str) -> "Signature":
        try:
            data = from_hex(hex_string)
        except ValueError as e:
            raise SignatureFormatError(str(e)) from e
        return cls.from_bytes(data)

    def to_bytes(self) -> bytes:
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.v])

    def to_hex(self) -> str:
        return "0x" + self.to_bytes().hex()


def address_from_public_key(public_key: PublicKey) -> str:
    """Derive the checksummed address: last 20 bytes of keccak(x || y)."""
    uncompressed = public_key.format(compressed=False)
    return to_checksum_address(keccak256(uncompressed[1:])[-20:])


def private_key_to_address(private_key: bytes) -> str:
    return address_from_public_key(PrivateKey(private_key).public_key)


def parse_private_key(value: str | bytes) -> bytes:
    """Accept a raw 32-byte key or a hex string with or without 0x."""
    if isinstance(value, bytes):
        key = value
    else:
        text = value.strip()
        key = from_hex(text if text.startswith("0x") else "0x" + text)
    if len(key) != 32:
        raise ValueError(f"Private key must be 32 bytes, got {len(key)}")
    return key


def sign_digest(digest: bytes, private_key: bytes) -> Signature:
    """
    Sign a 32-byte digest without further hashing.

    libsecp256k1 always emits low-s signatures, so the result passes
    recover_signer's malleability check.
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    raw = PrivateKey(private_key).sign_recoverable(digest, hasher=None)
    return Signature(
        r=int.from_bytes(raw[:32], "big"),
        s=int.from_bytes(raw[32:64], "big"),
        v=raw[64] + 27,
    )


def recover_signer(digest: bytes, signature: Signature) -> str:
    """
    Recover the checksummed address that signed a 32-byte digest.

    Raises:
        SignatureFormatError: If the signature is malformed, malleable or
            does not correspond to any public key
    """
    if len(digest) != DIGEST_SIZE:
        raise SignatureFormatError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    if signature.v not in (27, 28):
        raise SignatureFormatError(f"Invalid recovery byte v={signature.v}")
    if not 0 < signature.r < SECP256K1_N:
        raise SignatureFormatError("Signature r out of range")
    if not 0 < signature.s <= SECP256K1_HALF_N:
        raise SignatureFormatError("Signature s out of range or in upper half order")

    compact = (
        signature.r.to_bytes(32, "big")
        + signature.s.to_bytes(32, "big")
        + bytes([signature.v - 27])
    )
    try:
        public_key = PublicKey.from_signature_and_message(compact, digest, hasher=None)
    except ValueError as e:
        raise SignatureFormatError(f"Public key recovery failed: {e}") from e
    return address_from_public_key(public_key)


__all__ = [
    "SECP256K1_N",
    "SECP256K1_HALF_N",
    "SIGNATURE_SIZE",
    "SignatureFormatError",
    "Signature",
    "address_from_public_key",
    "private_key_to_address",
    "parse_private_key",
    "sign_digest",
    "recover_signer",
]
