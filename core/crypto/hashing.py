"""
Hashing Utilities
Keccak-256 hashing and hex helpers shared by the leaf hasher, the Merkle
verifier and the EIP-712 voucher digest.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM hash, not NIST SHA3-256)
- Sorted-pair hashing for Merkle parents
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair hashing orders its operands numerically, so callers never track
  left/right position
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


# Every digest in the system is a 32-byte word
DIGEST_SIZE = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith(("0x", "0X")):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """Decode a 0x-prefixed 32-byte digest, rejecting any other length."""
    data = from_hex(hex_string)
    if len(data) != DIGEST_SIZE:
        raise ValueError(f"Expected a {DIGEST_SIZE}-byte digest, got {len(data)} bytes")
    return data


def hash_concat(left: bytes, right: bytes) -> bytes:
    """Hash the concatenation of two byte sequences: keccak256(left + right)."""
    return keccak256(left + right)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two 32-byte digests after ordering them as unsigned integers.

    For equal-length big-endian values, byte-wise comparison is the same as
    numeric comparison, so the smaller value is always hashed first.

    Args:
        a: 32-byte digest
        b: 32-byte digest

    Returns:
        keccak256(min(a, b) + max(a, b))

    Raises:
        ValueError: If either operand is not exactly 32 bytes
    """
    if len(a) != DIGEST_SIZE or len(b) != DIGEST_SIZE:
        raise ValueError(
            f"Pair hashing requires {DIGEST_SIZE}-byte operands, "
            f"got {len(a)} and {len(b)}"
        )
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "hash_concat",
    "hash_sorted_pair",
]
