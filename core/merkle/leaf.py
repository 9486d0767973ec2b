"""
Leaf Hashing
Canonical digest of an allocation record, shared by the offline generator
and the claim verifier.

Rule (Hard Contract):
    inner = keccak256(abi.encode(uint256 index, address claimant,
                                 address tokenContract, uint256 tokenId,
                                 uint256 amount))
    leaf  = keccak256(abi.encode(bytes32 inner))

Every field occupies a full 32-byte slot, so no two records share an
encoding. Hashing twice makes a leaf indistinguishable in shape from an
internal node hash, which blocks second-preimage attacks that present an
internal node as a leaf. abi.encode of a single bytes32 is byte-identical to
encodePacked, so either outer convention yields the same leaf.
"""
from __future__ import annotations

from eth_abi import encode

from core.crypto.hashing import keccak256
from core.schemas.allocation import Allocation


LEAF_ABI_TYPES: list[str] = ["uint256", "address", "address", "uint256", "uint256"]


def encode_allocation(allocation: Allocation) -> bytes:
    """ABI-encode the five allocation fields as fixed 32-byte slots (160 bytes)."""
    return encode(
        LEAF_ABI_TYPES,
        [
            allocation.index,
            allocation.claimant,
            allocation.asset_contract,
            allocation.asset_id,
            allocation.amount,
        ],
    )


def hash_leaf(allocation: Allocation) -> bytes:
    """Compute the 32-byte Merkle leaf for an allocation."""
    inner = keccak256(encode_allocation(allocation))
    return keccak256(encode(["bytes32"], [inner]))


__all__ = [
    "LEAF_ABI_TYPES",
    "encode_allocation",
    "hash_leaf",
]
