"""
Merkle Proofs Convenience Wrappers
Thin class-based wrappers around the tree functions.

This module provides:
- MerkleProver: Generate proofs for leaves or allocations
- MerkleVerifier: Verify proofs for leaves or allocations
"""
from __future__ import annotations

from typing import Sequence

from core.merkle.leaf import hash_leaf
from core.merkle.merkle_tree import (
    DEFAULT_MAX_PROOF_DEPTH,
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
)
from core.schemas.allocation import Allocation


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove_allocation(allocations, position=1)
        >>> proof.leaf == hash_leaf(allocations[1])
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], position: int) -> MerkleProof:
        """Generate a proof for the pre-hashed leaf at the given position."""
        return build_merkle_proof(leaves, position)

    @staticmethod
    def prove_allocation(allocations: Sequence[Allocation], position: int) -> MerkleProof:
        """
        Generate a proof for the allocation at the given list position.

        Position is the place in the generator's list, which can differ
        from allocation.index when input rows were rejected.
        """
        leaves = [hash_leaf(a) for a in allocations]
        return build_merkle_proof(leaves, position)

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_allocations(allocations: Sequence[Allocation]) -> bytes:
        return build_merkle_root([hash_leaf(a) for a in allocations])


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof, max_depth: int = DEFAULT_MAX_PROOF_DEPTH) -> bool:
        """Verify a MerkleProof against its own root."""
        return verify_merkle_proof(proof.leaf, proof.siblings, proof.root, max_depth)

    @staticmethod
    def verify_allocation(
        allocation: Allocation,
        siblings: Sequence[bytes],
        root: bytes,
        max_depth: int = DEFAULT_MAX_PROOF_DEPTH,
    ) -> bool:
        """
        Verify an allocation is committed under a root.

        The leaf is always recomputed from the full record.
        """
        return verify_merkle_proof(hash_leaf(allocation), siblings, root, max_depth)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
