"""
Merkle Tree Implementation
Sorted-pair Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic root computation over allocation leaves
- Proof generation for any leaf position (offline generator side)
- Depth-bounded proof verification (claim side)

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: see core.merkle.leaf.hash_leaf
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Operands are ordered numerically, so proofs carry no direction bits
3. Odd node: the last node of an odd-sized level is promoted unchanged
   to the next level and contributes no sibling at that level
4. Empty leaves: rejected, a distribution needs at least one allocation
5. Single leaf: root = leaf, proof is empty

Determinism Notes:
- Leaf order is the generator's input order; this module never sorts leaves
- Verification rejects proofs longer than max_depth before hashing anything
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import hash_sorted_pair
from core.schemas.errors import ProofTooLongError


# Bound on proof length; 32 levels covers more than four billion leaves
DEFAULT_MAX_PROOF_DEPTH = 32


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        position: 0-based position of the leaf in the generator's leaf list
        siblings: Sibling hashes from bottom to top of the tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    position: int
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"Leaf position must be non-negative, got {self.position}")


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """Compute the parent hash of two child nodes using the sorted-pair rule."""
    return hash_sorted_pair(left, right)


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first and root last.

    Example: [a, b, c] -> [[a, b, c], [parent(a, b), c], [parent(parent(a, b), c)]]

    Raises:
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot build a Merkle tree from an empty leaf list")

    levels: list[list[bytes]] = [list(leaves)]
    current_level = levels[0]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(merkle_parent(current_level[i], current_level[i + 1]))
        # Promote the unpaired last node
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])
        levels.append(next_level)
        current_level = next_level

    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """Build the 32-byte root for a non-empty sequence of leaf hashes."""
    return build_merkle_levels(leaves)[-1][0]


def build_merkle_proof(leaves: Sequence[bytes], position: int) -> MerkleProof:
    """
    Generate a proof for the leaf at the given position.

    Raises:
        IndexError: If position is out of range
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    if position < 0 or position >= len(leaves):
        raise IndexError(
            f"Leaf position {position} out of range for {len(leaves)} leaves"
        )

    levels = build_merkle_levels(leaves)
    siblings: list[bytes] = []
    current = position

    for level in levels[:-1]:
        sibling = current ^ 1
        # A promoted node has no sibling at this level
        if sibling < len(level):
            siblings.append(level[sibling])
        current //= 2

    return MerkleProof(
        leaf=leaves[position],
        position=position,
        siblings=siblings,
        root=levels[-1][0],
    )


def process_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """Fold the siblings into the leaf and return the implied root."""
    computed = leaf
    for sibling in siblings:
        computed = merkle_parent(computed, sibling)
    return computed


def verify_merkle_proof(
    leaf: bytes,
    siblings: Sequence[bytes],
    root: bytes,
    max_depth: int = DEFAULT_MAX_PROOF_DEPTH,
) -> bool:
    """
    Verify that a leaf is included under a root.

    The length bound is enforced before any hashing so adversarially long
    proofs cost nothing to reject.

    Returns:
        True if the folded proof equals the root, False otherwise

    Raises:
        ProofTooLongError: If len(siblings) > max_depth
    """
    if len(siblings) > max_depth:
        raise ProofTooLongError(len(siblings), max_depth)
    try:
        return process_proof(leaf, siblings) == root
    except ValueError:
        # Malformed sibling (wrong width) can never fold to the root
        return False


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of proof elements needed for the deepest leaf of a tree.

    0 for a single leaf, ceil(log2(n)) otherwise.
    """
    if num_leaves <= 1:
        return 0
    return (num_leaves - 1).bit_length()


__all__ = [
    "DEFAULT_MAX_PROOF_DEPTH",
    "MerkleProof",
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
