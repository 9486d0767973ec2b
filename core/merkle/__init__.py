"""
Merkle Commitments
Sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- hash_leaf: Canonical allocation leaf (double keccak over abi.encode)
- build_merkle_root / build_merkle_proof: Offline generator side
- verify_merkle_proof: Depth-bounded verifier used by claims

Usage:
    from core.merkle import hash_leaf, build_merkle_root, build_merkle_proof, verify_merkle_proof

    leaves = [hash_leaf(a) for a in allocations]
    root = build_merkle_root(leaves)
    proof = build_merkle_proof(leaves, position=2)
    assert verify_merkle_proof(proof.leaf, proof.siblings, root)
"""
from .leaf import (
    LEAF_ABI_TYPES,
    encode_allocation,
    hash_leaf,
)

from .merkle_tree import (
    DEFAULT_MAX_PROOF_DEPTH,
    MerkleProof,
    merkle_parent,
    build_merkle_levels,
    build_merkle_root,
    build_merkle_proof,
    process_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Leaves
    "LEAF_ABI_TYPES",
    "encode_allocation",
    "hash_leaf",
    # Core types
    "MerkleProof",
    "DEFAULT_MAX_PROOF_DEPTH",
    # Core functions
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
