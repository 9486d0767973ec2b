"""
CLI Verify Command

Check a claimant's published proof offline, exactly as the claim engine
would: recompute the leaf from the full allocation record and fold the
proof up to the distribution's root.

Usage:
    airdrop verify 0xClaimant [--distribution PATH] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from core.crypto.hashing import to_hex
from core.merkle.leaf import hash_leaf
from core.merkle.merkle_tree import verify_merkle_proof
from core.schemas.errors import ProofTooLongError
from offchain.generator import load_distribution


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0=proof valid, 1=error, 2=proof invalid)
    """
    config = args.cli_config
    path = Path(args.distribution or config.claims.distribution_path)

    try:
        distribution = load_distribution(path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (ValidationError, ValueError) as e:
        print(f"Error: Invalid distribution file {path}: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        allocation, proof = distribution.allocation_for(args.claimant)
    except (KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf = hash_leaf(allocation)
    reason = ""
    try:
        ok = verify_merkle_proof(
            leaf, proof, distribution.root_bytes, config.claims.max_proof_depth
        )
    except ProofTooLongError as e:
        ok = False
        reason = e.message
    logger.info(f"Proof for index {allocation.index} valid={ok}")

    report = {
        "claimant": allocation.claimant,
        "index": allocation.index,
        "leaf": to_hex(leaf),
        "merkleRoot": distribution.merkle_root,
        "proofLength": len(proof),
        "valid": ok,
    }
    if reason:
        report["reason"] = reason

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        for key, value in report.items():
            if isinstance(value, bool):
                value = str(value).lower()
            print(f"{key}: {value}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
