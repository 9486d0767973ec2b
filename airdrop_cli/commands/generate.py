"""
CLI Generate Command

Build the Merkle distribution from an allocations CSV:
- ingest and validate rows (bad rows are reported, not fatal)
- compute leaves, root and per-claimant proofs
- write the distribution JSON

Usage:
    airdrop generate allocations.csv [--out PATH] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.schemas.errors import DistributionError
from offchain.generator import build_distribution, save_distribution
from offchain.ingest import load_allocations_csv


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def print_row_errors(errors: list[str], limit: int) -> None:
    """Print up to `limit` row errors, then a count of the rest."""
    print(f"Found {len(errors)} invalid row(s):", file=sys.stderr)
    for err in errors[:limit]:
        print(f"  ✗ {err}", file=sys.stderr)
    if len(errors) > limit:
        print(f"  ... and {len(errors) - limit} more", file=sys.stderr)


def generate_cmd(args: Namespace) -> int:
    """
    Execute the generate command.

    Returns:
        Exit code
    """
    config = args.cli_config
    csv_path = Path(args.csv_path)
    out_path = Path(args.out) if args.out else config.generator.output_path

    try:
        result = load_allocations_csv(csv_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if result.errors:
        print_row_errors(result.errors, config.generator.max_reported_errors)

    try:
        distribution = build_distribution(result.allocations)
    except DistributionError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    save_distribution(distribution, out_path)

    if args.json:
        print(json.dumps({
            "merkleRoot": distribution.merkle_root,
            "claims": len(distribution.claims),
            "rejected": len(result.errors),
            "output": str(out_path),
        }, indent=2))
    else:
        print(f"merkle_root: {distribution.merkle_root}")
        print(f"claims: {len(distribution.claims)}")
        print(f"output: {out_path}")
    return EXIT_SUCCESS
