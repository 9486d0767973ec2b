"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli generate <csv> [--out PATH] [--json]
    python -m airdrop_cli sign --token-contract ADDR [--token-id N] [--amount N] --nonce N [--claimant ADDR] [--key HEX]
    python -m airdrop_cli verify <claimant> [--distribution PATH] [--json]
    python -m airdrop_cli domain [--chain-id N] [--verifying-contract ADDR]
    python -m airdrop_cli config --init|--show

Environment Variables:
    AIRDROP_CHAIN_ID            EIP-712 chain id (default: 31337)
    AIRDROP_VERIFYING_CONTRACT  EIP-712 verifying contract
    AIRDROP_SIGNER_KEY          Voucher signing key (hex)
    AIRDROP_OUTPUT_DIR          Distribution output directory (default: dist)
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_cli.commands import generate, sign, verify
from airdrop_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_domain_overrides(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chain-id",
        type=int,
        default=None,
        help="EIP-712 chain id (overrides config)",
    )
    parser.add_argument(
        "--verifying-contract",
        type=str,
        default=None,
        help="EIP-712 verifying contract (overrides config)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Airdrop CLI - Generate Merkle distributions, sign vouchers and check proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- generate command ---
    generate_parser = subparsers.add_parser(
        "generate",
        help="Build a Merkle distribution from an allocations CSV",
        description="Validate allocations, compute the root and write per-claimant proofs.",
    )
    generate_parser.add_argument(
        "csv_path",
        type=str,
        help="CSV with header claimant,tokenContract,tokenId,amount",
    )
    generate_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path (default: <output_dir>/<output_file> from config)",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    generate_parser.set_defaults(func=generate.generate_cmd)

    # --- sign command ---
    sign_parser = subparsers.add_parser(
        "sign",
        help="Sign an EIP-712 claim voucher",
        description="Sign a voucher for the configured domain and print it as JSON.",
    )
    sign_parser.add_argument("--token-contract", type=str, required=True, help="Token contract address")
    sign_parser.add_argument("--token-id", type=int, default=0, help="Token id (0 for fungible)")
    sign_parser.add_argument("--amount", type=int, default=0, help="Fungible amount")
    sign_parser.add_argument("--nonce", type=int, required=True, help="Claimant's current nonce")
    sign_parser.add_argument("--claimant", type=str, default=None, help="Claimant (default: signer)")
    sign_parser.add_argument("--key", type=str, default=None, help="Signing key (default: AIRDROP_SIGNER_KEY)")
    _add_domain_overrides(sign_parser)
    sign_parser.set_defaults(func=sign.sign_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a claimant's proof offline",
        description="Recompute the claimant's leaf and verify the published proof against the root.",
    )
    verify_parser.add_argument("claimant", type=str, help="Claimant address")
    verify_parser.add_argument(
        "--distribution", "-d",
        type=str,
        default=None,
        help="Distribution JSON (default: claims.distribution_path from config)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- domain command ---
    domain_parser = subparsers.add_parser(
        "domain",
        help="Show the EIP-712 domain and separator",
    )
    _add_domain_overrides(domain_parser)
    domain_parser.set_defaults(func=domain_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def domain_cmd(args: argparse.Namespace) -> int:
    """Handle domain command."""
    domain = args.cli_config.domain.to_domain()
    print(json.dumps(domain.to_dict(), indent=2))
    return EXIT_SUCCESS


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def _apply_domain_overrides(args: argparse.Namespace) -> None:
    config = args.cli_config
    if getattr(args, "chain_id", None) is not None:
        config.domain.chain_id = args.chain_id
    if getattr(args, "verifying_contract", None) is not None:
        config.domain.verifying_contract = args.verifying_contract


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config
    _apply_domain_overrides(args)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
