"""
CLI command modules.
"""

from airdrop_cli.commands import generate, sign, verify

__all__ = ["generate", "sign", "verify"]
