"""
Airdrop CLI

Command-line interface for the airdrop claim engine's off-chain tooling.

Usage:
    python -m airdrop_cli generate allocations.csv --out dist/airdrop-data.json
    python -m airdrop_cli sign --token-contract 0x... --amount 100 --nonce 0
    python -m airdrop_cli verify 0xClaimant --distribution dist/airdrop-data.json
    python -m airdrop_cli domain
"""

__version__ = "0.1.0"
