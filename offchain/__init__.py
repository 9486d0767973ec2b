"""
Off-chain tooling: CSV ingestion, distribution generation and voucher
signing. Shares its hashing code with the claim engine.
"""
from offchain.ingest import IngestResult, load_allocations_csv, parse_allocations_csv
from offchain.generator import (
    ClaimEntry,
    Distribution,
    build_distribution,
    load_distribution,
    save_distribution,
)
from offchain.signer import SignedVoucher, VoucherSigner

__all__ = [
    "IngestResult",
    "load_allocations_csv",
    "parse_allocations_csv",
    "ClaimEntry",
    "Distribution",
    "build_distribution",
    "load_distribution",
    "save_distribution",
    "SignedVoucher",
    "VoucherSigner",
]
