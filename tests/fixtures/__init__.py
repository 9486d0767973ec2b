"""
Test fixtures package for the airdrop claim engine tests.

- common.py: Known keys/addresses and factories for allocations,
  vouchers, distributions, vaults and wired claim modules

Usage:
    from fixtures.common import ALICE, make_merkle_airdrop

    def test_something():
        airdrop, vault, distribution = make_merkle_airdrop()
"""

from .common import (
    make_allocation,
    make_voucher,
    make_scenario_allocations,
    make_bulk_allocations,
    make_domain,
    make_vault,
    make_merkle_airdrop,
    make_signature_airdrop,
)

__all__ = [
    "make_allocation",
    "make_voucher",
    "make_scenario_allocations",
    "make_bulk_allocations",
    "make_domain",
    "make_vault",
    "make_merkle_airdrop",
    "make_signature_airdrop",
]
