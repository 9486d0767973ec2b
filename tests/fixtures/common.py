"""
Common test fixtures shared by all modules.

Provides well-known keys and addresses plus factory functions for:
- Allocation / ClaimVoucher
- Distributions (leaves, root and proofs)
- Funded in-memory vaults and wired claim modules

Keys are the standard Hardhat development accounts, so derived addresses
double as known-answer vectors.
"""

from typing import Optional, Sequence

from core.crypto.typed_data import EIP712Domain
from core.schemas.allocation import Allocation, ClaimVoucher
from core.state.journal import StateJournal
from offchain.generator import Distribution, build_distribution
from orchestrator.callers import CallerResolver
from orchestrator.dispatch import InMemoryVault
from orchestrator.events import ClaimEventLog
from orchestrator.merkle_airdrop import MerkleAirdrop
from orchestrator.signature_airdrop import SignatureAirdrop


# =============================================================================
# Known keys and addresses
# =============================================================================

ALICE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ALICE = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

BOB_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
BOB = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

CAROL_KEY = "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a"
CAROL = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

# Digit-only addresses are their own checksum form
TOKEN = "0x1111111111111111111111111111111111111111"
NFT = "0x2222222222222222222222222222222222222222"
CUSTODIAN = "0x3333333333333333333333333333333333333333"
FORWARDER = "0x4444444444444444444444444444444444444444"
VERIFYING_CONTRACT = "0x5555555555555555555555555555555555555555"

ONE_TOKEN = 10**18


def address_for(n: int) -> str:
    """A distinct lowercase address for bulk claimants."""
    return f"0x{n + 1:040x}"


# =============================================================================
# Records
# =============================================================================

def make_allocation(
    index: int = 0,
    claimant: str = ALICE,
    asset_contract: str = TOKEN,
    asset_id: int = 0,
    amount: int = 100 * ONE_TOKEN,
) -> Allocation:
    return Allocation(
        index=index,
        claimant=claimant,
        asset_contract=asset_contract,
        asset_id=asset_id,
        amount=amount,
    )


def make_voucher(
    claimant: str = ALICE,
    asset_contract: str = TOKEN,
    asset_id: int = 0,
    amount: int = 100,
    nonce: int = 0,
) -> ClaimVoucher:
    return ClaimVoucher(
        claimant=claimant,
        asset_contract=asset_contract,
        asset_id=asset_id,
        amount=amount,
        nonce=nonce,
    )


def make_scenario_allocations() -> list[Allocation]:
    """
    Three records: 100 fungible tokens to Alice, NFT #42 to Bob, 50 fungible
    tokens to Carol.
    """
    return [
        make_allocation(0, ALICE, TOKEN, 0, 100 * ONE_TOKEN),
        make_allocation(1, BOB, NFT, 42, 1),
        make_allocation(2, CAROL, TOKEN, 0, 50 * ONE_TOKEN),
    ]


def make_bulk_allocations(count: int) -> list[Allocation]:
    return [
        make_allocation(i, address_for(i), TOKEN, 0, (i + 1) * ONE_TOKEN)
        for i in range(count)
    ]


def make_domain(chain_id: int = 31337, verifying_contract: str = VERIFYING_CONTRACT) -> EIP712Domain:
    return EIP712Domain(chain_id=chain_id, verifying_contract=verifying_contract)


# =============================================================================
# Deployments
# =============================================================================

def make_vault(
    journal: Optional[StateJournal] = None,
    fungible: int = 1_000 * ONE_TOKEN,
    nft_ids: Sequence[int] = (42,),
) -> InMemoryVault:
    vault = InMemoryVault(CUSTODIAN, journal=journal)
    if fungible:
        vault.fund(TOKEN, fungible)
    for token_id in nft_ids:
        vault.mint(NFT, token_id)
    return vault


def make_merkle_airdrop(
    allocations: Optional[Sequence[Allocation]] = None,
    *,
    caller_resolver: Optional[CallerResolver] = None,
    max_proof_depth: int = 32,
    fungible: int = 1_000 * ONE_TOKEN,
) -> tuple[MerkleAirdrop, InMemoryVault, Distribution]:
    """Build a distribution and a MerkleAirdrop serving it from a funded vault."""
    if allocations is None:
        allocations = make_scenario_allocations()
    distribution = build_distribution(list(allocations))
    journal = StateJournal()
    vault = make_vault(journal, fungible=fungible)
    airdrop = MerkleAirdrop(
        distribution.root_bytes,
        vault,
        caller_resolver=caller_resolver,
        max_proof_depth=max_proof_depth,
        journal=journal,
        events=ClaimEventLog(journal),
    )
    return airdrop, vault, distribution


def make_signature_airdrop(
    domain: Optional[EIP712Domain] = None,
    fungible: int = 1_000 * ONE_TOKEN,
) -> tuple[SignatureAirdrop, InMemoryVault]:
    journal = StateJournal()
    vault = make_vault(journal, fungible=fungible)
    airdrop = SignatureAirdrop(domain or make_domain(), vault, journal=journal)
    return airdrop, vault
