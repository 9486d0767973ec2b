"""
Claim Orchestration

Composes hashing, proof verification, replay protection and asset dispatch
into atomic claim decisions.

Public API:
- MerkleAirdrop: Proof-based claims against an immutable root
- SignatureAirdrop: Voucher-based claims with per-claimant nonces
- ClaimPhase: validating -> authorized -> settled
- AssetDispatcher / InMemoryVault / dispatch_asset: Asset delivery
- CallContext / CallerResolver: Effective caller resolution
- ClaimEventLog: Settled-claim records
- build_deployment: Wire both modules from configuration
"""

from orchestrator.base import ClaimOrchestrator, ClaimPhase
from orchestrator.callers import (
    CallContext,
    CallerResolver,
    DirectCallerResolver,
    TrustedForwarderResolver,
)
from orchestrator.dispatch import AssetDispatcher, InMemoryVault, dispatch_asset
from orchestrator.events import ClaimEventLog
from orchestrator.guard import ReentrancyGuard
from orchestrator.merkle_airdrop import MerkleAirdrop
from orchestrator.signature_airdrop import SignatureAirdrop
from orchestrator.deployment import AirdropDeployment, build_deployment

__all__ = [
    "ClaimOrchestrator",
    "ClaimPhase",
    "CallContext",
    "CallerResolver",
    "DirectCallerResolver",
    "TrustedForwarderResolver",
    "AssetDispatcher",
    "InMemoryVault",
    "dispatch_asset",
    "ClaimEventLog",
    "ReentrancyGuard",
    "MerkleAirdrop",
    "SignatureAirdrop",
    "AirdropDeployment",
    "build_deployment",
]
