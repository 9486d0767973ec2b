"""
Deployment Wiring

Builds both claim modules from a RuntimeConfig over one shared journal, so
a claim in one module that triggers a hook calling into the other behaves
like nested calls in a single transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.config.runtime import RuntimeConfig
from core.crypto.hashing import digest_from_hex, to_hex
from core.state.journal import StateJournal

from orchestrator.callers import CallerResolver, DirectCallerResolver, TrustedForwarderResolver
from orchestrator.dispatch import InMemoryVault
from orchestrator.events import ClaimEventLog
from orchestrator.merkle_airdrop import MerkleAirdrop
from orchestrator.signature_airdrop import SignatureAirdrop


logger = logging.getLogger(__name__)


@dataclass
class AirdropDeployment:
    merkle: MerkleAirdrop
    signature: SignatureAirdrop
    vault: InMemoryVault
    events: ClaimEventLog
    journal: StateJournal
    caller_resolver: CallerResolver


def build_deployment(
    config: RuntimeConfig,
    merkle_root: Optional[bytes] = None,
    custodian: Optional[str] = None,
) -> AirdropDeployment:
    """
    Wire a deployment.

    The root comes from the argument, else config.claims.merkle_root.
    The vault custodian defaults to the domain's verifying contract.

    Raises:
        ValueError: If no commitment root is available
    """
    if merkle_root is None:
        if not config.claims.merkle_root:
            raise ValueError("No Merkle root configured")
        merkle_root = digest_from_hex(config.claims.merkle_root)

    domain = config.domain.to_domain()
    journal = StateJournal()
    events = ClaimEventLog(journal)
    vault = InMemoryVault(custodian or domain.verifying_contract, journal=journal)

    resolver: CallerResolver
    if config.claims.trusted_forwarder:
        resolver = TrustedForwarderResolver(config.claims.trusted_forwarder)
    else:
        resolver = DirectCallerResolver()

    merkle = MerkleAirdrop(
        merkle_root,
        vault,
        caller_resolver=resolver,
        max_proof_depth=config.claims.max_proof_depth,
        journal=journal,
        events=events,
    )
    signature = SignatureAirdrop(domain, vault, journal=journal, events=events)

    logger.info(
        f"Deployment ready: root={to_hex(merkle_root)} "
        f"domain={to_hex(signature.domain_separator)} chain_id={domain.chain_id}"
    )
    return AirdropDeployment(
        merkle=merkle,
        signature=signature,
        vault=vault,
        events=events,
        journal=journal,
        caller_resolver=resolver,
    )


__all__ = [
    "AirdropDeployment",
    "build_deployment",
]
