"""
Distribution Generator

Builds the commitment root and per-claimant proofs for a validated list of
allocations, and reads/writes the distribution JSON consumed by claimants
and by the claim service.

Output format:
    {
      "merkleRoot": "0x...",
      "claims": {
        "<claimant>": {
          "index": 0,
          "tokenContract": "0x...",
          "tokenId": "0",
          "amount": "100000000000000000000",
          "proof": ["0x...", ...]
        }
      }
    }

Leaves come from core.merkle.hash_leaf and the tree from
core.merkle.build_merkle_levels, the exact functions the claim verifier
uses, so offline proofs and on-line verification cannot drift apart.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import digest_from_hex, to_hex
from core.merkle.leaf import hash_leaf
from core.merkle.merkle_tree import build_merkle_proof, build_merkle_root
from core.schemas.allocation import Allocation, coerce_uint256, normalize_address
from core.schemas.errors import DistributionError


logger = logging.getLogger(__name__)


class ClaimEntry(BaseModel):
    """One claimant's allocation and proof as published to claimants."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    index: int
    token_contract: str = Field(..., alias="tokenContract")
    token_id: str = Field(..., alias="tokenId")
    amount: str
    proof: list[str] = Field(default_factory=list)

    @field_validator("token_id", "amount", mode="before")
    @classmethod
    def _uint_as_string(cls, v: Any) -> str:
        return str(coerce_uint256(v))

    @field_validator("proof")
    @classmethod
    def _check_proof(cls, v: list[str]) -> list[str]:
        for element in v:
            digest_from_hex(element)
        return v

    def to_allocation(self, claimant: str) -> Allocation:
        return Allocation(
            index=self.index,
            claimant=claimant,
            asset_contract=self.token_contract,
            asset_id=self.token_id,
            amount=self.amount,
        )

    def proof_bytes(self) -> list[bytes]:
        return [digest_from_hex(p) for p in self.proof]


class Distribution(BaseModel):
    """A complete distribution: root plus every claimant's entry."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    merkle_root: str = Field(..., alias="merkleRoot")
    claims: dict[str, ClaimEntry] = Field(default_factory=dict)

    @field_validator("merkle_root")
    @classmethod
    def _check_root(cls, v: str) -> str:
        digest_from_hex(v)
        return v.lower()

    @property
    def root_bytes(self) -> bytes:
        return digest_from_hex(self.merkle_root)

    def entry_for(self, claimant: str) -> ClaimEntry:
        """
        Look up a claimant's entry, ignoring address case.

        Raises:
            KeyError: If the claimant is not in the distribution
        """
        wanted = normalize_address(claimant)
        for address, entry in self.claims.items():
            if address.lower() == wanted.lower():
                return entry
        raise KeyError(f"Address not in claims: {wanted}")

    def allocation_for(self, claimant: str) -> tuple[Allocation, list[bytes]]:
        """Rebuild the Allocation and decoded proof for a claimant."""
        entry = self.entry_for(claimant)
        return entry.to_allocation(normalize_address(claimant)), entry.proof_bytes()

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def build_distribution(allocations: Sequence[Allocation]) -> Distribution:
    """
    Build the tree over allocations in input order.

    Raises:
        DistributionError: If there are no allocations or a claimant repeats
    """
    if not allocations:
        raise DistributionError("No valid allocations found. Aborting.")

    seen: set[str] = set()
    for allocation in allocations:
        key = allocation.claimant.lower()
        if key in seen:
            raise DistributionError(
                f"Duplicate claimant address: {allocation.claimant}",
                details={"claimant": allocation.claimant},
            )
        seen.add(key)

    leaves = [hash_leaf(a) for a in allocations]
    root = build_merkle_root(leaves)

    claims: dict[str, ClaimEntry] = {}
    for position, allocation in enumerate(allocations):
        proof = build_merkle_proof(leaves, position)
        claims[allocation.claimant] = ClaimEntry(
            index=allocation.index,
            token_contract=allocation.asset_contract,
            token_id=str(allocation.asset_id),
            amount=str(allocation.amount),
            proof=[to_hex(s) for s in proof.siblings],
        )

    logger.info(f"Merkle root {to_hex(root)} over {len(allocations)} allocation(s)")
    return Distribution(merkle_root=to_hex(root), claims=claims)


def save_distribution(distribution: Distribution, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(distribution.to_json_dict(), indent=2), encoding="utf-8")
    logger.info(f"Distribution saved to: {path}")
    return path


def load_distribution(path: str | Path) -> Distribution:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Distribution file not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return Distribution.model_validate(data)


__all__ = [
    "ClaimEntry",
    "Distribution",
    "build_distribution",
    "save_distribution",
    "load_distribution",
]
