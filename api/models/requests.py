"""
API Request Models

Pydantic models for claim submissions. Allocation and voucher bodies reuse
the engine's own schemas, so wire names (tokenContract, tokenId) and uint256
coercion are identical to the off-chain tooling.
"""

from pydantic import BaseModel, ConfigDict, Field

from core.schemas.allocation import Allocation, ClaimVoucher


class MerkleClaimRequest(BaseModel):
    """Request body for POST /claims/merkle."""

    model_config = ConfigDict(extra="forbid")

    allocation: Allocation = Field(
        ...,
        description="The full allocation record; the leaf is recomputed from it",
    )
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests as 0x-prefixed hex, bottom-up",
    )


class SignatureClaimRequest(BaseModel):
    """Request body for POST /claims/signature."""

    model_config = ConfigDict(extra="forbid")

    voucher: ClaimVoucher = Field(..., description="The signed claim voucher")
    signature: str = Field(
        ...,
        description="65-byte r||s||v signature as 0x-prefixed hex",
    )
