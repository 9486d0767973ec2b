"""
API Response Models

Pydantic models for API response serialization. uint256 values are
rendered as decimal strings.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "airdrop-claims-api"
    version: str = "0.1.0"
    deployment_loaded: bool = Field(default=False, alias="deploymentLoaded")

    model_config = ConfigDict(populate_by_name=True)


class ClaimResponse(BaseModel):
    """Response for a settled claim."""

    ok: bool = Field(default=True)
    record: dict[str, Any] = Field(..., description="The emitted claim record")


class ClaimStatusResponse(BaseModel):
    """Response for GET /claims/merkle/{index}."""

    index: str = Field(..., description="Allocation index")
    claimed: bool = Field(..., description="Whether the index has been claimed")


class NonceResponse(BaseModel):
    """Response for GET /nonces/{address}."""

    address: str = Field(..., description="Checksummed claimant address")
    nonce: str = Field(..., description="Nonce the next voucher must carry")


class DomainResponse(BaseModel):
    """Response for GET /domain."""

    name: str
    version: str
    chain_id: int = Field(..., alias="chainId")
    verifying_contract: str = Field(..., alias="verifyingContract")
    separator: str = Field(..., description="EIP-712 domain separator")
    merkle_root: str = Field(..., alias="merkleRoot")
    max_proof_depth: int = Field(..., alias="maxProofDepth")

    model_config = ConfigDict(populate_by_name=True)


class EventsResponse(BaseModel):
    """Response for GET /events."""

    count: int = Field(..., description="Number of records returned")
    events: list[dict[str, Any]] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = Field(default=False)
    error: ErrorDetail
