"""API request and response models."""

from api.models.requests import MerkleClaimRequest, SignatureClaimRequest
from api.models.responses import (
    HealthResponse,
    ClaimResponse,
    ClaimStatusResponse,
    NonceResponse,
    DomainResponse,
    EventsResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "MerkleClaimRequest",
    "SignatureClaimRequest",
    "HealthResponse",
    "ClaimResponse",
    "ClaimStatusResponse",
    "NonceResponse",
    "DomainResponse",
    "EventsResponse",
    "ErrorDetail",
    "ErrorResponse",
]
