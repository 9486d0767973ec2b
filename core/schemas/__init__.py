"""
Schemas

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import the data model
and the error taxonomy.
"""

# Data model
from .allocation import (
    UINT256_MAX,
    ZERO_ADDRESS,
    Allocation,
    Asset,
    ClaimModule,
    ClaimRecord,
    ClaimVoucher,
    FungibleAsset,
    NonFungibleAsset,
    asset_from_fields,
    coerce_uint256,
    normalize_address,
)

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    AlreadyClaimedError,
    DistributionError,
    ErrorCodes,
    InvalidAllocationError,
    InvalidNonceError,
    InvalidProofError,
    InvalidSignatureError,
    NotClaimantError,
    ProofTooLongError,
    ReentrantCallError,
    TransferFailedError,
)

__all__ = [
    # Data model
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "Allocation",
    "Asset",
    "ClaimModule",
    "ClaimRecord",
    "ClaimVoucher",
    "FungibleAsset",
    "NonFungibleAsset",
    "asset_from_fields",
    "coerce_uint256",
    "normalize_address",
    # Errors
    "AirdropError",
    "AirdropException",
    "AlreadyClaimedError",
    "DistributionError",
    "ErrorCodes",
    "InvalidAllocationError",
    "InvalidNonceError",
    "InvalidProofError",
    "InvalidSignatureError",
    "NotClaimantError",
    "ProofTooLongError",
    "ReentrantCallError",
    "TransferFailedError",
]
