"""
Claims Error Taxonomy

Purpose: Standard error taxonomy for claim authorization.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every claim error is a rejected attempt: nothing is retried internally,
no state is left behind, and the caller may resubmit with corrected input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the claim engine."""

    # Replay protection
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    INVALID_NONCE = "INVALID_NONCE"

    # Merkle proofs
    PROOF_TOO_LONG = "PROOF_TOO_LONG"
    INVALID_PROOF = "INVALID_PROOF"

    # Authorization
    NOT_CLAIMANT = "NOT_CLAIMANT"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    REENTRANT_CALL = "REENTRANT_CALL"

    # Allocation and dispatch
    INVALID_ALLOCATION = "INVALID_ALLOCATION"
    TRANSFER_FAILED = "TRANSFER_FAILED"

    # Offline distribution tooling
    DISTRIBUTION_ERROR = "DISTRIBUTION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used to pass claim rejections across the API boundary without
    exceptions, enabling serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.ALREADY_CLAIMED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the identical attempt can be retried",
    )

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raised exception."""
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all claim engine errors.

    Carries structured error information and can be converted to/from
    AirdropError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class AlreadyClaimedError(AirdropException):
    """Raised when an allocation index has already been claimed."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(
            message=f"Allocation {index} has already been claimed",
            code=ErrorCodes.ALREADY_CLAIMED,
            details={"index": str(index)},
        )


class ProofTooLongError(AirdropException):
    """Raised when a proof exceeds the configured maximum depth."""

    def __init__(self, length: int, max_depth: int) -> None:
        self.length = length
        self.max_depth = max_depth
        super().__init__(
            message=f"Proof has {length} elements, maximum is {max_depth}",
            code=ErrorCodes.PROOF_TOO_LONG,
            details={"length": length, "max_depth": max_depth},
        )


class InvalidProofError(AirdropException):
    """Raised when a proof does not lead to the commitment root."""

    def __init__(self, index: int | None = None, details: dict[str, Any] | None = None) -> None:
        self.index = index
        full_details = details or {}
        if index is not None:
            full_details["index"] = str(index)
        super().__init__(
            message="Merkle proof does not match the commitment root",
            code=ErrorCodes.INVALID_PROOF,
            details=full_details,
        )


class NotClaimantError(AirdropException):
    """Raised when the effective caller is not the allocation's claimant."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            message=f"Caller {actual} is not the claimant {expected}",
            code=ErrorCodes.NOT_CLAIMANT,
            details={"expected": expected, "actual": actual},
        )


class InvalidAllocationError(AirdropException):
    """Raised for a fungible allocation with a zero amount."""

    def __init__(self, message: str = "Fungible allocation has zero amount", details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ALLOCATION,
            details=details,
        )


class TransferFailedError(AirdropException):
    """Raised when the asset dispatcher reports a failed transfer."""

    def __init__(
        self,
        message: str,
        asset_contract: str | None = None,
        recipient: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if asset_contract:
            full_details["asset_contract"] = asset_contract
        if recipient:
            full_details["recipient"] = recipient
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSFER_FAILED,
            details=full_details,
        )


class InvalidNonceError(AirdropException):
    """Raised when a voucher nonce does not equal the claimant's counter."""

    def __init__(self, expected: int, provided: int) -> None:
        self.expected = expected
        self.provided = provided
        super().__init__(
            message=f"Invalid nonce: expected {expected}, got {provided}",
            code=ErrorCodes.INVALID_NONCE,
            details={"expected": str(expected), "provided": str(provided)},
        )


class InvalidSignatureError(AirdropException):
    """Raised when a voucher was not signed by its declared claimant."""

    def __init__(self, expected: str, recovered: str, reason: str | None = None) -> None:
        self.expected = expected
        self.recovered = recovered
        details: dict[str, Any] = {"expected": expected, "recovered": recovered}
        if reason:
            details["reason"] = reason
        super().__init__(
            message=f"Signature recovered {recovered}, expected {expected}",
            code=ErrorCodes.INVALID_SIGNATURE,
            details=details,
        )


class ReentrantCallError(AirdropException):
    """Raised when a claim entry point is re-entered during dispatch."""

    def __init__(self, entry_point: str) -> None:
        self.entry_point = entry_point
        super().__init__(
            message=f"Reentrant call to {entry_point}",
            code=ErrorCodes.REENTRANT_CALL,
            details={"entry_point": entry_point},
        )


class DistributionError(AirdropException):
    """Raised when the offline generator cannot produce a distribution."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DISTRIBUTION_ERROR,
            details=details,
        )
