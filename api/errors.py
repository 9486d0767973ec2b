"""
API Error Handling

Standardized error responses. Claim rejections raised by the engine are
mapped to HTTP statuses by error code.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import AirdropException, ErrorCodes


logger = logging.getLogger(__name__)


# Codes not listed map to 400
CLAIM_ERROR_STATUS: dict[str, int] = {
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.INVALID_NONCE: 409,
    ErrorCodes.NOT_CLAIMANT: 403,
    ErrorCodes.INVALID_SIGNATURE: 403,
    ErrorCodes.TRANSFER_FAILED: 502,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class NotConfiguredError(APIError):
    """The service has no deployment to serve."""

    def __init__(self, message: str = "No airdrop deployment configured"):
        super().__init__(
            code="NOT_CONFIGURED",
            message=message,
            status_code=503,
        )


def claim_error_status(code: str) -> int:
    return CLAIM_ERROR_STATUS.get(code, 400)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def claim_error_handler(request: Request, exc: AirdropException) -> JSONResponse:
    """Handle claim rejections from the engine."""
    return JSONResponse(
        status_code=claim_error_status(exc.code),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
