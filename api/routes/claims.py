"""
Claim Routes

POST /claims/merkle     - claim an allocation with its inclusion proof
POST /claims/signature  - claim with a signed voucher
GET  /claims/merkle/{index} - claimed status of an allocation index

The submitter is identified by the X-Caller-Address header. A relayer may
add X-Forwarded-Sender, which only counts when the relayer is the
configured trusted forwarder.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header

from api.deps import get_deployment
from api.errors import InvalidRequestError
from api.models.requests import MerkleClaimRequest, SignatureClaimRequest
from api.models.responses import ClaimResponse, ClaimStatusResponse
from orchestrator.callers import CallContext
from orchestrator.deployment import AirdropDeployment


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/claims", tags=["claims"])


def _call_context(submitter: Optional[str], forwarded_sender: Optional[str]) -> CallContext:
    if not submitter:
        raise InvalidRequestError("Missing X-Caller-Address header")
    try:
        return CallContext(submitter=submitter, forwarded_sender=forwarded_sender or None)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e


@router.post("/merkle", response_model=ClaimResponse)
def claim_merkle(
    request: MerkleClaimRequest,
    x_caller_address: Optional[str] = Header(default=None),
    x_forwarded_sender: Optional[str] = Header(default=None),
    deployment: AirdropDeployment = Depends(get_deployment),
) -> ClaimResponse:
    """
    Claim an allocation committed under the deployment's Merkle root.

    Claim rejections are returned as ErrorResponse with the engine's error
    code; state is unchanged when a claim is rejected.
    """
    context = _call_context(x_caller_address, x_forwarded_sender)
    record = deployment.merkle.claim(request.allocation, request.proof, context)
    return ClaimResponse(ok=True, record=record.to_json_dict())


@router.post("/signature", response_model=ClaimResponse)
def claim_signature(
    request: SignatureClaimRequest,
    x_caller_address: Optional[str] = Header(default=None),
    deployment: AirdropDeployment = Depends(get_deployment),
) -> ClaimResponse:
    """
    Claim with a voucher signed by its claimant. Anyone may submit; the
    asset always goes to the claimant.
    """
    submitter = _call_context(x_caller_address, None) if x_caller_address else None
    record = deployment.signature.claim(request.voucher, request.signature, submitter)
    return ClaimResponse(ok=True, record=record.to_json_dict())


@router.get("/merkle/{index}", response_model=ClaimStatusResponse)
def claim_status(
    index: int,
    deployment: AirdropDeployment = Depends(get_deployment),
) -> ClaimStatusResponse:
    """Whether an allocation index has been claimed."""
    try:
        claimed = deployment.merkle.is_claimed(index)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={"index": str(index)}) from e
    return ClaimStatusResponse(index=str(index), claimed=claimed)
