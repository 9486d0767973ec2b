"""
Voucher Query Routes

GET /nonces/{address} - the nonce the claimant's next voucher must carry
GET /domain           - EIP-712 domain, separator and commitment root
"""

from fastapi import APIRouter, Depends

from api.deps import get_deployment
from api.errors import InvalidRequestError
from api.models.responses import DomainResponse, NonceResponse
from core.crypto.hashing import to_hex
from core.schemas.allocation import normalize_address
from orchestrator.deployment import AirdropDeployment


router = APIRouter(tags=["vouchers"])


@router.get("/nonces/{address}", response_model=NonceResponse)
def get_nonce(
    address: str,
    deployment: AirdropDeployment = Depends(get_deployment),
) -> NonceResponse:
    try:
        checksummed = normalize_address(address)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e
    nonce = deployment.signature.current_nonce(checksummed)
    return NonceResponse(address=checksummed, nonce=str(nonce))


@router.get("/domain", response_model=DomainResponse)
def get_domain(
    deployment: AirdropDeployment = Depends(get_deployment),
) -> DomainResponse:
    """Everything a signer needs to build a voucher digest for this deployment."""
    domain = deployment.signature.domain
    return DomainResponse(
        name=domain.name,
        version=domain.version,
        chain_id=domain.chain_id,
        verifying_contract=domain.verifying_contract,
        separator=to_hex(deployment.signature.domain_separator),
        merkle_root=to_hex(deployment.merkle.merkle_root),
        max_proof_depth=deployment.merkle.max_proof_depth,
    )
