"""
Claims HTTP API (FastAPI)

HTTP surface for the airdrop claim engine:
- POST /claims/merkle - Claim with an inclusion proof
- POST /claims/signature - Claim with a signed voucher
- GET /claims/merkle/{index} - Whether an allocation index is claimed
- GET /nonces/{address} - A claimant's current voucher nonce
- GET /domain - EIP-712 domain and commitment root
- GET /events - Settled claim records
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
