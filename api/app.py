"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, claims, nonces, events
from api.errors import (
    APIError,
    api_error_handler,
    claim_error_handler,
    generic_error_handler,
)
from core.schemas.errors import AirdropException


# Respects AIRDROP_LOG_LEVEL and airdrop.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from env var or airdrop.json, defaulting to INFO."""
    raw = os.getenv("AIRDROP_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "airdrop.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Airdrop Claims API",
        description="""
HTTP API for the airdrop claim engine.

## Endpoints

- **POST /claims/merkle** - Claim an allocation with its Merkle proof
- **POST /claims/signature** - Claim with an EIP-712 signed voucher
- **GET /claims/merkle/{index}** - Whether an index is claimed
- **GET /nonces/{address}** - Current voucher nonce for a claimant
- **GET /domain** - EIP-712 domain and commitment root
- **GET /events** - Settled claim records
- **GET /health** - Health check

## Callers

Send the submitting address in `X-Caller-Address`. A trusted forwarder
may name the original sender in `X-Forwarded-Sender`.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AirdropException, claim_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(claims.router)
    app.include_router(nonces.router)
    app.include_router(events.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
