"""
Health Check Route

GET /health and GET / answer liveness probes. They report whether a
deployment has been loaded but never build one, so they respond even
before a distribution is available.
"""

from fastapi import APIRouter

from api import __version__
from api.deps import has_deployment
from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


def _status() -> HealthResponse:
    return HealthResponse(ok=True, version=__version__, deployment_loaded=has_deployment())


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return _status()


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    return _status()
