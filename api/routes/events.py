"""
Event Routes

GET /events - settled claim records, optionally filtered by module.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_deployment
from api.errors import InvalidRequestError
from api.models.responses import EventsResponse
from core.schemas.allocation import ClaimModule
from orchestrator.deployment import AirdropDeployment


router = APIRouter(tags=["events"])


@router.get("/events", response_model=EventsResponse)
def list_events(
    module: Optional[str] = Query(default=None, description="Merkle or Signature"),
    deployment: AirdropDeployment = Depends(get_deployment),
) -> EventsResponse:
    selected: Optional[ClaimModule] = None
    if module is not None:
        try:
            selected = ClaimModule(module)
        except ValueError as e:
            raise InvalidRequestError(
                f"Unknown module: {module}",
                details={"allowed": [m.value for m in ClaimModule]},
            ) from e
    records = deployment.events.records(selected)
    return EventsResponse(count=len(records), events=[r.to_json_dict() for r in records])
