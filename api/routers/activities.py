"""
Activity tracking endpoint.

Fire-and-forget: the activity is recorded after the response is sent and a
storage failure never reaches the client.
"""

from typing import Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status

from api.dependencies import get_client_context, get_identity
from api.models import ActivityCreateRequest
from domain.identity import IdentityToken
from services.activity_service import record_activity

router = APIRouter()


@router.post(
    "/activities",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Track Activity",
    description="Record a page view, category browse, service view, inquiry or search."
)
def track_activity(
    request: ActivityCreateRequest,
    background_tasks: BackgroundTasks,
    identity: IdentityToken = Depends(get_identity),
    client: Dict[str, Optional[str]] = Depends(get_client_context),
):
    background_tasks.add_task(
        record_activity,
        request.activity_type,
        identity,
        request.metadata,
        service_id=request.service_id,
        category_id=request.category_id,
        **client,
    )
    return {"success": True}
