"""
Lead API Endpoints.

Public endpoint for submitting a lead for a service.
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from api.dependencies import get_client_context, get_identity
from api.models import (
    LeadCreatedResponse,
    LeadCreateRequest,
    ValidationErrorResponse,
    lead_response,
    validation_error_response,
)
from domain.activity import META_LEAD_ID, ActivityType
from domain.identity import IdentityToken
from domain.lead import LeadValidationError
from services.activity_service import record_activity
from services.lead_service import create_lead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/leads",
    response_model=LeadCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}},
    summary="Submit Lead",
    description="Submit a contact request for a service. All invalid fields are reported together."
)
def submit_lead(
    request: LeadCreateRequest,
    background_tasks: BackgroundTasks,
    identity: IdentityToken = Depends(get_identity),
    client: Dict[str, Optional[str]] = Depends(get_client_context),
):
    """
    Submit a lead.

    The lead is stored with status `new`. Signed-in users own the lead; guest
    leads stay unattributed and are linked to the visitor's session through a
    `service_inquiry` activity recorded after the response is sent.

    **Validation failure response (400):**
    ```json
    {
      "message": "Invalid lead data",
      "errors": [
        {"field": "name", "message": "Name must be at least 2 characters"},
        {"field": "phone", "message": "Phone number must be at least 10 digits"}
      ]
    }
    ```
    """
    try:
        lead = create_lead(request.model_dump(), identity)
    except LeadValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=validation_error_response(e.errors).model_dump(),
        )
    except Exception:
        logger.exception("Lead submission failed")
        raise HTTPException(status_code=500, detail="Failed to create lead")

    background_tasks.add_task(
        record_activity,
        ActivityType.SERVICE_INQUIRY,
        identity,
        {META_LEAD_ID: str(lead.lead_id)},
        service_id=lead.service_id,
        **client,
    )

    return LeadCreatedResponse(
        message="Lead submitted successfully! Our manager will call you shortly.",
        lead=lead_response(lead),
    )
