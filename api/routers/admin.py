"""
Admin API Endpoints.

Operator views: lead list, status workflow, activity log and analytics.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response

from api.models import (
    ActivityResponse,
    AnalyticsResponse,
    LeadResponse,
    LeadStatusUpdateRequest,
    activity_response,
    analytics_response,
    lead_response,
)
from services.activity_service import list_activities
from services.analytics_service import build_analytics_snapshot
from services.lead_export_service import generate_leads_csv
from services.lead_service import list_leads, update_lead_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


@router.get(
    "/leads",
    response_model=List[LeadResponse],
    summary="List Leads",
    description="List leads, most recent first, optionally filtered by status."
)
def get_leads(
    status: Optional[str] = Query(None, description="Lead status, or 'all' for every lead"),
):
    """
    **Example usage:**
    - All leads: `GET /api/v1/admin/leads`
    - New leads only: `GET /api/v1/admin/leads?status=new`
    """
    try:
        leads = list_leads(status)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid status filter '{status}'")
    except Exception:
        logger.exception("Fetching leads failed")
        raise HTTPException(status_code=500, detail="Failed to fetch leads")

    return [lead_response(lead) for lead in leads]


@router.get(
    "/leads/export",
    summary="Export Leads (CSV)",
    description="Download leads as CSV, optionally filtered by status.",
    response_class=Response,
)
def export_leads(
    status: Optional[str] = Query(None, description="Lead status, or 'all' for every lead"),
):
    try:
        content = generate_leads_csv(status)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid status filter '{status}'")
    except Exception:
        logger.exception("Exporting leads failed")
        raise HTTPException(status_code=500, detail="Failed to export leads")

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="leads.csv"'},
    )


@router.patch(
    "/leads/{lead_id}",
    response_model=LeadResponse,
    summary="Update Lead Status",
    description="Move a lead to any status. Transitions are not restricted."
)
def patch_lead_status(lead_id: UUID, request: LeadStatusUpdateRequest):
    try:
        lead = update_lead_status(lead_id, request.status)
    except Exception:
        logger.exception("Updating lead failed", extra={"lead_id": str(lead_id)})
        raise HTTPException(status_code=500, detail="Failed to update lead")

    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead_response(lead)


@router.get(
    "/activities",
    response_model=List[ActivityResponse],
    summary="List Activities",
)
def get_activities(
    user_id: Optional[UUID] = Query(None, description="Only activities of this user"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
):
    try:
        activities = list_activities(user_id=user_id, limit=limit)
    except Exception:
        logger.exception("Fetching activities failed")
        raise HTTPException(status_code=500, detail="Failed to fetch activities")

    return [activity_response(a) for a in activities]


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    summary="Analytics",
    description="Lead counts by status, per-service views and leads, and an activity summary."
)
def get_analytics():
    try:
        snapshot = build_analytics_snapshot()
    except Exception:
        logger.exception("Computing analytics failed")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")

    return analytics_response(snapshot)
