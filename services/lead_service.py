"""
Lead service: submission, listing and status workflow.

Handles:
- Eager validation of the whole submission before any write
- Attribution to the authenticated user (guests stay unattributed)
- Status-filtered listing, most recent first
- Permissive status transitions (any status to any status)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.identity import IdentityToken, identity_user_id
from domain.lead import Lead, LeadStatus, parse_status_filter, validate_submission
from domain.time import utc_now
from repositories import lead_repository

logger = logging.getLogger(__name__)


def create_lead(payload: Mapping[str, Any], identity: IdentityToken) -> Lead:
    """
    Validate and persist a new lead with status `new`.

    Args:
        payload: raw submission (name, email, phone, project_brief, budget,
            service_id, service_name)
        identity: resolved actor; only a UserIdentity sets Lead.user_id

    Returns:
        The stored Lead, including generated id and timestamps.

    Raises:
        LeadValidationError: listing every invalid field. Nothing is written.
        PersistenceError: the store is unavailable.
    """
    submission = validate_submission(payload)

    now = utc_now()
    lead = Lead(
        lead_id=uuid.uuid4(),
        name=submission.name,
        email=submission.email,
        phone=submission.phone,
        project_brief=submission.project_brief,
        budget=submission.budget,
        service_id=submission.service_id,
        service_name=submission.service_name,
        status=LeadStatus.NEW,
        user_id=identity_user_id(identity),
        created_at=now,
        updated_at=now,
    )

    stored = lead_repository.insert_lead(lead)
    logger.info(
        "Lead created",
        extra={
            "lead_id": str(stored.lead_id),
            "service_id": stored.service_id,
            "identity_kind": identity.kind,
        },
    )
    return stored


def list_leads(status_filter: Optional[str] = None) -> List[Lead]:
    """
    List leads, most recent first.

    None or "all" returns every lead; any other value must name a LeadStatus
    (ValueError otherwise) and restricts the result to that status.
    """
    return lead_repository.list_leads(parse_status_filter(status_filter))


def update_lead_status(lead_id: UUID, new_status: str | LeadStatus) -> Optional[Lead]:
    """
    Move a lead to `new_status`.

    No transition graph is enforced: operators may correct a lead from any
    status to any other, including the same status.

    Returns:
        The updated Lead, or None when no lead has this id. In that case no
        write is issued.

    Raises:
        ValueError: `new_status` is not a known status.
    """
    status = LeadStatus(new_status)

    existing = lead_repository.get_lead_by_id(lead_id)
    if existing is None:
        return None

    updated = lead_repository.update_lead_status(lead_id, status, utc_now())
    if updated is None:
        return None

    logger.info(
        "Lead status changed",
        extra={
            "lead_id": str(lead_id),
            "from_status": existing.status.value,
            "to_status": status.value,
        },
    )
    return updated


__all__ = ["create_lead", "list_leads", "update_lead_status"]
