"""
Lead repository (persistence).

This module provides *only* persistence operations for the Lead domain entity.
No business rules (validation, identity attribution) belong here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.lead import Lead, LeadStatus
from domain.time import parse_utc_datetime, to_iso_utc
from repositories.client import fetch_all_rows, get_supabase, response_rows, run_query

# Supabase table name for Lead records.
# Keep this aligned with your database schema.
_LEADS_TABLE: str = "leads"


def _lead_to_row(lead: Lead) -> dict[str, Any]:
    """Convert a domain Lead to a Supabase row payload."""

    return {
        "lead_id": str(lead.lead_id),
        "name": lead.name,
        "email": lead.email,
        "phone": lead.phone,
        "project_brief": lead.project_brief,
        "budget": lead.budget,

        # Denormalized service reference, frozen at submission time
        "service_id": lead.service_id,
        "service_name": lead.service_name,

        "status": lead.status.value,
        "user_id": str(lead.user_id) if lead.user_id else None,
        "created_at_utc": to_iso_utc(lead.created_at, name="created_at"),
        "updated_at_utc": to_iso_utc(lead.updated_at, name="updated_at"),
    }


def _row_to_lead(row: Mapping[str, Any]) -> Lead:
    """Convert a Supabase row into a domain Lead."""

    user_id = row.get("user_id")
    return Lead(
        lead_id=UUID(str(row["lead_id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        phone=str(row["phone"]),
        project_brief=str(row.get("project_brief") or ""),
        budget=str(row["budget"]),
        service_id=str(row["service_id"]),
        service_name=str(row["service_name"]),
        status=LeadStatus(str(row["status"])),
        user_id=UUID(str(user_id)) if user_id else None,
        created_at=parse_utc_datetime(row["created_at_utc"]),
        updated_at=parse_utc_datetime(row["updated_at_utc"]),
    )


def insert_lead(lead: Lead) -> Lead:
    """
    Insert a Lead and return the stored row.

    Raises:
    - PersistenceError if Supabase returns an error response.
    """

    response = run_query(
        get_supabase().table(_LEADS_TABLE).insert(_lead_to_row(lead)),
        "insert lead",
    )
    rows = response_rows(response)
    return _row_to_lead(rows[0]) if rows else lead


def get_lead_by_id(lead_id: UUID) -> Lead | None:
    """
    Fetch a Lead by ID.

    Returns:
    - Lead if found
    - None if no record exists for the given ID
    """

    response = run_query(
        get_supabase()
        .table(_LEADS_TABLE)
        .select("*")
        .eq("lead_id", str(lead_id))
        .limit(1),
        "fetch lead",
    )
    rows = response_rows(response)
    if not rows:
        return None
    return _row_to_lead(rows[0])


def list_leads(status: Optional[LeadStatus] = None) -> List[Lead]:
    """
    List Leads, most recent first, optionally restricted to one status.
    """

    def build_query():
        query = get_supabase().table(_LEADS_TABLE).select("*")
        if status is not None:
            query = query.eq("status", status.value)
        # lead_id breaks created_at ties so pages never overlap
        return query.order("created_at_utc", desc=True).order("lead_id")

    return [_row_to_lead(row) for row in fetch_all_rows(build_query, "list leads")]


def update_lead_status(lead_id: UUID, status: LeadStatus, updated_at: datetime) -> Lead | None:
    """
    Set status and updated_at on one lead.

    Returns the updated Lead, or None when no row matched.
    """

    response = run_query(
        get_supabase()
        .table(_LEADS_TABLE)
        .update({
            "status": status.value,
            "updated_at_utc": to_iso_utc(updated_at, name="updated_at"),
        })
        .eq("lead_id", str(lead_id)),
        "update lead status",
    )
    rows = response_rows(response)
    if not rows:
        return None
    return _row_to_lead(rows[0])


def count_leads(status: Optional[LeadStatus] = None) -> int:
    """Count leads, optionally restricted to one status."""

    query = get_supabase().table(_LEADS_TABLE).select("lead_id", count="exact")
    if status is not None:
        query = query.eq("status", status.value)

    response = run_query(query, "count leads")
    count = getattr(response, "count", None)
    if count is None:
        return len(response_rows(response))
    return int(count)


def list_lead_service_refs() -> List[tuple[str, str]]:
    """Return the (service_id, service_name) pair of every lead."""

    rows = fetch_all_rows(
        lambda: get_supabase().table(_LEADS_TABLE).select("service_id, service_name").order("lead_id"),
        "list lead services",
    )
    return [
        (str(row["service_id"]), str(row.get("service_name") or ""))
        for row in rows
    ]


__all__ = [
    "insert_lead",
    "get_lead_by_id",
    "list_leads",
    "update_lead_status",
    "count_leads",
    "list_lead_service_refs",
]
