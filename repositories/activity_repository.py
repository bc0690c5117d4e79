"""
Activity repository (persistence).

Activities are append-only: this module inserts and reads them, it never
updates or deletes.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.activity import META_SERVICE_NAME, Activity, ActivityType
from domain.time import parse_utc_datetime, to_iso_utc
from repositories.client import fetch_all_rows, get_supabase, response_rows, run_query

_ACTIVITIES_TABLE: str = "activities"


def _activity_to_row(activity: Activity) -> dict[str, Any]:
    return {
        "activity_id": str(activity.activity_id),
        "activity_type": activity.activity_type.value,
        "user_id": str(activity.user_id) if activity.user_id else None,
        "session_id": activity.session_id,
        "service_id": activity.service_id,
        "category_id": activity.category_id,
        "metadata": dict(activity.metadata),
        "ip_address": activity.ip_address,
        "user_agent": activity.user_agent,
        "created_at_utc": to_iso_utc(activity.created_at, name="created_at"),
    }


def _known_type(value: Any) -> Optional[ActivityType]:
    try:
        return ActivityType(str(value))
    except ValueError:
        return None


def _row_to_activity(row: Mapping[str, Any], activity_type: ActivityType) -> Activity:
    user_id = row.get("user_id")
    return Activity(
        activity_id=UUID(str(row["activity_id"])),
        activity_type=activity_type,
        user_id=UUID(str(user_id)) if user_id else None,
        session_id=row.get("session_id"),
        service_id=row.get("service_id"),
        category_id=row.get("category_id"),
        metadata=row.get("metadata") or {},
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        created_at=parse_utc_datetime(row["created_at_utc"]),
    )


def insert_activity(activity: Activity) -> None:
    """
    Insert one activity.

    Raises:
    - PersistenceError if Supabase returns an error response.
    """

    run_query(
        get_supabase().table(_ACTIVITIES_TABLE).insert(_activity_to_row(activity)),
        "insert activity",
    )


def list_activities(
    user_id: Optional[UUID] = None,
    activity_type: Optional[ActivityType] = None,
    limit: Optional[int] = None,
) -> List[Activity]:
    """
    List activities, most recent first.

    Rows whose activity_type is not a known ActivityType (for example rows
    written by an older client) are skipped.
    """

    def build_query():
        query = get_supabase().table(_ACTIVITIES_TABLE).select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        if activity_type is not None:
            query = query.eq("activity_type", activity_type.value)
        return query.order("created_at_utc", desc=True).order("activity_id")

    if limit is None:
        rows = fetch_all_rows(build_query, "list activities")
    else:
        rows = response_rows(run_query(build_query().limit(limit), "list activities"))

    activities: List[Activity] = []
    for row in rows:
        kind = _known_type(row.get("activity_type"))
        if kind is not None:
            activities.append(_row_to_activity(row, kind))
    return activities


def list_activity_types() -> List[str]:
    """
    Return the stored activity_type value of every activity.

    Values are returned as stored, including ones outside ActivityType.
    """

    rows = fetch_all_rows(
        lambda: get_supabase().table(_ACTIVITIES_TABLE).select("activity_type").order("activity_id"),
        "list activity types",
    )
    return [str(row["activity_type"]) for row in rows]


def list_service_view_refs() -> List[tuple[str, Optional[str]]]:
    """Return (service_id, service_name) for every service_view activity."""

    rows = fetch_all_rows(
        lambda: get_supabase()
        .table(_ACTIVITIES_TABLE)
        .select("service_id, metadata")
        .eq("activity_type", ActivityType.SERVICE_VIEW.value)
        .order("activity_id"),
        "list service views",
    )
    refs: List[tuple[str, Optional[str]]] = []
    for row in rows:
        service_id = row.get("service_id")
        if not service_id:
            continue
        metadata = row.get("metadata") or {}
        refs.append((str(service_id), metadata.get(META_SERVICE_NAME)))
    return refs


__all__ = [
    "insert_activity",
    "list_activities",
    "list_activity_types",
    "list_service_view_refs",
]
