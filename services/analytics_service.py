"""
Analytics aggregator.

All figures are recomputed from the leads and activities tables on every call.
Lead counts come from count queries against the same table list_leads reads,
so they always agree with a manual count of list_leads().
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional

from domain.activity import META_SERVICE_NAME, Activity, ActivityType
from domain.analytics import (
    ActivitySummary,
    AnalyticsSnapshot,
    LeadAnalytics,
    ServiceMetrics,
)
from domain.identity import IdentityToken
from domain.lead import LeadStatus
from repositories import activity_repository, lead_repository
from services.activity_service import record_activity

RECENT_ACTIVITY_LIMIT = 10


def compute_lead_analytics() -> LeadAnalytics:
    """Total lead count plus one count per status."""

    by_status = {status: lead_repository.count_leads(status) for status in LeadStatus}
    return LeadAnalytics(total=lead_repository.count_leads(), by_status=by_status)


def record_service_view(
    service_id: str,
    service_name: str,
    identity: IdentityToken,
    **context: Optional[str],
) -> Optional[Activity]:
    """Record a `service_view` activity feeding compute_service_metrics."""

    return record_activity(
        ActivityType.SERVICE_VIEW,
        identity,
        {META_SERVICE_NAME: service_name},
        service_id=service_id,
        **context,
    )


def compute_service_metrics() -> Dict[str, ServiceMetrics]:
    """
    Views and leads per service id.

    views: number of service_view activities for the service.
    leads: number of leads for the service, whatever their status.
    """

    views: Counter[str] = Counter()
    leads: Counter[str] = Counter()
    names: Dict[str, str] = {}

    for service_id, service_name in activity_repository.list_service_view_refs():
        views[service_id] += 1
        if service_name:
            names.setdefault(service_id, service_name)

    # Lead rows carry the name captured at submission; prefer it.
    for service_id, service_name in lead_repository.list_lead_service_refs():
        leads[service_id] += 1
        if service_name:
            names[service_id] = service_name

    return {
        service_id: ServiceMetrics(
            service_id=service_id,
            service_name=names.get(service_id),
            views=views[service_id],
            leads=leads[service_id],
        )
        for service_id in sorted(set(views) | set(leads))
    }


def compute_activity_summary(recent_limit: int = RECENT_ACTIVITY_LIMIT) -> ActivitySummary:
    """
    Activity totals by type and the most recent activities.

    Stored types outside ActivityType count toward total_activities only.
    """

    types = activity_repository.list_activity_types()
    counts = Counter(types)
    return ActivitySummary(
        total_activities=len(types),
        by_type={kind: counts[kind.value] for kind in ActivityType},
        recent_activities=activity_repository.list_activities(limit=recent_limit),
    )


def build_analytics_snapshot() -> AnalyticsSnapshot:
    return AnalyticsSnapshot(
        lead_counts=compute_lead_analytics(),
        service_metrics=compute_service_metrics(),
        activity_summary=compute_activity_summary(),
    )


__all__ = [
    "compute_lead_analytics",
    "record_service_view",
    "compute_service_metrics",
    "compute_activity_summary",
    "build_analytics_snapshot",
]
