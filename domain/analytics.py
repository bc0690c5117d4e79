"""
Domain: Analytics read models.

Nothing here is persisted. Every value is derived on demand from the leads and
activities tables, so there is no cache to keep consistent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .activity import Activity, ActivityType
from .lead import LeadStatus


@dataclass(frozen=True, slots=True)
class LeadAnalytics:
    """Lead counts partitioned by status."""

    total: int
    by_status: Dict[LeadStatus, int]

    def count(self, status: LeadStatus) -> int:
        return self.by_status.get(status, 0)

    @property
    def new(self) -> int:
        return self.count(LeadStatus.NEW)

    @property
    def in_progress(self) -> int:
        return self.count(LeadStatus.IN_PROGRESS)

    @property
    def completed(self) -> int:
        return self.count(LeadStatus.COMPLETED)


@dataclass(frozen=True, slots=True)
class ServiceMetrics:
    """
    Interest counters for one service.

    leads counts every lead for the service regardless of status: a cancelled
    lead still counts as generated interest.
    """

    service_id: str
    service_name: Optional[str] = None
    views: int = 0
    leads: int = 0


@dataclass(frozen=True, slots=True)
class ActivitySummary:
    total_activities: int
    by_type: Dict[ActivityType, int]
    recent_activities: List[Activity] = field(default_factory=list)

    def count(self, activity_type: ActivityType) -> int:
        return self.by_type.get(activity_type, 0)


@dataclass(frozen=True, slots=True)
class AnalyticsSnapshot:
    lead_counts: LeadAnalytics
    service_metrics: Dict[str, ServiceMetrics]
    activity_summary: ActivitySummary
