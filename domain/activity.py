"""
Domain: Activity events.

Activities are append-only analytics events. They are never updated or deleted
and never take part in transactional business logic.

Rules implemented here:
- Every activity names its actor: a user_id or a session_id. An activity with
  neither is invalid.
- activity_type is validated against a known set.
- metadata is schema-less. Only the well-known keys below are read by the
  analytics aggregator; all other keys pass through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID

from .time import require_utc_timestamp


class ActivityType(str, Enum):
    PAGE_VIEW = "page_view"
    CATEGORY_BROWSE = "category_browse"
    SERVICE_VIEW = "service_view"
    SERVICE_INQUIRY = "service_inquiry"
    SEARCH = "search"


# Well-known metadata keys.
META_SERVICE_NAME = "service_name"
META_LEAD_ID = "lead_id"
META_QUERY = "query"


@dataclass(frozen=True, slots=True)
class Activity:
    activity_id: UUID
    activity_type: ActivityType
    created_at: datetime
    user_id: Optional[UUID] = None
    session_id: Optional[str] = None
    service_id: Optional[str] = None
    category_id: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        if self.user_id is None and not self.session_id:
            raise ValueError("Activity requires a user_id or a session_id")
