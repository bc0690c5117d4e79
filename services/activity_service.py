"""
Activity recorder.

Tracking is best-effort telemetry: a storage failure is logged and reported as
None, it never reaches the caller's primary action. An unknown activity type
is still rejected with ValueError.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.activity import Activity, ActivityType
from domain.identity import IdentityToken, identity_session_id, identity_user_id
from domain.time import utc_now
from repositories import activity_repository

logger = logging.getLogger(__name__)


def record_activity(
    activity_type: str | ActivityType,
    identity: IdentityToken,
    metadata: Optional[Mapping[str, Any]] = None,
    *,
    service_id: Optional[str] = None,
    category_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Optional[Activity]:
    """
    Record one activity for `identity`.

    Returns:
        The recorded Activity, or None if it could not be stored.

    Raises:
        ValueError: `activity_type` is not a known ActivityType.
    """
    kind = ActivityType(activity_type)

    activity = Activity(
        activity_id=uuid.uuid4(),
        activity_type=kind,
        user_id=identity_user_id(identity),
        session_id=identity_session_id(identity),
        service_id=service_id,
        category_id=category_id,
        metadata=dict(metadata or {}),
        ip_address=ip_address,
        user_agent=user_agent,
        created_at=utc_now(),
    )

    try:
        activity_repository.insert_activity(activity)
    except Exception:
        logger.warning(
            "Activity dropped",
            exc_info=True,
            extra={
                "activity_type": kind.value,
                "identity_kind": identity.kind,
                "service_id": service_id,
            },
        )
        return None

    return activity


def list_activities(user_id: Optional[UUID] = None, limit: Optional[int] = None) -> List[Activity]:
    """List recorded activities, most recent first."""
    return activity_repository.list_activities(user_id=user_id, limit=limit)


__all__ = ["record_activity", "list_activities"]
