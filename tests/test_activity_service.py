"""
Tests for `services/activity_service.py`.

Covers rules:
- Activities carry user_id for users and session_id for guests.
- A storage failure is logged and returns None instead of raising.
- Unknown activity types are rejected.
"""

from __future__ import annotations

import logging
import uuid

import pytest

from domain.activity import ActivityType
from domain.identity import GuestIdentity, UserIdentity
from services.activity_service import list_activities, record_activity


def test_guest_activity_carries_session_id(fake_db) -> None:
    activity = record_activity(
        "category_browse",
        GuestIdentity(session_id="sess-1"),
        {"source": "home"},
        category_id="mobile-app-dev",
    )

    assert activity is not None
    row = fake_db.rows("activities")[0]
    assert row["session_id"] == "sess-1"
    assert row["user_id"] is None
    assert row["category_id"] == "mobile-app-dev"
    assert row["metadata"] == {"source": "home"}


def test_user_activity_carries_user_id(fake_db) -> None:
    user_id = uuid.uuid4()

    record_activity(ActivityType.PAGE_VIEW, UserIdentity(user_id=user_id))

    row = fake_db.rows("activities")[0]
    assert row["user_id"] == str(user_id)
    assert row["session_id"] is None


def test_storage_failure_is_swallowed_and_logged(fake_db, caplog) -> None:
    fake_db.failing_tables.add("activities")

    with caplog.at_level(logging.WARNING, logger="services.activity_service"):
        result = record_activity("service_view", GuestIdentity(session_id="sess-1"), service_id="ios-native")

    assert result is None
    assert "Activity dropped" in caplog.text


def test_unknown_activity_type_raises() -> None:
    with pytest.raises(ValueError):
        record_activity("checkout", GuestIdentity(session_id="sess-1"))


def test_list_activities_filters_by_user() -> None:
    user_id = uuid.uuid4()
    record_activity("page_view", UserIdentity(user_id=user_id))
    record_activity("page_view", GuestIdentity(session_id="sess-1"))
    record_activity("search", UserIdentity(user_id=user_id), {"query": "flutter"})

    mine = list_activities(user_id=user_id)

    assert len(mine) == 2
    assert {a.activity_type for a in mine} == {ActivityType.PAGE_VIEW, ActivityType.SEARCH}
    assert len(list_activities()) == 3
    assert len(list_activities(limit=1)) == 1
