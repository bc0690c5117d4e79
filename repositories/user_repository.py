"""
User repository for managing visitor accounts.

Provides functions to query and create users. Email uniqueness is enforced by
the unique constraint on users.email.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

from domain.time import parse_utc_datetime, to_iso_utc
from domain.user import User
from repositories.client import get_supabase, response_rows, run_query

_USERS_TABLE: str = "users"


def _row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        user_id=UUID(str(row["user_id"])),
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        mobile=row.get("mobile"),
        profile_image_url=row.get("profile_image_url"),
        is_guest=bool(row.get("is_guest", False)),
        created_at=parse_utc_datetime(row["created_at_utc"]) if row.get("created_at_utc") else None,
        updated_at=parse_utc_datetime(row["updated_at_utc"]) if row.get("updated_at_utc") else None,
    )


def _user_to_row(user: User) -> dict[str, Any]:
    return {
        "user_id": str(user.user_id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "mobile": user.mobile,
        "profile_image_url": user.profile_image_url,
        "is_guest": user.is_guest,
        "created_at_utc": to_iso_utc(user.created_at, name="created_at") if user.created_at else None,
        "updated_at_utc": to_iso_utc(user.updated_at, name="updated_at") if user.updated_at else None,
    }


def _fetch_one(column: str, value: str) -> Optional[User]:
    response = run_query(
        get_supabase()
        .table(_USERS_TABLE)
        .select("*")
        .eq(column, value)
        .limit(1),
        "fetch user",
    )
    rows = response_rows(response)
    if not rows:
        return None
    return _row_to_user(rows[0])


def get_user_by_id(user_id: UUID) -> Optional[User]:
    """
    Get a user by their ID.

    Returns:
        User domain model or None if not found
    """
    return _fetch_one("user_id", str(user_id))


def get_user_by_email(email: str) -> Optional[User]:
    """
    Get a user by their (normalized) email address.

    Returns:
        User domain model or None if not found
    """
    return _fetch_one("email", email)


def insert_user(user: User) -> User:
    """
    Insert a user row.

    Raises:
    - PersistenceError, including unique-constraint violations on email.
    """

    response = run_query(
        get_supabase().table(_USERS_TABLE).insert(_user_to_row(user)),
        "create user",
    )
    rows = response_rows(response)
    return _row_to_user(rows[0]) if rows else user


__all__ = [
    "get_user_by_id",
    "get_user_by_email",
    "insert_user",
]
