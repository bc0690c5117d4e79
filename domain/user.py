"""
Domain: User accounts.

Registered visitors identified by email. Guests are never promoted to User
rows; they are tracked by session id only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from .time import require_utc_timestamp


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True, slots=True)
class User:
    """
    User account with profile fields.

    Invariant (enforced by the users.email unique constraint):
    - At most one User per non-null email.
    """

    user_id: UUID
    email: Optional[str] = None

    # Optional profile information
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mobile: Optional[str] = None
    profile_image_url: Optional[str] = None

    is_guest: bool = False

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate timestamps are UTC-aware."""
        if self.created_at is not None:
            require_utc_timestamp("created_at", self.created_at)
        if self.updated_at is not None:
            require_utc_timestamp("updated_at", self.updated_at)

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        return self.email or str(self.user_id)
