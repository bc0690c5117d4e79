"""
Domain: Identity tokens.

An identity token is the resolved actor behind a request. It is a tagged union
of exactly two variants; callers branch on the variant with isinstance and
never assume a particular field is present.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """An authenticated user."""

    user_id: UUID

    @property
    def kind(self) -> str:
        return "user"


@dataclass(frozen=True, slots=True)
class GuestIdentity:
    """An unauthenticated visitor tracked by session id."""

    session_id: str

    def __post_init__(self) -> None:
        if not self.session_id:
            raise ValueError("session_id must be non-empty")

    @property
    def kind(self) -> str:
        return "guest"


IdentityToken = Union[UserIdentity, GuestIdentity]


def identity_user_id(identity: IdentityToken) -> Optional[UUID]:
    if isinstance(identity, UserIdentity):
        return identity.user_id
    return None


def identity_session_id(identity: IdentityToken) -> Optional[str]:
    if isinstance(identity, GuestIdentity):
        return identity.session_id
    return None
