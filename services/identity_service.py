"""
Identity resolution for inbound requests.

Turns the session state of a request into an IdentityToken. Resolution never
fails: if the authenticated user cannot be confirmed, the visitor is treated
as a guest, and a guest without a session id gets a new one.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, MutableMapping, Optional
from uuid import UUID

from domain.identity import GuestIdentity, IdentityToken, UserIdentity
from repositories.client import PersistenceError
from repositories.user_repository import get_user_by_id

logger = logging.getLogger(__name__)

# Session keys
SESSION_ID_KEY = "session_id"
USER_ID_KEY = "user_id"


def _confirmed_user_id(authenticated_user_id: Any) -> Optional[UUID]:
    try:
        user_id = authenticated_user_id if isinstance(authenticated_user_id, UUID) else UUID(str(authenticated_user_id))
    except ValueError:
        logger.warning(
            "Ignoring malformed authenticated user id",
            extra={"authenticated_user_id": str(authenticated_user_id)[:64]},
        )
        return None

    try:
        user = get_user_by_id(user_id)
    except PersistenceError:
        logger.warning(
            "User lookup failed during identity resolution; falling back to guest",
            exc_info=True,
            extra={"user_id": str(user_id)},
        )
        return None

    return user.user_id if user is not None else None


def resolve_identity(
    session: MutableMapping[str, Any],
    authenticated_user_id: Optional[Any] = None,
) -> IdentityToken:
    """
    Resolve the actor behind a request.

    Order:
    1. An authenticated user id that matches an existing user -> UserIdentity.
    2. A session id already present in the session -> GuestIdentity.
    3. Otherwise a new UUID session id is written into `session` and a
       GuestIdentity carrying it is returned.

    Example:
        identity = resolve_identity(request.session, request.session.get(USER_ID_KEY))
        if isinstance(identity, UserIdentity):
            ...
    """

    if authenticated_user_id:
        user_id = _confirmed_user_id(authenticated_user_id)
        if user_id is not None:
            return UserIdentity(user_id=user_id)

    session_id = session.get(SESSION_ID_KEY)
    if session_id:
        return GuestIdentity(session_id=str(session_id))

    session_id = str(uuid.uuid4())
    session[SESSION_ID_KEY] = session_id
    return GuestIdentity(session_id=session_id)


__all__ = ["SESSION_ID_KEY", "USER_ID_KEY", "resolve_identity"]
