"""
Account service for email-based registration and login.

Login is by email only; password handling is out of scope for this service.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from domain.time import utc_now
from domain.user import User, normalize_email
from repositories.client import UNIQUE_VIOLATION, PersistenceError
from repositories.user_repository import get_user_by_email, insert_user

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when registering an email that already belongs to a user."""


def register_user(
    email: str,
    first_name: str,
    last_name: Optional[str] = None,
    mobile: Optional[str] = None,
) -> User:
    """
    Create a user account.

    Raises:
        DuplicateEmailError: a user with this email already exists.
        PersistenceError: the store is unavailable.
    """
    email = normalize_email(email)
    if get_user_by_email(email) is not None:
        raise DuplicateEmailError(f"User already exists with email {email}")

    now = utc_now()
    try:
        user = insert_user(
            User(
                user_id=uuid.uuid4(),
                email=email,
                first_name=first_name.strip() or None,
                last_name=last_name.strip() if last_name else None,
                mobile=mobile.strip() if mobile else None,
                is_guest=False,
                created_at=now,
                updated_at=now,
            )
        )
    except PersistenceError as e:
        # A concurrent registration won the users.email unique constraint
        if e.code == UNIQUE_VIOLATION:
            raise DuplicateEmailError(f"User already exists with email {email}") from e
        raise
    logger.info("User registered", extra={"user_id": str(user.user_id)})
    return user


def login_with_email(email: str) -> Optional[User]:
    """Return the user owning `email`, or None when there is none."""
    return get_user_by_email(normalize_email(email))


__all__ = ["DuplicateEmailError", "register_user", "login_with_email"]
