"""
Account API Endpoints.

Email registration and login. The user id lives in the signed session cookie;
the guest session id stays in place across login and logout.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from api.dependencies import get_identity
from api.models import LoginRequest, RegisterRequest, UserResponse, user_response
from domain.identity import IdentityToken, UserIdentity
from repositories.user_repository import get_user_by_id
from services.account_service import DuplicateEmailError, login_with_email, register_user
from services.identity_service import USER_ID_KEY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.get("/user", response_model=Optional[UserResponse], summary="Current User")
def current_user(identity: IdentityToken = Depends(get_identity)):
    """Return the signed-in user, or null for guests."""
    if not isinstance(identity, UserIdentity):
        return None
    try:
        user = get_user_by_id(identity.user_id)
    except Exception:
        logger.exception("Fetching user failed")
        raise HTTPException(status_code=500, detail="Failed to fetch user")
    return user_response(user) if user else None


@router.post("/register", response_model=UserResponse, summary="Register")
def register(payload: RegisterRequest, request: Request):
    try:
        user = register_user(
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            mobile=payload.mobile,
        )
    except DuplicateEmailError:
        raise HTTPException(status_code=400, detail="User already exists with this email")
    except Exception:
        logger.exception("Registration failed")
        raise HTTPException(status_code=500, detail="Failed to create user")

    request.session[USER_ID_KEY] = str(user.user_id)
    return user_response(user)


@router.post("/login", response_model=UserResponse, summary="Login")
def login(payload: LoginRequest, request: Request):
    try:
        user = login_with_email(payload.email)
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail="Failed to login")

    if user is None:
        raise HTTPException(status_code=404, detail="No user found with this email address")

    request.session[USER_ID_KEY] = str(user.user_id)
    return user_response(user)


@router.post("/logout", summary="Logout")
def logout(request: Request):
    request.session.pop(USER_ID_KEY, None)
    return {"message": "Logged out successfully"}
