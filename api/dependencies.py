"""
Request-scoped dependencies.

The identity of a request is derived here from the signed session cookie and
handed to the services explicitly.
"""

from typing import Dict, Optional

from fastapi import Request

from domain.identity import IdentityToken
from services.identity_service import USER_ID_KEY, resolve_identity


def get_identity(request: Request) -> IdentityToken:
    return resolve_identity(request.session, request.session.get(USER_ID_KEY))


def get_client_context(request: Request) -> Dict[str, Optional[str]]:
    """Client address and user agent attached to recorded activities."""
    return {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }
