"""
Supabase client initialization.

This module contains *only* the database connection setup. Repository modules
call `get_supabase()` for the shared client and `run_query()` to execute a
query and translate backend failures into PersistenceError.

Environment variables required (read on first use, not at import):
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from httpx import HTTPError
from postgrest.exceptions import APIError
from supabase import Client, create_client  # type: ignore[import-not-found]

# Load environment variables from the .env file at the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_client: Optional[Client] = None


# PostgREST passes Postgres error codes through on APIError.code
UNIQUE_VIOLATION = "23505"

# PostgREST caps every select at max-rows (1000 on Supabase by default)
PAGE_SIZE = 1000


class PersistenceError(RuntimeError):
    """Raised when the backing store is unreachable or rejects a query."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


def _require_env(name: str, hint: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}. {hint}")
    return value


def get_supabase() -> Client:
    """Return the shared Supabase client, creating it on first use."""

    global _client
    if _client is None:
        url = _require_env("SUPABASE_URL", "Set SUPABASE_URL to your Supabase project URL.")
        key = _require_env("SUPABASE_KEY", "Set SUPABASE_KEY to your Supabase API key.")
        _client = create_client(url, key)
    return _client


def run_query(query: Any, action: str) -> Any:
    """
    Execute a query builder and return the response.

    Raises:
    - PersistenceError if the request fails or Supabase returns an error.
    """

    try:
        response = query.execute()
    except APIError as e:
        raise PersistenceError(f"Failed to {action}: {e}", code=e.code) from e
    except HTTPError as e:
        raise PersistenceError(f"Failed to {action}: {e}") from e

    error = getattr(response, "error", None)
    if error:
        raise PersistenceError(f"Failed to {action}: {error}")
    return response


def response_rows(response: Any) -> list[dict[str, Any]]:
    return getattr(response, "data", None) or []


def fetch_all_rows(
    build_query: Callable[[], Any],
    action: str,
    page_size: int = PAGE_SIZE,
) -> list[dict[str, Any]]:
    """
    Read every row matched by a query, one `range()` page at a time.

    `build_query` must return a fresh query builder on each call. Paging stops
    at the first empty page, so a server cap below `page_size` still yields
    every row.

    Raises:
    - PersistenceError if any page fails.
    """

    all_rows: list[dict[str, Any]] = []
    offset = 0

    while True:
        response = run_query(
            build_query().range(offset, offset + page_size - 1),
            action,
        )
        page_rows = response_rows(response)
        if not page_rows:
            break

        all_rows.extend(page_rows)
        offset += len(page_rows)

    return all_rows


__all__ = [
    "PAGE_SIZE",
    "UNIQUE_VIOLATION",
    "PersistenceError",
    "get_supabase",
    "run_query",
    "response_rows",
    "fetch_all_rows",
]
