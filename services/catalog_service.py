"""
Catalog lookups and search over the static service catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from domain.catalog import CATEGORIES, SERVICES, Category, Service


@dataclass(frozen=True, slots=True)
class SearchResults:
    categories: List[Category] = field(default_factory=list)
    services: List[Service] = field(default_factory=list)


def list_categories() -> List[Category]:
    return list(CATEGORIES)


def get_category(slug: str) -> Optional[Category]:
    return next((c for c in CATEGORIES if c.slug == slug), None)


def list_services(category_slug: Optional[str] = None) -> Optional[List[Service]]:
    """
    List services, optionally for one category.

    Returns None when `category_slug` names no category.
    """
    if category_slug is None:
        return list(SERVICES)
    category = get_category(category_slug)
    if category is None:
        return None
    return [s for s in SERVICES if s.category_id == category.category_id]


def get_service(service_id: str) -> Optional[Service]:
    return next((s for s in SERVICES if s.service_id == service_id), None)


def search_catalog(query: Optional[str]) -> SearchResults:
    """Case-insensitive substring search. A blank query matches nothing."""

    term = (query or "").strip().lower()
    if not term:
        return SearchResults()

    return SearchResults(
        categories=[
            c for c in CATEGORIES
            if term in c.name.lower() or term in c.description.lower()
        ],
        services=[s for s in SERVICES if s.matches(term)],
    )


__all__ = [
    "SearchResults",
    "list_categories",
    "get_category",
    "list_services",
    "get_service",
    "search_catalog",
]
