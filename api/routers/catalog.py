"""
Catalog API Endpoints.

Browsing endpoints. Each browse is tracked as an activity in the background;
tracking never changes what the visitor gets back.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from api.dependencies import get_client_context, get_identity
from api.models import (
    CategoryResponse,
    SearchResponse,
    ServiceResponse,
    category_response,
    service_response,
)
from domain.activity import META_QUERY, ActivityType
from domain.identity import IdentityToken
from services.activity_service import record_activity
from services.analytics_service import record_service_view
from services.catalog_service import (
    get_category,
    get_service,
    list_categories,
    list_services,
    search_catalog,
)

router = APIRouter()


@router.get("/categories", response_model=List[CategoryResponse], summary="List Categories")
def get_categories():
    return [category_response(c) for c in list_categories()]


@router.get("/categories/{slug}", response_model=CategoryResponse, summary="Browse Category")
def browse_category(
    slug: str,
    background_tasks: BackgroundTasks,
    identity: IdentityToken = Depends(get_identity),
    client: Dict[str, Optional[str]] = Depends(get_client_context),
):
    category = get_category(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    background_tasks.add_task(
        record_activity,
        ActivityType.CATEGORY_BROWSE,
        identity,
        category_id=category.category_id,
        **client,
    )
    return category_response(category)


@router.get("/services", response_model=List[ServiceResponse], summary="List Services")
def get_services(
    category: Optional[str] = Query(None, description="Category slug, e.g. 'mobile-app-dev'"),
):
    services = list_services(category)
    if services is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return [service_response(s) for s in services]


@router.get("/services/{service_id}", response_model=ServiceResponse, summary="View Service")
def view_service(
    service_id: str,
    background_tasks: BackgroundTasks,
    identity: IdentityToken = Depends(get_identity),
    client: Dict[str, Optional[str]] = Depends(get_client_context),
):
    service = get_service(service_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")

    background_tasks.add_task(
        record_service_view,
        service.service_id,
        service.title,
        identity,
        category_id=service.category_id,
        **client,
    )
    return service_response(service)


@router.get("/search", response_model=SearchResponse, summary="Search Catalog")
def search(
    background_tasks: BackgroundTasks,
    query: Optional[str] = Query(None, description="Free-text search term"),
    identity: IdentityToken = Depends(get_identity),
    client: Dict[str, Optional[str]] = Depends(get_client_context),
):
    results = search_catalog(query)

    if query and query.strip():
        background_tasks.add_task(
            record_activity,
            ActivityType.SEARCH,
            identity,
            {META_QUERY: query.strip()},
            **client,
        )

    return SearchResponse(
        categories=[category_response(c) for c in results.categories],
        services=[service_response(s) for s in results.services],
    )
