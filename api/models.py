"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses, plus
the converters from domain entities.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from domain.activity import Activity, ActivityType
from domain.analytics import ActivitySummary, AnalyticsSnapshot, LeadAnalytics, ServiceMetrics
from domain.catalog import Category, Service
from domain.lead import FieldError, Lead, LeadStatus
from domain.user import User


# ============================================================================
# Lead Models
# ============================================================================

class LeadCreateRequest(BaseModel):
    """
    Lead submission.

    Every field is optional here; the lead service validates the whole
    submission and reports every failing field at once.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    project_brief: Optional[str] = None
    budget: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None

    class Config:
        # Phone numbers may arrive as JSON numbers
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "name": "Asha Rao",
                "email": "asha@example.com",
                "phone": "9876543210",
                "project_brief": "Food delivery app for Android with live order tracking",
                "budget": "₹25,000 - ₹50,000",
                "service_id": "android-native",
                "service_name": "Android Native App",
            }
        }


class LeadResponse(BaseModel):
    lead_id: UUID
    name: str
    email: str
    phone: str
    project_brief: str
    budget: str
    service_id: str
    service_name: str
    status: LeadStatus
    user_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class LeadCreatedResponse(BaseModel):
    message: str
    lead: LeadResponse


class LeadStatusUpdateRequest(BaseModel):
    status: LeadStatus

    class Config:
        json_schema_extra = {"example": {"status": "contacted"}}


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    errors: List[FieldErrorResponse]


# ============================================================================
# Activity Models
# ============================================================================

class ActivityCreateRequest(BaseModel):
    activity_type: ActivityType
    service_id: Optional[str] = None
    category_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "activity_type": "category_browse",
                "category_id": "mobile-app-dev",
                "metadata": {"source": "home"},
            }
        }


class ActivityResponse(BaseModel):
    activity_id: UUID
    activity_type: ActivityType
    user_id: Optional[UUID] = None
    session_id: Optional[str] = None
    service_id: Optional[str] = None
    category_id: Optional[str] = None
    metadata: Dict[str, Any]
    created_at: datetime


# ============================================================================
# Analytics Models
# ============================================================================

class LeadCountsResponse(BaseModel):
    total: int
    by_status: Dict[str, int]


class ServiceMetricsResponse(BaseModel):
    service_id: str
    service_name: Optional[str] = None
    views: int
    leads: int


class ActivitySummaryResponse(BaseModel):
    total_activities: int
    by_type: Dict[str, int]
    recent_activities: List[ActivityResponse]


class AnalyticsResponse(BaseModel):
    lead_counts: LeadCountsResponse
    service_metrics: Dict[str, ServiceMetricsResponse]
    activity_summary: ActivitySummaryResponse


# ============================================================================
# Catalog Models
# ============================================================================

class CategoryResponse(BaseModel):
    category_id: str
    name: str
    description: str
    icon: str
    slug: str
    featured: bool


class ServiceResponse(BaseModel):
    service_id: str
    category_id: str
    title: str
    description: str
    hourly_rate: int
    features: List[str]


class SearchResponse(BaseModel):
    categories: List[CategoryResponse]
    services: List[ServiceResponse]


# ============================================================================
# Account Models
# ============================================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: Optional[str] = None
    mobile: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr


class UserResponse(BaseModel):
    user_id: UUID
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    mobile: Optional[str] = None
    is_guest: bool


# ============================================================================
# Converters
# ============================================================================

def lead_response(lead: Lead) -> LeadResponse:
    return LeadResponse(
        lead_id=lead.lead_id,
        name=lead.name,
        email=lead.email,
        phone=lead.phone,
        project_brief=lead.project_brief,
        budget=lead.budget,
        service_id=lead.service_id,
        service_name=lead.service_name,
        status=lead.status,
        user_id=lead.user_id,
        created_at=lead.created_at,
        updated_at=lead.updated_at,
    )


def validation_error_response(errors: List[FieldError]) -> ValidationErrorResponse:
    return ValidationErrorResponse(
        message="Invalid lead data",
        errors=[FieldErrorResponse(field=e.field, message=e.message) for e in errors],
    )


def activity_response(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        activity_id=activity.activity_id,
        activity_type=activity.activity_type,
        user_id=activity.user_id,
        session_id=activity.session_id,
        service_id=activity.service_id,
        category_id=activity.category_id,
        metadata=dict(activity.metadata),
        created_at=activity.created_at,
    )


def lead_counts_response(counts: LeadAnalytics) -> LeadCountsResponse:
    return LeadCountsResponse(
        total=counts.total,
        by_status={status.value: n for status, n in counts.by_status.items()},
    )


def service_metrics_response(metrics: ServiceMetrics) -> ServiceMetricsResponse:
    return ServiceMetricsResponse(
        service_id=metrics.service_id,
        service_name=metrics.service_name,
        views=metrics.views,
        leads=metrics.leads,
    )


def activity_summary_response(summary: ActivitySummary) -> ActivitySummaryResponse:
    return ActivitySummaryResponse(
        total_activities=summary.total_activities,
        by_type={kind.value: n for kind, n in summary.by_type.items()},
        recent_activities=[activity_response(a) for a in summary.recent_activities],
    )


def analytics_response(snapshot: AnalyticsSnapshot) -> AnalyticsResponse:
    return AnalyticsResponse(
        lead_counts=lead_counts_response(snapshot.lead_counts),
        service_metrics={
            service_id: service_metrics_response(m)
            for service_id, m in snapshot.service_metrics.items()
        },
        activity_summary=activity_summary_response(snapshot.activity_summary),
    )


def category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        category_id=category.category_id,
        name=category.name,
        description=category.description,
        icon=category.icon,
        slug=category.slug,
        featured=category.featured,
    )


def service_response(service: Service) -> ServiceResponse:
    return ServiceResponse(
        service_id=service.service_id,
        category_id=service.category_id,
        title=service.title,
        description=service.description,
        hourly_rate=service.hourly_rate,
        features=list(service.features),
    )


def user_response(user: User) -> UserResponse:
    return UserResponse(
        user_id=user.user_id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        mobile=user.mobile,
        is_guest=user.is_guest,
    )
