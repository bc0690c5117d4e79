"""
Domain: Lead entity and submission rules.

A Lead represents a single contact request from a prospective customer for one
service in the catalog.

Rules implemented here:
- A Lead is uniquely identified by lead_id (UUID).
- service_id / service_name are captured at submission time and never change.
- status and updated_at are the only fields that change after creation. The
  entity is frozen; a status change produces a new Lead.
- Submissions are validated as a whole: every failing field is reported, not
  just the first one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional
from uuid import UUID

from email_validator import EmailNotValidError, validate_email

from .time import require_utc_timestamp


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """
        Completed and cancelled are terminal by convention only.

        Nothing enforces terminality: operators may move a lead from any status
        to any other status to correct mistakes.
        """
        return self in (LeadStatus.COMPLETED, LeadStatus.CANCELLED)


# Accepted budget brackets, exactly as offered on the project details form.
BUDGET_OPTIONS: tuple[str, ...] = (
    "₹25,000 - ₹50,000",
    "₹50,000 - ₹1,00,000",
    "₹1,00,000 - ₹2,50,000",
    "₹2,50,000 - ₹5,00,000",
    "₹5,00,000+",
)

# Query value meaning "no status filter".
ALL_STATUSES = "all"

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


class LeadValidationError(ValueError):
    """Raised when a lead submission violates one or more field constraints."""

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = errors
        fields = ", ".join(error.field for error in errors)
        super().__init__(f"Invalid lead submission: {fields}")

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]


@dataclass(frozen=True, slots=True)
class LeadSubmission:
    """A validated, trimmed lead payload that has not been persisted yet."""

    name: str
    email: str
    phone: str
    project_brief: str
    budget: str
    service_id: str
    service_name: str


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _is_valid_email(email: str) -> bool:
    # Syntax only; no DNS lookups while handling a request
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_submission(payload: Mapping[str, Any]) -> LeadSubmission:
    """
    Validate a raw lead payload.

    Raises:
    - LeadValidationError listing every violated field.
    """

    name = _text(payload, "name")
    email = _text(payload, "email")
    phone = _text(payload, "phone")
    project_brief = _text(payload, "project_brief")
    budget = _text(payload, "budget")
    service_id = _text(payload, "service_id")
    service_name = _text(payload, "service_name")

    errors: List[FieldError] = []

    if len(name) < MIN_NAME_LENGTH:
        errors.append(FieldError("name", f"Name must be at least {MIN_NAME_LENGTH} characters"))
    if not _is_valid_email(email):
        errors.append(FieldError("email", "Please enter a valid email address"))
    if sum(ch.isdigit() for ch in phone) < MIN_PHONE_DIGITS:
        errors.append(FieldError("phone", f"Phone number must be at least {MIN_PHONE_DIGITS} digits"))
    if not project_brief:
        errors.append(FieldError("project_brief", "Please provide details about your project"))
    if budget not in BUDGET_OPTIONS:
        errors.append(FieldError("budget", "Please select a budget range"))
    if not service_id:
        errors.append(FieldError("service_id", "Service is required"))
    if not service_name:
        errors.append(FieldError("service_name", "Service name is required"))

    if errors:
        raise LeadValidationError(errors)

    return LeadSubmission(
        name=name,
        email=email,
        phone=phone,
        project_brief=project_brief,
        budget=budget,
        service_id=service_id,
        service_name=service_name,
    )


def parse_status_filter(value: Optional[str]) -> Optional[LeadStatus]:
    """
    Resolve a status filter. None and "all" mean no filter.

    Raises ValueError for an unknown status name.
    """

    if value is None or value == ALL_STATUSES:
        return None
    return LeadStatus(value)


@dataclass(frozen=True, slots=True)
class Lead:
    """
    Persisted lead.

    user_id is set only when the lead was submitted by an authenticated user;
    guest leads are attributed through the session activity trail instead.
    """

    lead_id: UUID
    name: str
    email: str
    phone: str
    project_brief: str
    budget: str
    service_id: str
    service_name: str
    status: LeadStatus
    created_at: datetime
    updated_at: datetime
    user_id: Optional[UUID] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        require_utc_timestamp("updated_at", self.updated_at)

    def with_status(self, status: LeadStatus, updated_at: datetime) -> "Lead":
        return replace(self, status=status, updated_at=updated_at)
