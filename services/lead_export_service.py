"""
CSV export service for leads.

Generates a CSV of leads for operators, optionally filtered by status.

Lead text fields are typed by visitors; values that a spreadsheet would run as a
formula are quoted and the change is logged as a warning.
"""

from __future__ import annotations

import csv
import logging
from io import StringIO
from typing import List, Optional

from domain.lead import Lead
from services.lead_service import list_leads

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "Lead ID",
    "Created At",
    "Updated At",
    "Status",
    "Name",
    "Email",
    "Phone",
    "Service ID",
    "Service Name",
    "Budget",
    "Project Brief",
    "User ID",
]

# Leading tabs and carriage returns are removed by strip() first
_FORMULA_TRIGGERS = ("=", "+", "-", "@")


def neutralize_csv_field(value: str | None, field_name: str = "unknown") -> str:
    """
    Make a visitor-typed value safe to open in Excel/Sheets.

    A value starting with a formula trigger is prefixed with a single quote so
    the spreadsheet shows it as text. The value itself is kept intact, e.g.
    "+91 98765 43210" exports as "'+91 98765 43210".
    """
    if value is None:
        return ""

    text = str(value).strip()
    if not text.startswith(_FORMULA_TRIGGERS):
        return text

    logger.warning(
        f"Formula trigger neutralized in field '{field_name}'",
        extra={
            "field_name": field_name,
            "leading_character": text[0],
            "original_value": text[:100],
            "modification_type": "csv_injection_prevention"
        }
    )
    return "'" + text


def lead_to_csv_row(lead: Lead) -> dict[str, str]:
    return {
        "Lead ID": str(lead.lead_id),
        "Created At": lead.created_at.isoformat(),
        "Updated At": lead.updated_at.isoformat(),
        "Status": lead.status.value,
        "Name": neutralize_csv_field(lead.name, "name"),
        "Email": neutralize_csv_field(lead.email, "email"),
        "Phone": neutralize_csv_field(lead.phone, "phone"),
        "Service ID": neutralize_csv_field(lead.service_id, "service_id"),
        "Service Name": neutralize_csv_field(lead.service_name, "service_name"),
        "Budget": lead.budget,
        "Project Brief": neutralize_csv_field(lead.project_brief, "project_brief"),
        "User ID": str(lead.user_id) if lead.user_id else "",
    }


def write_leads_csv(leads: List[Lead], output) -> int:
    """Write leads as CSV to a text stream. Returns the number of rows."""
    writer = csv.DictWriter(output, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for lead in leads:
        writer.writerow(lead_to_csv_row(lead))
    return len(leads)


def generate_leads_csv(status_filter: Optional[str] = None) -> str:
    """
    Generate CSV content for leads, most recent first.

    Raises:
        ValueError: unknown status filter
        PersistenceError: the store is unavailable
    """
    output = StringIO()
    write_leads_csv(list_leads(status_filter), output)
    return output.getvalue()


__all__ = [
    "CSV_COLUMNS",
    "neutralize_csv_field",
    "lead_to_csv_row",
    "write_leads_csv",
    "generate_leads_csv",
]
