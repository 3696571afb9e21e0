"""Columns and filters of the employee requests page."""

from __future__ import annotations

from typing import Any, Mapping

from ..core.enums import DisplayKind, RequestPriority, RequestStatus
from ..filters.pipeline import DateRangeFilter, FilterSpec
from ..tables.cells import BadgeStyle, Cell
from ..tables.columns import (
    ColumnSpec,
    badge_column,
    custom_column,
    date_column,
    nested_summary_column,
    text_column,
)

PRIORITY_BADGES: dict[str, BadgeStyle] = {
    RequestPriority.URGENT.value: BadgeStyle("bg-red-100 text-red-800", "Urgent"),
    RequestPriority.HIGH.value: BadgeStyle("bg-orange-100 text-orange-800", "High"),
    RequestPriority.MEDIUM.value: BadgeStyle("bg-yellow-100 text-yellow-800", "Medium"),
    RequestPriority.LOW.value: BadgeStyle("bg-green-100 text-green-800", "Low"),
}

STATUS_BADGES: dict[str, BadgeStyle] = {
    RequestStatus.PENDING.value: BadgeStyle("bg-yellow-100 text-yellow-800", "Pending"),
    RequestStatus.IN_PROGRESS.value: BadgeStyle("bg-blue-100 text-blue-800", "In Progress"),
    RequestStatus.RESOLVED.value: BadgeStyle("bg-green-100 text-green-800", "Resolved"),
    RequestStatus.REJECTED.value: BadgeStyle("bg-red-100 text-red-800", "Rejected"),
    RequestStatus.CANCELLED.value: BadgeStyle("bg-gray-100 text-gray-800", "Cancelled"),
}

# Tab order on the page; "" (All) is added by the template.
STATUS_TABS: tuple[str, ...] = tuple(s.value for s in RequestStatus)


def _request_number(value: Any, record: Mapping[str, Any]) -> Cell:
    return Cell(DisplayKind.CUSTOM, f"#{value}")


def _subject(value: Any, record: Mapping[str, Any]) -> Cell:
    description = str(record.get("description") or "")
    if len(description) > 60:
        description = description[:57] + "..."
    details = (description,) if description else ()
    return Cell(DisplayKind.CUSTOM, str(value or "N/A"), details=details)


def build_columns() -> list[ColumnSpec]:
    return [
        custom_column("request_id", "ID", _request_number, sortable=True, width="6%"),
        nested_summary_column(
            "employee",
            "Employee",
            title_fields=("name",),
            detail_fields=("email",),
            width="18%",
        ),
        text_column("department_name", "Department", sortable=True, width="12%"),
        text_column("request_type", "Type", sortable=True, width="12%"),
        custom_column("subject", "Subject", _subject, width="22%"),
        badge_column("priority", "Priority", PRIORITY_BADGES, sortable=True, width="8%"),
        badge_column("status", "Status", STATUS_BADGES, sortable=True, width="8%"),
        text_column("assigned_to_name", "Assigned To", width="10%"),
        date_column("requested_on", "Requested On", sortable=True, width="10%"),
    ]


def build_filter_spec() -> FilterSpec:
    return FilterSpec(
        search_fields=("subject", "employee_name", "description"),
        exact_fields={
            "status": "status",
            "department": "department_name",
            "priority": "priority",
            "request_type": "request_type",
        },
        date_ranges=(DateRangeFilter("requested_on"),),
        segment_field="status",
    )
