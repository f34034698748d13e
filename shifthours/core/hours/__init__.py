"""
Hours module - shift validation and worked-hours reports.

Exports the public functions of the submodules.
"""

from .aggregator import (
    HoursRow,
    ReportContext,
    Totals,
    assignment_rows,
    collect_rows,
    planned_hours,
    shift_and_overtime,
    sum_totals,
    summarize_by_duty,
)
from .breaks import assignment_break_hours, break_hours, breaks_included, validate_break
from .daily import DailyDetails, build_daily_details
from .duties import participants, resolve_duty_map
from .reports import (
    build_client_report,
    build_company_report,
    build_duty_report,
    build_employee_report,
    build_event_report,
    build_shift_hours_overview,
)
from .shifts import activity_spans, check_shift_within, validate_shift_placement
from .validation import check_assignment, validate_assignment

__all__ = [
    # Aggregation
    "HoursRow",
    "ReportContext",
    "Totals",
    "assignment_rows",
    "collect_rows",
    "planned_hours",
    "shift_and_overtime",
    "sum_totals",
    "summarize_by_duty",
    # Breaks
    "assignment_break_hours",
    "break_hours",
    "breaks_included",
    "validate_break",
    # Daily details
    "DailyDetails",
    "build_daily_details",
    # Duties
    "participants",
    "resolve_duty_map",
    # Reports
    "build_client_report",
    "build_company_report",
    "build_duty_report",
    "build_employee_report",
    "build_event_report",
    "build_shift_hours_overview",
    # Shift placement
    "activity_spans",
    "check_shift_within",
    "validate_shift_placement",
    # Write path
    "check_assignment",
    "validate_assignment",
]
