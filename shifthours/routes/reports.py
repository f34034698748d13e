# shifthours/routes/reports.py
"""Report routes - worked hours by company, employee, event, duty and client."""

from fastapi import APIRouter, Depends

from shifthours.core.hours import (
    build_client_report,
    build_company_report,
    build_duty_report,
    build_employee_report,
    build_event_report,
    build_shift_hours_overview,
)
from shifthours.core.models import ReportOptions, ReportSnapshot
from shifthours.routes.shared import report_options

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/company", name="report_company")
def company_report(snapshot: ReportSnapshot, options: ReportOptions = Depends(report_options)):
    """Hours, shifts and overtime per company, with duty categories."""
    return build_company_report(snapshot, options)


@router.post("/employee", name="report_employee")
def employee_report(snapshot: ReportSnapshot, options: ReportOptions = Depends(report_options)):
    """Hours per employee with a chronological entry list."""
    return build_employee_report(snapshot, options)


@router.post("/event/{event_id}", name="report_event")
def event_report(event_id: str, snapshot: ReportSnapshot, options: ReportOptions = Depends(report_options)):
    """Hours of a single event, optionally for one client only."""
    return build_event_report(snapshot, event_id, options)


@router.post("/duty/{duty_id}", name="report_duty")
def duty_report(duty_id: str, snapshot: ReportSnapshot, options: ReportOptions = Depends(report_options)):
    """Per-day, per-task-type totals for a single duty."""
    return build_duty_report(snapshot, duty_id, options)


@router.post("/client/{client}", name="report_client")
def client_report(client: str, snapshot: ReportSnapshot, options: ReportOptions = Depends(report_options)):
    """Hours billed to a single client, grouped by day, location and event."""
    return build_client_report(snapshot, client, options)


@router.post("/shift-hours", name="report_shift_hours")
def shift_hours_overview(snapshot: ReportSnapshot, options: ReportOptions = Depends(report_options)):
    """Shift participants with their recorded time entry, newest first."""
    return build_shift_hours_overview(snapshot, options)
