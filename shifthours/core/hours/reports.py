"""
Report views over the aggregated hours rows.

All views share the rows built by the aggregator and differ only in how rows
are selected and grouped: by company, employee, event, duty or client.
"""

import datetime
import logging

from shifthours.core.models import ReportOptions, ReportSnapshot
from shifthours.core.types import ClientDailyDetail, CompanyReport, EmployeeEntry, EmployeeReport, ShiftHoursRow

from .aggregator import (
    HoursRow,
    ReportContext,
    assignment_rows,
    collect_rows,
    sum_totals,
    summarize_by_duty,
    unbound_slot_row,
)
from .daily import DailyDetails, DayBucket, build_daily_details
from .duties import duty_for, participants, resolve_duty_map, warn_malformed_fields

logger = logging.getLogger(__name__)


def _iso(value: datetime.date | None) -> str | None:
    return value.isoformat() if value else None


def _report_header(options: ReportOptions) -> dict:
    return {
        "startDate": _iso(options.start_date),
        "endDate": _iso(options.end_date),
        "hoursType": options.hours_type,
        "includeBreaksHourly": options.include_breaks_hourly,
        "showBreakTimes": options.show_break_times,
    }


def _totals_fields(rows: list[HoursRow]) -> dict:
    totals = sum_totals(rows)
    return {
        "totalHours": totals.hours,
        "totalShifts": totals.shifts,
        "totalOvertimeHours": totals.overtime_hours,
    }


# ============ By company ============


def build_company_report(snapshot: ReportSnapshot, options: ReportOptions) -> dict:
    """
    Hours per company of the working users.

    Users without a company are left out. Only companies with at least one
    row appear, sorted by name.

    Returns:
        Dict with the report header and ``companies``
    """
    ctx = ReportContext(snapshot, options)
    rows = collect_rows(ctx, ctx.shift_assignments())

    by_company: dict[str, list[HoursRow]] = {}
    for row in rows:
        if not row.user_id:
            continue
        company_id = ctx.user_company(row.user_id)
        if not company_id:
            continue
        if options.company_id and company_id != options.company_id:
            continue
        by_company.setdefault(company_id, []).append(row)

    companies: list[CompanyReport] = []
    for company_id, company_rows in by_company.items():
        companies.append(
            {
                "companyId": company_id,
                "companyName": ctx.company_name(company_id),
                **_totals_fields(company_rows),
                "categories": summarize_by_duty(ctx, company_rows),
                "dailyDetails": build_daily_details(ctx, company_rows),
            }
        )
    companies.sort(key=lambda c: (c["companyName"], c["companyId"]))

    logger.debug(f"Company report: {len(companies)} companies from {len(rows)} rows")
    return {**_report_header(options), "companies": companies}


# ============ By employee ============


def _employee_entry(ctx: ReportContext, row: HoursRow) -> EmployeeEntry:
    assignment = row.assignment
    start, end = assignment.start_time, assignment.end_time
    if ctx.options.is_actual and row.entries:
        starts = [e.start_time for e in row.entries if e.start_time]
        ends = [e.end_time for e in row.entries if e.end_time]
        start = min(starts) if starts else start
        end = max(ends) if ends else end

    notes = "; ".join(e.notes for e in row.entries if e.notes) or None
    hourly = row.task_type.is_hourly_service

    return {
        "date": row.date_key,
        "assignmentId": assignment.id,
        "eventId": row.workday.event_id,
        "eventTitle": ctx.event_title(row.workday.event_id),
        "taskTypeName": row.task_type.name,
        "hours": row.totals.hours,
        "startTime": start,
        "endTime": end,
        "notes": notes,
        "shifts": None if hourly else row.totals.shifts,
        "overtimeHours": None if hourly else row.totals.overtime_hours,
    }


def build_employee_report(snapshot: ReportSnapshot, options: ReportOptions) -> dict:
    """
    Hours per employee with a chronological entry list.

    Optional ``userId`` and ``companyId`` filters narrow the employees.
    """
    ctx = ReportContext(snapshot, options)
    rows = collect_rows(ctx, ctx.shift_assignments())

    by_user: dict[str, list[HoursRow]] = {}
    for row in rows:
        if not row.user_id:
            continue
        if options.user_id and row.user_id != options.user_id:
            continue
        if options.company_id and ctx.user_company(row.user_id) != options.company_id:
            continue
        by_user.setdefault(row.user_id, []).append(row)

    employees: list[EmployeeReport] = []
    for user_id, user_rows in by_user.items():
        user = ctx.users.get(user_id)
        entries = [_employee_entry(ctx, row) for row in user_rows]
        entries.sort(key=lambda e: (e["date"], e["startTime"] or "", e["assignmentId"]))

        totals = _totals_fields(user_rows)
        only_shifts = all(not row.task_type.is_hourly_service for row in user_rows) and totals["totalShifts"] > 0

        employees.append(
            {
                "userId": user_id,
                "userName": ctx.user_name(user_id),
                "userCode": user.code if user else "",
                "companyId": user.company_id if user else None,
                **totals,
                "hasOnlyShiftServices": only_shifts,
                "entries": entries,
                "dailyDetails": build_daily_details(ctx, user_rows),
            }
        )
    employees.sort(key=lambda e: (e["userName"], e["userId"]))

    return {**_report_header(options), "employees": employees}


# ============ By event ============


def build_event_report(snapshot: ReportSnapshot, event_id: str, options: ReportOptions) -> dict:
    """
    Hours of one event, optionally limited to the assignments of one client.

    Returns:
        Dict with event header, flat totals, ``summaryByDuty`` and ``dailyDetails``
    """
    ctx = ReportContext(snapshot, options)
    rows = collect_rows(ctx, ctx.shift_assignments(event_id=event_id, client_id=options.client_id))

    event = ctx.events.get(event_id)
    location_id = event.location_id if event else None
    clients = []
    if event:
        clients = [{"id": cid, "name": ctx.client_name(cid) or cid} for cid in event.client_ids]

    return {
        "eventId": event_id,
        "eventTitle": ctx.event_title(event_id),
        "locationId": location_id,
        "locationName": ctx.location_name(location_id),
        "clients": clients,
        "clientId": options.client_id,
        **_report_header(options),
        **_totals_fields(rows),
        "summaryByDuty": summarize_by_duty(ctx, rows),
        "dailyDetails": build_daily_details(ctx, rows),
    }


# ============ By duty ============


def build_duty_report(snapshot: ReportSnapshot, duty_id: str, options: ReportOptions) -> dict:
    """
    Hours worked in one duty, with per-task-type totals per day.

    An assignment counts when its assignedUsers bind the duty or its
    personnelRequests ask for it. In planned mode a requested slot that no
    participant fills is counted once at the per-person planned hours.
    """
    ctx = ReportContext(snapshot, options)
    pairs = ctx.shift_assignments(client_id=options.client_id, location_id=options.location_id)

    rows: list[HoursRow] = []
    for workday, assignment in pairs:
        bound = duty_id in assignment.assigned_users.duty_map().values()
        requested = assignment.personnel_requests.requests_duty(duty_id)
        if not bound and not requested:
            continue

        matched = [row for row in assignment_rows(ctx, workday, assignment) if row.duty_id == duty_id]
        if not matched and requested and not options.is_actual:
            slot = unbound_slot_row(ctx, workday, assignment, duty_id)
            matched = [slot] if slot else []
        rows.extend(matched)

    duty = ctx.duty(duty_id)
    daily = DailyDetails().add_all(rows).to_totals_list() if options.include_daily_details else []

    return {
        "dutyId": duty_id,
        "dutyName": duty.name,
        "dutyCode": duty.code,
        "clientId": options.client_id,
        "clientName": ctx.client_name(options.client_id),
        "locationId": options.location_id,
        "locationName": ctx.location_name(options.location_id),
        **_report_header(options),
        **_totals_fields(rows),
        "dailyDetails": daily,
    }


# ============ By client ============


def build_client_report(snapshot: ReportSnapshot, client_id: str, options: ReportOptions) -> dict:
    """
    Hours billed to one client, grouped per day, location and event.

    Groups sort by date, then event title, then location name.
    """
    ctx = ReportContext(snapshot, options)
    rows = collect_rows(ctx, ctx.shift_assignments(client_id=client_id))

    daily_details: list[ClientDailyDetail] = []
    if options.include_daily_details:
        groups: dict[tuple, DayBucket] = {}
        for row in rows:
            key = (row.date_key, row.workday.location_id, row.workday.event_id)
            groups.setdefault(key, DayBucket()).add(row)

        for (date_key, location_id, event_id), bucket in groups.items():
            daily_details.append(
                {
                    "date": date_key,
                    "locationId": location_id,
                    "locationName": ctx.location_name(location_id),
                    "eventId": event_id,
                    "eventTitle": ctx.event_title(event_id),
                    "taskTypes": bucket.task_type_details(ctx),
                }
            )
        daily_details.sort(key=lambda d: (d["date"], d["eventTitle"], d["locationName"] or ""))

    return {
        "clientId": client_id,
        "clientName": ctx.client_name(client_id),
        **_report_header(options),
        **_totals_fields(rows),
        "summaryByDuty": summarize_by_duty(ctx, rows),
        "dailyDetails": daily_details,
    }


# ============ Shift-hours overview ============


def build_shift_hours_overview(snapshot: ReportSnapshot, options: ReportOptions) -> dict:
    """
    One row per shift participant with the time entry they recorded, if any.

    Rows sort by date (newest first), then by start time.
    """
    ctx = ReportContext(snapshot, options)

    rows: list[ShiftHoursRow] = []
    for workday, assignment in ctx.shift_assignments():
        warn_malformed_fields(assignment)
        task_type = ctx.task_type(assignment.task_type_id)
        duty_map = resolve_duty_map(assignment)

        for user_id in participants(assignment):
            company_id = ctx.user_company(user_id)
            if options.user_id and user_id != options.user_id:
                continue
            if options.company_id and company_id != options.company_id:
                continue

            entries = assignment.entries_for(user_id)
            rows.append(
                {
                    "assignmentId": assignment.id,
                    "date": workday.date_key,
                    "userId": user_id,
                    "userName": ctx.user_name(user_id),
                    "companyId": company_id,
                    "dutyName": ctx.duty(duty_for(duty_map, user_id)).name,
                    "taskTypeName": task_type.name,
                    "eventId": workday.event_id,
                    "eventTitle": ctx.event_title(workday.event_id),
                    "locationId": workday.location_id,
                    "locationName": ctx.location_name(workday.location_id),
                    "startTime": assignment.start_time,
                    "endTime": assignment.end_time,
                    "hasScheduledBreak": assignment.has_scheduled_break,
                    "scheduledBreakStartTime": assignment.scheduled_break_start_time,
                    "scheduledBreakEndTime": assignment.scheduled_break_end_time,
                    "timeEntry": entries[0].model_dump(by_alias=True, mode="json") if entries else None,
                }
            )

    rows.sort(key=lambda r: r["startTime"] or "")
    rows.sort(key=lambda r: r["date"], reverse=True)

    return {
        "startDate": _iso(options.start_date),
        "endDate": _iso(options.end_date),
        "rows": rows,
        "missingHours": sum(1 for r in rows if r["timeEntry"] is None),
    }
