"""
Hours aggregation.

Every SHIFT assignment is turned into one row per participating user, holding
the user's hours, shifts and overtime for that assignment. The report views
only group and add up these rows, so all of them account hours the same way.
"""

import logging
from typing import Iterable, Iterator, NamedTuple

from shifthours.core.constants import TASK_KIND_SHIFT, UNSPECIFIED_DUTY_KEY, UNSPECIFIED_LABEL
from shifthours.core.models import (
    Assignment,
    Company,
    Duty,
    ReportOptions,
    ReportSnapshot,
    TaskType,
    TimeEntry,
    Workday,
)
from shifthours.core.time_utils import hours_between
from shifthours.core.types import DutyCategory

from .breaks import assignment_break_hours, breaks_included
from .duties import duty_for, participants, resolve_duty_map, warn_malformed_fields

logger = logging.getLogger(__name__)

#: Stand-in for an assignment whose task type is missing or unknown.
UNSPECIFIED_TASK_TYPE = TaskType(
    id="", name=UNSPECIFIED_LABEL, kind=TASK_KIND_SHIFT, is_hourly_service=True, shift_hours=None
)


class Totals(NamedTuple):
    """Hours, shift count and overtime; adds up field by field."""

    hours: float = 0.0
    shifts: int = 0
    overtime_hours: float = 0.0

    def __add__(self, other: "Totals") -> "Totals":
        return Totals(
            self.hours + other.hours,
            self.shifts + other.shifts,
            self.overtime_hours + other.overtime_hours,
        )


def shift_and_overtime(hours_per_person: float, shift_hours: float | None) -> tuple[int, float]:
    """
    Split one person's hours into a shift credit and overtime.

    Without a positive shift length no shift is credited and every hour is
    overtime. Otherwise the person gets one shift, plus the hours beyond the
    shift length as overtime.

    Returns:
        (shifts, overtime_hours)
    """
    if shift_hours is None or shift_hours <= 0:
        return 0, hours_per_person
    if hours_per_person <= shift_hours:
        return 1, 0.0
    return 1, hours_per_person - shift_hours


def person_totals(hours: float, task_type: TaskType) -> Totals:
    if task_type.is_hourly_service:
        return Totals(hours=hours)
    shifts, overtime = shift_and_overtime(hours, task_type.shift_hours)
    return Totals(hours, shifts, overtime)


def planned_hours(assignment: Assignment) -> float:
    return hours_between(assignment.start_time, assignment.end_time)


class HoursRow(NamedTuple):
    """One user's share of one assignment."""

    workday: Workday
    assignment: Assignment
    task_type: TaskType
    user_id: str  # "" for a slot with no user bound
    duty_id: str
    totals: Totals
    entries: tuple[TimeEntry, ...] = ()

    @property
    def date_key(self) -> str:
        return self.workday.date_key

    @property
    def category_totals(self) -> Totals:
        """Contribution to a duty category: raw hours for hourly services, shifts otherwise."""
        if self.task_type.is_hourly_service:
            return Totals(hours=self.totals.hours)
        return Totals(0.0, self.totals.shifts, self.totals.overtime_hours)


class ReportContext:
    """
    Lookup maps for a single report request.

    Built from the request's snapshot and dropped with it; nothing here is
    cached across requests.
    """

    def __init__(self, snapshot: ReportSnapshot, options: ReportOptions):
        self.options = options
        self.workdays = {wd.id: wd for wd in snapshot.workdays}
        self.task_types = {tt.id: tt for tt in snapshot.task_types}
        self.duties = {d.id: d for d in snapshot.duties}
        self.users = {u.id: u for u in snapshot.users}
        self.companies = {c.id: c for c in snapshot.companies}
        self.events = {e.id: e for e in snapshot.events}
        self.clients = {c.id: c for c in snapshot.clients}
        self.locations = {loc.id: loc for loc in snapshot.locations}
        self.assignments = list(snapshot.iter_assignments())

    # ============ Lookups ============

    def task_type(self, task_type_id: str | None) -> TaskType:
        return self.task_types.get(task_type_id or "", UNSPECIFIED_TASK_TYPE)

    def duty(self, duty_id: str) -> Duty:
        duty = self.duties.get(duty_id) if duty_id else None
        if duty is None:
            return Duty(id=UNSPECIFIED_DUTY_KEY, name=UNSPECIFIED_LABEL, code="")
        return duty

    def company_name(self, company_id: str) -> str:
        company: Company | None = self.companies.get(company_id)
        return company.name if company else company_id

    def user_name(self, user_id: str) -> str:
        user = self.users.get(user_id)
        return user.display_name if user else user_id

    def user_company(self, user_id: str) -> str | None:
        user = self.users.get(user_id)
        return user.company_id if user else None

    def event_title(self, event_id: str | None) -> str:
        event = self.events.get(event_id or "")
        return event.title if event else UNSPECIFIED_LABEL

    def location_name(self, location_id: str | None) -> str | None:
        location = self.locations.get(location_id or "")
        return location.display_name if location else None

    def client_name(self, client_id: str | None) -> str | None:
        client = self.clients.get(client_id or "")
        return client.display_name if client else None

    # ============ Selection ============

    def shift_assignments(
        self,
        *,
        event_id: str | None = None,
        client_id: str | None = None,
        location_id: str | None = None,
    ) -> Iterator[tuple[Workday, Assignment]]:
        """
        SHIFT assignments inside the requested date range, with their work-day.

        Activities are never reported. Assignments whose work-day is not in
        the snapshot cannot be dated and are skipped.
        """
        for assignment in self.assignments:
            workday = self.workdays.get(assignment.workday_id)
            if workday is None:
                logger.debug(f"Skipping assignment {assignment.id}: work-day {assignment.workday_id!r} not loaded")
                continue
            if not self.options.in_range(workday.date):
                continue
            if self.task_type(assignment.task_type_id).is_activity:
                continue
            if event_id is not None and workday.event_id != event_id:
                continue
            if client_id is not None and assignment.client_id != client_id:
                continue
            if location_id is not None and workday.location_id != location_id:
                continue
            yield workday, assignment


# ============ Rows ============


def assignment_rows(ctx: ReportContext, workday: Workday, assignment: Assignment) -> list[HoursRow]:
    """
    Per-user rows of one assignment.

    Actual mode sums each user's time entries, plus the break once per user
    when breaks count as worked time. Planned mode splits the planned
    interval (minus the break when breaks do not count) evenly across the
    participants; an assignment with no planned hours yields no rows.
    """
    warn_malformed_fields(assignment)

    task_type = ctx.task_type(assignment.task_type_id)
    duty_map = resolve_duty_map(assignment)
    include_breaks = breaks_included(task_type, ctx.options.include_breaks_hourly)
    break_hours = assignment_break_hours(assignment)

    def make_row(user_id: str, duty_id: str, hours: float, entries: Iterable[TimeEntry]) -> HoursRow:
        return HoursRow(workday, assignment, task_type, user_id, duty_id, person_totals(hours, task_type), tuple(entries))

    if ctx.options.is_actual:
        by_user: dict[str, list[TimeEntry]] = {}
        for entry in assignment.time_entries:
            by_user.setdefault(entry.user_id, []).append(entry)

        rows = []
        for user_id, entries in by_user.items():
            hours = sum(entry.hours_worked for entry in entries)
            if include_breaks:
                hours += break_hours
            rows.append(make_row(user_id, duty_for(duty_map, user_id), hours, entries))
        return rows

    users = participants(assignment)
    per_person = planned_per_person(ctx, assignment, task_type)
    if per_person <= 0:
        return []

    if not users:
        duty_id = assignment.personnel_requests.first_duty_id or UNSPECIFIED_DUTY_KEY
        return [make_row("", duty_id, per_person, ())]

    return [make_row(user_id, duty_for(duty_map, user_id), per_person, assignment.entries_for(user_id)) for user_id in users]


def planned_per_person(ctx: ReportContext, assignment: Assignment, task_type: TaskType) -> float:
    """Planned hours of the assignment divided across its participants (at least one)."""
    hours = planned_hours(assignment)
    if not breaks_included(task_type, ctx.options.include_breaks_hourly):
        hours = max(0.0, hours - assignment_break_hours(assignment))
    return hours / max(1, len(participants(assignment)))


def unbound_slot_row(ctx: ReportContext, workday: Workday, assignment: Assignment, duty_id: str) -> HoursRow | None:
    """A requested duty slot with no user bound, at the planned per-person hours; None without planned hours."""
    task_type = ctx.task_type(assignment.task_type_id)
    hours = planned_per_person(ctx, assignment, task_type)
    if hours <= 0:
        return None
    return HoursRow(workday, assignment, task_type, "", duty_id, person_totals(hours, task_type))


def collect_rows(ctx: ReportContext, pairs: Iterable[tuple[Workday, Assignment]]) -> list[HoursRow]:
    rows: list[HoursRow] = []
    for workday, assignment in pairs:
        rows.extend(assignment_rows(ctx, workday, assignment))
    logger.debug(f"Aggregated {len(rows)} rows ({ctx.options.hours_type})")
    return rows


def sum_totals(rows: Iterable[HoursRow]) -> Totals:
    total = Totals()
    for row in rows:
        total = total + row.totals
    return total


def summarize_by_duty(ctx: ReportContext, rows: Iterable[HoursRow]) -> list[DutyCategory]:
    """Duty categories of the rows, sorted by duty name."""
    by_duty: dict[str, Totals] = {}
    for row in rows:
        by_duty[row.duty_id] = by_duty.get(row.duty_id, Totals()) + row.category_totals

    categories: list[DutyCategory] = []
    for duty_id, totals in by_duty.items():
        duty = ctx.duty(duty_id)
        categories.append(
            {
                "dutyId": duty_id,
                "dutyCode": duty.code,
                "dutyName": duty.name,
                "hours": totals.hours,
                "shifts": totals.shifts,
                "overtimeHours": totals.overtime_hours,
            }
        )

    categories.sort(key=lambda c: (c["dutyName"], c["dutyId"]))
    return categories
