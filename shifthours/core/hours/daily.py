"""
Daily detail trees: date -> task type -> shift (start-end) -> duty.

Assignments that share a date, task type and planned start-end fall into the
same shift bucket and add up.
"""

from shifthours.core.constants import UNSPECIFIED_TASK_TYPE_KEY
from shifthours.core.models import TaskType

from shifthours.core.types import DailyDetail, DailyTotals, ShiftDetail, TaskTypeDetail, TaskTypeTotals

from .aggregator import HoursRow, ReportContext, Totals


class ShiftBucket:
    """Accumulates the rows of one (date, task type, start-end) shift."""

    def __init__(self, row: HoursRow):
        assignment = row.assignment
        self.planned_start = assignment.start_time
        self.planned_end = assignment.end_time
        self.has_scheduled_break = assignment.has_scheduled_break
        self.break_start = assignment.scheduled_break_start_time
        self.break_end = assignment.scheduled_break_end_time
        self.actual_start: str | None = None
        self.actual_end: str | None = None
        self.totals = Totals()
        self.people = 0
        self.duties: dict[str, list] = {}

    def add(self, row: HoursRow) -> None:
        self.totals = self.totals + row.totals
        self.people += 1

        duty = self.duties.setdefault(row.duty_id, [0, 0.0])
        duty[0] += 1
        duty[1] += row.totals.hours

        for entry in row.entries:
            if entry.start_time and (self.actual_start is None or entry.start_time < self.actual_start):
                self.actual_start = entry.start_time
            if entry.end_time and (self.actual_end is None or entry.end_time > self.actual_end):
                self.actual_end = entry.end_time

    def display_times(self, actual: bool) -> tuple[str | None, str | None]:
        if not actual:
            return self.planned_start, self.planned_end
        return self.actual_start or self.planned_start, self.actual_end or self.planned_end

    def to_dict(self, ctx: ReportContext) -> ShiftDetail:
        start, end = self.display_times(ctx.options.is_actual)

        duties = []
        for duty_id, (people, hours) in self.duties.items():
            duty = ctx.duty(duty_id)
            duties.append(
                {
                    "dutyId": duty_id,
                    "dutyName": duty.name,
                    "dutyCode": duty.code,
                    "numberOfPeople": people,
                    "totalHours": hours,
                }
            )
        duties.sort(key=lambda d: (d["dutyName"], d["dutyId"]))

        return {
            "startTime": start,
            "endTime": end,
            "hasScheduledBreak": self.has_scheduled_break,
            "scheduledBreakStartTime": self.break_start,
            "scheduledBreakEndTime": self.break_end,
            "duties": duties,
            "totalHours": self.totals.hours,
            "numberOfPeople": self.people,
            "shifts": self.totals.shifts,
            "overtimeHours": self.totals.overtime_hours,
        }


class DayBucket:
    """Task types and shifts of a single day (or client group)."""

    def __init__(self):
        self.shifts: dict[str, dict[str, ShiftBucket]] = {}
        self.task_types: dict[str, TaskType] = {}

    def add(self, row: HoursRow) -> None:
        task_type_key = row.assignment.task_type_id or UNSPECIFIED_TASK_TYPE_KEY
        self.task_types.setdefault(task_type_key, row.task_type)

        shifts = self.shifts.setdefault(task_type_key, {})
        shift_key = row.assignment.shift_key
        if shift_key not in shifts:
            shifts[shift_key] = ShiftBucket(row)
        shifts[shift_key].add(row)

    def task_type_details(self, ctx: ReportContext) -> list[TaskTypeDetail]:
        """Task types sorted by name, each with its shifts sorted by start time."""
        details: list[TaskTypeDetail] = []
        for task_type_key, shifts in self.shifts.items():
            task_type = self.task_types[task_type_key]
            shift_dicts = [bucket.to_dict(ctx) for bucket in shifts.values()]
            shift_dicts.sort(key=lambda s: s["startTime"] or "")
            details.append(
                {
                    "taskTypeId": task_type_key,
                    "taskTypeName": task_type.name,
                    "isHourlyService": task_type.is_hourly_service,
                    "shifts": shift_dicts,
                    "totalHours": sum(s["totalHours"] for s in shift_dicts),
                }
            )
        details.sort(key=lambda t: t["taskTypeName"])
        return details

    def task_type_totals(self) -> list[TaskTypeTotals]:
        """Task types sorted by name with summed totals only."""
        totals: list[TaskTypeTotals] = []
        for task_type_key, shifts in self.shifts.items():
            task_type = self.task_types[task_type_key]
            total = Totals()
            for bucket in shifts.values():
                total = total + bucket.totals
            totals.append(
                {
                    "taskTypeId": task_type_key,
                    "taskTypeName": task_type.name,
                    "isHourlyService": task_type.is_hourly_service,
                    "totalHours": total.hours,
                    "shifts": total.shifts,
                    "overtimeHours": total.overtime_hours,
                }
            )
        totals.sort(key=lambda t: t["taskTypeName"])
        return totals


class DailyDetails:
    """Rows bucketed by work-day date."""

    def __init__(self):
        self.days: dict[str, DayBucket] = {}

    def add(self, row: HoursRow) -> None:
        self.days.setdefault(row.date_key, DayBucket()).add(row)

    def add_all(self, rows) -> "DailyDetails":
        for row in rows:
            self.add(row)
        return self

    def to_list(self, ctx: ReportContext) -> list[DailyDetail]:
        return [
            {"date": date_key, "taskTypes": self.days[date_key].task_type_details(ctx)}
            for date_key in sorted(self.days)
        ]

    def to_totals_list(self) -> list[DailyTotals]:
        return [
            {"date": date_key, "taskTypes": self.days[date_key].task_type_totals()}
            for date_key in sorted(self.days)
        ]


def build_daily_details(ctx: ReportContext, rows) -> list[DailyDetail]:
    """Daily detail tree of the rows, or [] when the caller opted out."""
    if not ctx.options.include_daily_details:
        return []
    return DailyDetails().add_all(rows).to_list(ctx)
