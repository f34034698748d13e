# shifthours/core/types.py

"""
Shapes of the report trees returned to callers.

Keys are camelCase because the trees are serialized as-is to JSON clients.
"""

from typing import NewType, TypedDict

# Domain-specific type aliases
UserId = NewType("UserId", str)
DutyId = NewType("DutyId", str)
DateKey = NewType("DateKey", str)

Hours = float


class DutyCategory(TypedDict):
    """Per-duty totals inside a company, event or client report."""

    dutyId: DutyId
    dutyCode: str
    dutyName: str
    hours: Hours
    shifts: int
    overtimeHours: Hours


class ShiftDuty(TypedDict):
    dutyId: DutyId
    dutyName: str
    dutyCode: str
    numberOfPeople: int
    totalHours: Hours


class ShiftDetail(TypedDict):
    """One (start-end) bucket on a day, merged across assignments."""

    startTime: str | None
    endTime: str | None
    hasScheduledBreak: bool
    scheduledBreakStartTime: str | None
    scheduledBreakEndTime: str | None
    duties: list[ShiftDuty]
    totalHours: Hours
    numberOfPeople: int
    shifts: int
    overtimeHours: Hours


class TaskTypeDetail(TypedDict):
    taskTypeId: str
    taskTypeName: str
    isHourlyService: bool
    shifts: list[ShiftDetail]
    totalHours: Hours


class DailyDetail(TypedDict):
    date: DateKey
    taskTypes: list[TaskTypeDetail]


class TaskTypeTotals(TypedDict):
    """Per-task-type totals of a day in the duty report."""

    taskTypeId: str
    taskTypeName: str
    isHourlyService: bool
    totalHours: Hours
    shifts: int
    overtimeHours: Hours


class DailyTotals(TypedDict):
    date: DateKey
    taskTypes: list[TaskTypeTotals]


class ClientDailyDetail(TypedDict):
    date: DateKey
    locationId: str | None
    locationName: str | None
    eventId: str | None
    eventTitle: str
    taskTypes: list[TaskTypeDetail]


class EmployeeEntry(TypedDict):
    date: DateKey
    assignmentId: str
    eventId: str | None
    eventTitle: str
    taskTypeName: str
    hours: Hours
    startTime: str | None
    endTime: str | None
    notes: str | None
    shifts: int | None
    overtimeHours: Hours | None


class CompanyReport(TypedDict):
    companyId: str
    companyName: str
    totalHours: Hours
    totalShifts: int
    totalOvertimeHours: Hours
    categories: list[DutyCategory]
    dailyDetails: list[DailyDetail]


class EmployeeReport(TypedDict):
    userId: UserId
    userName: str
    userCode: str
    companyId: str | None
    totalHours: Hours
    totalShifts: int
    totalOvertimeHours: Hours
    hasOnlyShiftServices: bool
    entries: list[EmployeeEntry]
    dailyDetails: list[DailyDetail]


class ShiftHoursRow(TypedDict):
    """One participant of one shift in the shift-hours overview."""

    assignmentId: str
    date: DateKey
    userId: UserId
    userName: str
    companyId: str | None
    dutyName: str
    taskTypeName: str
    eventId: str | None
    eventTitle: str
    locationId: str | None
    locationName: str | None
    startTime: str | None
    endTime: str | None
    hasScheduledBreak: bool
    scheduledBreakStartTime: str | None
    scheduledBreakEndTime: str | None
    timeEntry: dict | None
