"""Scheduled break validation and measurement."""

import logging

from shifthours.core.config import MINUTES_PER_DAY
from shifthours.core.errors import BreakEndNotAfterStart, BreakOutsideShiftRange, BreakTimesMissing
from shifthours.core.models import Assignment, TaskType
from shifthours.core.time_utils import Interval, hours_between

logger = logging.getLogger(__name__)


def validate_break(shift: Interval, break_start: str | None, break_end: str | None) -> Interval:
    """
    Check that a scheduled break lies inside its shift.

    Both intervals are laid out on the shift's own day axis: the break start
    is moved to the first occurrence at or after the shift start, so a break
    at 01:00 inside a 22:00-06:00 shift is read as 25:00.

    Args:
        shift: The owning shift, already parsed
        break_start: Break start "HH:MM"
        break_end: Break end "HH:MM"

    Returns:
        The parsed break interval

    Raises:
        BreakTimesMissing: a bound is missing while the break is flagged
        InvalidTimeFormat: a bound does not parse
        BreakEndNotAfterStart: the break has zero length
        BreakOutsideShiftRange: the break ends after the shift
    """
    if not break_start or not break_end:
        raise BreakTimesMissing("Scheduled break requires both a start and an end time")

    brk = Interval.parse(break_start, break_end)

    shift_end = shift.start + shift.minutes
    start = shift.start + (brk.start - shift.start) % MINUTES_PER_DAY
    end = start + brk.minutes

    if end <= start:
        raise BreakEndNotAfterStart(f"Break end {break_end} must be after break start {break_start}")

    # start is never before the shift start once normalized
    if end > shift_end:
        raise BreakOutsideShiftRange(f"Break {brk} is outside the shift {shift}")

    return brk


def break_hours(brk: Interval) -> float:
    return brk.hours


def breaks_included(task_type: TaskType, include_breaks_hourly: bool) -> bool:
    """Break time counts as worked time only for hourly services, and only on request."""
    return task_type.is_hourly_service and include_breaks_hourly


def assignment_break_hours(assignment: Assignment) -> float:
    """Hours of the assignment's scheduled break, 0.0 when there is none or it is unreadable."""
    if not assignment.has_scheduled_break:
        return 0.0
    return hours_between(assignment.scheduled_break_start_time, assignment.scheduled_break_end_time)
