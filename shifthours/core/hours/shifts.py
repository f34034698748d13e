"""Placement of shifts inside the activity windows of their work-day."""

import logging
from typing import Iterable, Mapping

from shifthours.core.errors import (
    CompletelyOutOfRange,
    EndOutOfRange,
    InvalidTimeFormat,
    NoActivityDefined,
    StartOutOfRange,
)
from shifthours.core.models import Assignment, TaskType
from shifthours.core.time_utils import Interval, contains_point

logger = logging.getLogger(__name__)


def activity_assignments(
    assignments: Iterable[Assignment], task_types: Mapping[str, TaskType]
) -> list[Assignment]:
    """Assignments whose task type is an ACTIVITY."""
    result = []
    for assignment in assignments:
        task_type = task_types.get(assignment.task_type_id or "")
        if task_type is not None and task_type.is_activity:
            result.append(assignment)
    return result


def activity_spans(activities: Iterable[Assignment]) -> list[Interval]:
    """
    Time windows of the given activities.

    Activities without both times are not windows. Stored activities with
    unreadable times are skipped with a warning rather than blocking the
    validation of a new shift.
    """
    spans = []
    for activity in activities:
        if not activity.start_time or not activity.end_time:
            continue
        try:
            spans.append(Interval.parse(activity.start_time, activity.end_time))
        except InvalidTimeFormat:
            logger.warning(
                f"Skipping activity {activity.id} with malformed times "
                f"{activity.start_time!r}-{activity.end_time!r}"
            )
    return spans


def check_shift_within(shift: Interval, spans: list[Interval]) -> None:
    """
    Check the shift bounds against the activity windows.

    Start and end are tested independently, each against any window, so a
    shift running across two back-to-back activities is accepted. The start
    is tested as is and the end in its wrapped form.
    """
    if not spans:
        raise NoActivityDefined("No activity with start and end times is defined for this work-day")

    start_ok = any(contains_point(span, shift.start) for span in spans)
    end_ok = any(contains_point(span, shift.wrapped_end) for span in spans)

    if start_ok and end_ok:
        return
    if not start_ok and not end_ok:
        raise CompletelyOutOfRange(f"Shift {shift} is outside every activity window")
    if start_ok:
        raise EndOutOfRange(f"Shift {shift} ends outside every activity window")
    raise StartOutOfRange(f"Shift {shift} starts outside every activity window")


def validate_shift_placement(
    shift: Interval,
    workday_assignments: Iterable[Assignment],
    task_types: Mapping[str, TaskType],
) -> None:
    """
    Check a SHIFT interval against the ACTIVITY assignments of its work-day.

    Raises:
        NoActivityDefined: the work-day has no activity, or none with times
        StartOutOfRange: only the end is inside a window
        EndOutOfRange: only the start is inside a window
        CompletelyOutOfRange: neither bound is inside a window
    """
    activities = activity_assignments(workday_assignments, task_types)
    if not activities:
        raise NoActivityDefined("No activity is defined for this work-day")

    check_shift_within(shift, activity_spans(activities))
