"""Checks run on an assignment before it is created or updated."""

import logging
from typing import Iterable, Mapping

from shifthours.core.errors import AssignmentValidationError, UnknownTaskType, ZeroLengthShift
from shifthours.core.models import Assignment, TaskType
from shifthours.core.time_utils import Interval

from .breaks import validate_break
from .duties import warn_malformed_fields
from .shifts import validate_shift_placement

logger = logging.getLogger(__name__)


def validate_assignment(
    candidate: Assignment,
    workday_assignments: Iterable[Assignment],
    task_types: Mapping[str, TaskType],
) -> Assignment:
    """
    Validate a proposed assignment against its work-day.

    ACTIVITY assignments always pass. A SHIFT needs readable, non-zero times,
    must lie inside the work-day's activity windows and, when a break is
    scheduled, must contain it. ``assignedUsers`` is already normalized
    (first entry per user) by the time the candidate is parsed.

    Args:
        candidate: The assignment to create or update
        workday_assignments: Assignments already stored on the same work-day;
            a stored copy of the candidate itself is ignored
        task_types: Task types by id

    Returns:
        The candidate, ready to persist

    Raises:
        AssignmentValidationError: the matching failure kind
    """
    task_type = task_types.get(candidate.task_type_id or "")
    if task_type is None:
        raise UnknownTaskType(f"Task type {candidate.task_type_id!r} not found")

    warn_malformed_fields(candidate)

    if task_type.is_activity:
        return candidate

    shift = Interval.parse(candidate.start_time, candidate.end_time)
    if shift.minutes == 0:
        raise ZeroLengthShift(f"Shift {shift} has zero length")

    others = [a for a in workday_assignments if a.id != candidate.id]
    validate_shift_placement(shift, others, task_types)

    if candidate.has_scheduled_break:
        validate_break(shift, candidate.scheduled_break_start_time, candidate.scheduled_break_end_time)

    return candidate


def check_assignment(
    candidate: Assignment,
    workday_assignments: Iterable[Assignment],
    task_types: Mapping[str, TaskType],
) -> dict[str, str] | None:
    """Run validate_assignment and return the rejection as ``{kind, message}``, or None if valid."""
    try:
        validate_assignment(candidate, workday_assignments, task_types)
    except AssignmentValidationError as e:
        logger.info(f"Rejected assignment {candidate.id}: {e.kind}: {e.message}")
        return e.to_dict()
    return None
