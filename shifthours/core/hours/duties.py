"""Who took part in an assignment, and in which duty."""

import logging

from shifthours.core.constants import UNSPECIFIED_DUTY_KEY
from shifthours.core.models import Assignment, ParseStatus

logger = logging.getLogger(__name__)


def warn_malformed_fields(assignment: Assignment) -> None:
    """Log the legacy JSON fields that were dropped as unreadable."""
    if assignment.assigned_users.status is ParseStatus.MALFORMED:
        logger.warning(
            "Ignoring malformed assignedUsers",
            extra={"extra_fields": {"assignment_id": assignment.id, "field": "assignedUsers"}},
        )
    if assignment.personnel_requests.status is ParseStatus.MALFORMED:
        logger.warning(
            "Ignoring malformed personnelRequests",
            extra={"extra_fields": {"assignment_id": assignment.id, "field": "personnelRequests"}},
        )


def time_entry_users(assignment: Assignment) -> list[str]:
    """Distinct users with a time entry, in entry order."""
    return list(dict.fromkeys(entry.user_id for entry in assignment.time_entries))


def resolve_duty_map(assignment: Assignment) -> dict[str, str]:
    """
    Map each known user of the assignment to a duty id.

    Sources, first match wins:
      1. explicit userId -> dutyId bindings in assignedUsers
      2. otherwise the first requested duty in personnelRequests, applied to
         every user with a time entry
      3. the bare userId of the assignment maps to the unspecified duty

    Users missing from the result belong to the unspecified duty, see duty_for().
    """
    duty_map = assignment.assigned_users.duty_map()

    if not duty_map:
        requested = assignment.personnel_requests.first_duty_id
        if requested:
            duty_map = {user_id: requested for user_id in time_entry_users(assignment)}

    if assignment.user_id and assignment.user_id not in duty_map:
        duty_map[assignment.user_id] = UNSPECIFIED_DUTY_KEY

    return duty_map


def duty_for(duty_map: dict[str, str], user_id: str) -> str:
    return duty_map.get(user_id, UNSPECIFIED_DUTY_KEY)


def participants(assignment: Assignment) -> list[str]:
    """
    Users the planned hours are split across.

    assignedUsers if any, else the users with time entries, else the bare
    userId. May be empty; callers divide by max(1, len(...)).
    """
    assigned = assignment.assigned_users.user_ids
    if assigned:
        return assigned

    recorded = time_entry_users(assignment)
    if recorded:
        return recorded

    if assignment.user_id:
        return [assignment.user_id]
    return []
