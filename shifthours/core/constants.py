# shifthours/core/constants.py
from typing import Final

# ==========================
# Task type kinds
# ==========================

#: Kind of a schedulable work period. Must fall inside an activity window.
TASK_KIND_SHIFT: Final[str] = "SHIFT"

#: Kind of a time window that defines when shifts are allowed on a work-day.
TASK_KIND_ACTIVITY: Final[str] = "ACTIVITY"


# ==========================
# Hours types
# ==========================

#: Hours taken from the recorded time entries.
HOURS_TYPE_ACTUAL: Final[str] = "actual"

#: Hours taken from the planned assignment interval.
HOURS_TYPE_PLANNED: Final[str] = "previsto"

#: Accepted spellings for the planned mode (the first one is canonical).
PLANNED_HOURS_ALIASES: Final[tuple[str, ...]] = (HOURS_TYPE_PLANNED, "planned", "scheduled")


# ==========================
# Fallback labels
# ==========================

#: Duty key used when a user has no duty bound on an assignment.
UNSPECIFIED_DUTY_KEY: Final[str] = ""

#: Display name for anything that could not be resolved (duty, task type, event).
UNSPECIFIED_LABEL: Final[str] = "Non specificato"

#: Task type key used when an assignment carries no task type id.
UNSPECIFIED_TASK_TYPE_KEY: Final[str] = ""
