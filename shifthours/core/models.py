"""
Pydantic models for the records the core consumes.

Callers send camelCase JSON (``workdayId``, ``isHourlyService``); snake_case
names are accepted as well. The JSON-in-a-string fields ``assignedUsers`` and
``personnelRequests`` are parsed here, once, into typed lists with a parse
status, so the aggregation code never touches raw JSON.
"""

import datetime
import json
import logging
from enum import Enum
from typing import Any, Iterator, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from shifthours.core.config import (
    DEFAULT_INCLUDE_BREAKS_HOURLY,
    DEFAULT_INCLUDE_DAILY_DETAILS,
    DEFAULT_SHOW_BREAK_TIMES,
)
from shifthours.core.constants import (
    HOURS_TYPE_ACTUAL,
    HOURS_TYPE_PLANNED,
    PLANNED_HOURS_ALIASES,
    TASK_KIND_ACTIVITY,
    TASK_KIND_SHIFT,
)

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParseStatus(str, Enum):
    """Outcome of parsing a legacy JSON field."""

    OK = "ok"
    EMPTY = "empty"
    MALFORMED = "malformed"


class AssignedUser(CamelModel):
    """A concrete user bound to an assignment, optionally with a duty."""

    user_id: str
    duty_id: str | None = None


class PersonnelRequest(CamelModel):
    """A requested duty slot with no user bound yet."""

    duty_id: str | None = None
    count: int = 1


class AssignedUserList(BaseModel):
    status: ParseStatus = ParseStatus.EMPTY
    entries: list[AssignedUser] = []

    @property
    def user_ids(self) -> list[str]:
        return [entry.user_id for entry in self.entries]

    def duty_map(self) -> dict[str, str]:
        """Explicit userId -> dutyId bindings (entries without a duty are skipped)."""
        return {entry.user_id: entry.duty_id for entry in self.entries if entry.duty_id}


class PersonnelRequestList(BaseModel):
    status: ParseStatus = ParseStatus.EMPTY
    entries: list[PersonnelRequest] = []

    @property
    def first_duty_id(self) -> str | None:
        if not self.entries:
            return None
        return self.entries[0].duty_id

    def requests_duty(self, duty_id: str) -> bool:
        return any(entry.duty_id == duty_id for entry in self.entries)


def _load_json_list(raw: Any) -> tuple[ParseStatus, list[Any]]:
    if raw is None:
        return ParseStatus.EMPTY, []
    if isinstance(raw, str):
        if not raw.strip():
            return ParseStatus.EMPTY, []
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return ParseStatus.MALFORMED, []
    if not isinstance(raw, list):
        return ParseStatus.MALFORMED, []
    if not raw:
        return ParseStatus.EMPTY, []
    return ParseStatus.OK, raw


def parse_assigned_users(raw: Any) -> AssignedUserList:
    """
    Parse the ``assignedUsers`` field.

    Accepts a JSON string or a list whose items are either bare user ids or
    objects with ``userId`` and an optional ``dutyId``. Items that are neither
    are dropped. The first entry for a user wins. Never raises.
    """
    if isinstance(raw, AssignedUserList):
        return raw

    status, items = _load_json_list(raw)
    entries: list[AssignedUser] = []
    seen: set[str] = set()

    for item in items:
        if isinstance(item, AssignedUser):
            user_id, duty_id = item.user_id, item.duty_id
        elif isinstance(item, str):
            user_id, duty_id = item, None
        elif isinstance(item, dict):
            user_id = item.get("userId", item.get("user_id"))
            duty_id = item.get("dutyId", item.get("duty_id"))
        else:
            continue

        if not isinstance(user_id, str) or not user_id or user_id in seen:
            continue
        if not isinstance(duty_id, str) or not duty_id:
            duty_id = None

        seen.add(user_id)
        entries.append(AssignedUser(user_id=user_id, duty_id=duty_id))

    return AssignedUserList(status=status, entries=entries)


def parse_personnel_requests(raw: Any) -> PersonnelRequestList:
    """Parse the ``personnelRequests`` field. Order is kept; never raises."""
    if isinstance(raw, PersonnelRequestList):
        return raw

    status, items = _load_json_list(raw)
    entries: list[PersonnelRequest] = []

    for item in items:
        if isinstance(item, PersonnelRequest):
            entries.append(item)
            continue
        if not isinstance(item, dict):
            continue
        duty_id = item.get("dutyId", item.get("duty_id"))
        count = item.get("count", item.get("quantity", 1))
        if not isinstance(count, int) or isinstance(count, bool):
            count = 1
        entries.append(PersonnelRequest(duty_id=duty_id if isinstance(duty_id, str) and duty_id else None, count=count))

    return PersonnelRequestList(status=status, entries=entries)


# ============ Reference data ============


class TaskType(CamelModel):
    """Shift or activity type, with its hours accounting mode."""

    id: str
    name: str
    kind: Literal["SHIFT", "ACTIVITY"] = Field(
        default=TASK_KIND_SHIFT, validation_alias=AliasChoices("kind", "type")
    )
    is_hourly_service: bool = True
    shift_hours: float | None = None

    @property
    def is_shift(self) -> bool:
        return self.kind == TASK_KIND_SHIFT

    @property
    def is_activity(self) -> bool:
        return self.kind == TASK_KIND_ACTIVITY


class Duty(CamelModel):
    id: str
    name: str
    code: str = ""


class User(CamelModel):
    id: str
    name: str = ""
    surname: str = Field(default="", validation_alias=AliasChoices("surname", "cognome"))
    code: str = ""
    company_id: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.surname}".strip() or self.id


class Company(CamelModel):
    id: str
    name: str = Field(validation_alias=AliasChoices("name", "ragioneSociale"))


class Client(CamelModel):
    id: str
    name: str = ""
    code: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.code or self.id


class Location(CamelModel):
    id: str
    name: str
    city: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.city})" if self.city else self.name


class Event(CamelModel):
    id: str
    title: str
    location_id: str | None = None
    client_ids: list[str] = []

    @field_validator("client_ids", mode="before")
    @classmethod
    def _parse_client_ids(cls, value: Any) -> list[str]:
        status, items = _load_json_list(value)
        if status is ParseStatus.MALFORMED:
            logger.warning("Ignoring malformed clientIds on event: %r", value)
        return [item for item in items if isinstance(item, str)]


# ============ Assignments ============


class TimeEntry(CamelModel):
    """Hours a user recorded against an assignment."""

    user_id: str
    hours_worked: float = 0.0
    date: datetime.date | None = None
    start_time: str | None = None
    end_time: str | None = None
    notes: str | None = None

    @field_validator("hours_worked", mode="before")
    @classmethod
    def _none_is_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value


class Assignment(CamelModel):
    """A shift or activity placed on a work-day."""

    id: str
    workday_id: str = ""
    task_type_id: str | None = None
    user_id: str | None = None
    client_id: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    has_scheduled_break: bool = False
    scheduled_break_start_time: str | None = None
    scheduled_break_end_time: str | None = None
    assigned_users: AssignedUserList = Field(default_factory=AssignedUserList)
    personnel_requests: PersonnelRequestList = Field(default_factory=PersonnelRequestList)
    time_entries: list[TimeEntry] = []
    note: str | None = None

    @field_validator("assigned_users", mode="before")
    @classmethod
    def _parse_assigned_users(cls, value: Any) -> AssignedUserList:
        return parse_assigned_users(value)

    @field_validator("personnel_requests", mode="before")
    @classmethod
    def _parse_personnel_requests(cls, value: Any) -> PersonnelRequestList:
        return parse_personnel_requests(value)

    @field_serializer("assigned_users")
    def _dump_assigned_users(self, value: AssignedUserList) -> list[dict]:
        return [entry.model_dump(by_alias=True, exclude_none=True) for entry in value.entries]

    @field_serializer("personnel_requests")
    def _dump_personnel_requests(self, value: PersonnelRequestList) -> list[dict]:
        return [entry.model_dump(by_alias=True, exclude_none=True) for entry in value.entries]

    @property
    def shift_key(self) -> str:
        return f"{self.start_time or ''}-{self.end_time or ''}"

    def entries_for(self, user_id: str) -> list[TimeEntry]:
        return [te for te in self.time_entries if te.user_id == user_id]


class Workday(CamelModel):
    id: str
    date: datetime.date
    event_id: str | None = None
    location_id: str | None = None
    assignments: list[Assignment] = []

    @property
    def date_key(self) -> str:
        return self.date.isoformat()


class ReportSnapshot(CamelModel):
    """Already-fetched, read-only records for one report request."""

    workdays: list[Workday] = []
    assignments: list[Assignment] = []
    task_types: list[TaskType] = []
    duties: list[Duty] = []
    users: list[User] = []
    companies: list[Company] = []
    events: list[Event] = []
    clients: list[Client] = []
    locations: list[Location] = []

    def iter_assignments(self) -> Iterator[Assignment]:
        """
        Top-level assignments followed by those nested in work-days.

        An id already seen is skipped, so an assignment sent both ways
        counts once (the first copy wins).
        """
        seen: set[str] = set()
        for assignment in self.assignments:
            if assignment.id in seen:
                continue
            seen.add(assignment.id)
            yield assignment
        for workday in self.workdays:
            for assignment in workday.assignments:
                if assignment.id in seen:
                    continue
                seen.add(assignment.id)
                if assignment.workday_id:
                    yield assignment
                else:
                    yield assignment.model_copy(update={"workday_id": workday.id})


# ============ Report options ============


class ReportOptions(CamelModel):
    """Per-request report parameters, validated once at the boundary."""

    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    hours_type: str = HOURS_TYPE_ACTUAL
    include_breaks_hourly: bool = DEFAULT_INCLUDE_BREAKS_HOURLY
    show_break_times: bool = DEFAULT_SHOW_BREAK_TIMES
    include_daily_details: bool = DEFAULT_INCLUDE_DAILY_DETAILS
    company_id: str | None = None
    user_id: str | None = None
    client_id: str | None = None
    location_id: str | None = None

    @field_validator("hours_type")
    @classmethod
    def _normalize_hours_type(cls, value: str) -> str:
        value = (value or HOURS_TYPE_ACTUAL).strip().lower()
        if value == HOURS_TYPE_ACTUAL:
            return HOURS_TYPE_ACTUAL
        if value in PLANNED_HOURS_ALIASES:
            return HOURS_TYPE_PLANNED
        raise ValueError(f"hoursType must be '{HOURS_TYPE_ACTUAL}' or '{HOURS_TYPE_PLANNED}'")

    @property
    def is_actual(self) -> bool:
        return self.hours_type == HOURS_TYPE_ACTUAL

    def in_range(self, date: datetime.date) -> bool:
        if self.start_date is not None and date < self.start_date:
            return False
        if self.end_date is not None and date > self.end_date:
            return False
        return True
