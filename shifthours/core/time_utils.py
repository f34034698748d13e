"""
Clock arithmetic over "HH:MM" values.

All values are minutes since midnight (0-1439). An interval whose end is not
after its start crosses midnight: its end is read as end + 1440.
"""

import logging
import re
from typing import Any, NamedTuple

from shifthours.core.config import MAX_CLOCK_HOUR, MAX_CLOCK_MINUTE, MINUTES_PER_DAY, MINUTES_PER_HOUR
from shifthours.core.errors import InvalidTimeFormat

logger = logging.getLogger(__name__)

ClockTime = int

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)


def to_minutes(value: Any) -> ClockTime:
    """Parse "HH:MM" (or "H:MM") into minutes since midnight.

    Raises:
        InvalidTimeFormat: if the value is not two numeric fields separated by
            ":" or either field is out of range.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time format: {value!r}")

    match = _CLOCK_RE.fullmatch(value.strip())
    if match is None:
        raise InvalidTimeFormat(f"Invalid time format: {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > MAX_CLOCK_HOUR or minutes > MAX_CLOCK_MINUTE:
        raise InvalidTimeFormat(f"Time out of range: {value!r}")

    return hours * MINUTES_PER_HOUR + minutes


def format_minutes(minutes: int) -> str:
    """Inverse of to_minutes; values past midnight are folded back into the day."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def wrapped_end(start: ClockTime, end: ClockTime) -> int:
    """Return end, or end + 1440 when the interval crosses midnight."""
    if end > start:
        return end
    return end + MINUTES_PER_DAY


def duration(start: ClockTime, end: ClockTime) -> int:
    """Length in minutes, always in [0, 1440). Equal bounds mean zero length."""
    return (end - start) % MINUTES_PER_DAY


def minutes_to_hours(minutes: int) -> float:
    return minutes / MINUTES_PER_HOUR


class Interval(NamedTuple):
    """A clock interval; see the module docstring for the overnight rule."""

    start: ClockTime
    end: ClockTime

    @classmethod
    def parse(cls, start: Any, end: Any) -> "Interval":
        return cls(to_minutes(start), to_minutes(end))

    @property
    def is_overnight(self) -> bool:
        return self.end <= self.start

    @property
    def wrapped_end(self) -> int:
        return wrapped_end(self.start, self.end)

    @property
    def minutes(self) -> int:
        return duration(self.start, self.end)

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    def __str__(self) -> str:
        return f"{format_minutes(self.start)}-{format_minutes(self.end)}"


def contains_point(interval: Interval, point: int) -> bool:
    """Inclusive membership of point in [start, wrapped end]."""
    return interval.start <= point <= interval.wrapped_end


def hours_between(start: Any, end: Any) -> float:
    """
    Hours covered by a pair of clock strings, 0.0 when either is missing.

    Used on the read path, where a malformed legacy value must not abort a
    report: parse errors are logged and counted as zero hours.
    """
    if not start or not end:
        return 0.0
    try:
        return Interval.parse(start, end).hours
    except InvalidTimeFormat:
        logger.warning("Ignoring malformed time range %r-%r", start, end)
        return 0.0
