# shifthours/core/config.py

from typing import Final


# ==========================
# Clock arithmetic
# ==========================

#: Minutes in one day. Overnight intervals are unrolled by adding this value
#: to the end time.
MINUTES_PER_DAY: Final[int] = 24 * 60

#: Minutes per hour, used when converting interval durations to hours.
MINUTES_PER_HOUR: Final[int] = 60

#: Highest valid hour value in an "HH:MM" clock string.
MAX_CLOCK_HOUR: Final[int] = 23

#: Highest valid minute value in an "HH:MM" clock string.
MAX_CLOCK_MINUTE: Final[int] = 59


# ==========================
# Report defaults
# ==========================

#: Default for the includeBreaksHourly report flag. Only affects hourly
#: services; shift-based services never include breaks.
DEFAULT_INCLUDE_BREAKS_HOURLY: Final[bool] = True

#: Default for the showBreakTimes report flag (echoed to the caller).
DEFAULT_SHOW_BREAK_TIMES: Final[bool] = True

#: Default for the includeDailyDetails report flag.
DEFAULT_INCLUDE_DAILY_DETAILS: Final[bool] = True
