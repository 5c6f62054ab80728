"""Clock and calendar arithmetic for worked intervals."""

import re
from datetime import date, timedelta
from enum import StrEnum

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
NIGHT_START_MINUTES = 22 * MINUTES_PER_HOUR
NIGHT_END_MINUTES = 8 * MINUTES_PER_HOUR
SUNDAY = 0
SATURDAY = 6

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class OvernightPolicy(StrEnum):
    """How an end time earlier than the start time is interpreted."""

    WRAP = "wrap"
    NO_WRAP = "no_wrap"


def to_minutes(value: str | None) -> int:
    """Return minutes since midnight for an HH:MM clock string, 0 if invalid."""
    if not value:
        return 0
    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        return 0
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours >= 24 or minutes >= MINUTES_PER_HOUR:  # noqa: PLR2004
        return 0
    return hours * MINUTES_PER_HOUR + minutes


def resolve_end(
    start_minutes: int,
    end_minutes: int,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> int:
    """Return the absolute end minute of a shift under the given policy.

    Under WRAP an end before the start falls on the next calendar day. Under
    NO_WRAP such a shift collapses to its start, so it has no duration.
    """
    if end_minutes >= start_minutes:
        return end_minutes
    if policy == OvernightPolicy.WRAP:
        return end_minutes + MINUTES_PER_DAY
    return start_minutes


def worked_hours(
    start_time: str | None,
    end_time: str | None,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> float:
    """Return hours worked between two clock strings."""
    if not start_time or not end_time:
        return 0.0
    start = to_minutes(start_time)
    end = resolve_end(start, to_minutes(end_time), policy)
    if end <= start:
        return 0.0
    return (end - start) / MINUTES_PER_HOUR


def parse_iso_date(value: str | date | None) -> date | None:
    """Parse a YYYY-MM-DD string, returning None when it is not a date."""
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def day_of_week(value: str | date | None, offset: int = 0) -> int | None:
    """Return the weekday (0=Sunday .. 6=Saturday) of a date shifted by days."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    shifted = parsed + timedelta(days=offset)
    return (shifted.weekday() + 1) % 7


def is_weekend(value: str | date | None, offset: int = 0) -> bool:
    """Return True when the shifted date is a Saturday or Sunday."""
    return day_of_week(value, offset) in {SUNDAY, SATURDAY}


def is_night_minute(minute_of_day: int) -> bool:
    """Return True for minutes within 22:00-24:00 or 00:00-08:00."""
    return minute_of_day >= NIGHT_START_MINUTES or minute_of_day < NIGHT_END_MINUTES
