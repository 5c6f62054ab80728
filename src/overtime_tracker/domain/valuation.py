"""Monetary valuation of a single day entry."""

from dataclasses import dataclass

from overtime_tracker.domain.calculation import CalculationRegistry
from overtime_tracker.domain.hours import DayEntry
from overtime_tracker.domain.timekeeping import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    NIGHT_END_MINUTES,
    NIGHT_START_MINUTES,
    OvernightPolicy,
    is_night_minute,
    is_weekend,
    parse_iso_date,
    resolve_end,
    to_minutes,
    worked_hours,
)

PREMIUM_MULTIPLIER = 2.0
UNRESOLVED_MULTIPLIER = 1.0


@dataclass(frozen=True)
class ShiftChunk:
    """Part of a shift priced at a single multiplier.

    ``start`` and ``end`` are absolute minutes counted from midnight of the
    shift's start date, so a chunk after midnight has values above 1440.
    """

    start: int
    end: int
    multiplier: float
    hours: float
    value: float


def split_shift(
    entry: DayEntry,
    hourly_rate: float,
    base_multiplier: float,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> list[ShiftChunk]:
    """Split a shift at 08:00, 22:00 and midnight and price every chunk.

    Night minutes and any minute on a weekend date earn the premium
    multiplier; everything else earns ``base_multiplier``. Weekend status is
    taken from the entry's date advanced by the chunk's day offset.
    """
    if not entry.is_complete:
        return []
    start = to_minutes(entry.start_time)
    end = resolve_end(start, to_minutes(entry.end_time), policy)
    if end <= start:
        return []
    shift_date = parse_iso_date(entry.date)

    chunks: list[ShiftChunk] = []
    cursor = start
    while cursor < end:
        day_offset, minute_of_day = divmod(cursor, MINUTES_PER_DAY)
        day_start = cursor - minute_of_day
        if minute_of_day < NIGHT_END_MINUTES:
            next_cutoff = day_start + NIGHT_END_MINUTES
        elif minute_of_day < NIGHT_START_MINUTES:
            next_cutoff = day_start + NIGHT_START_MINUTES
        else:
            next_cutoff = day_start + MINUTES_PER_DAY

        chunk_end = min(next_cutoff, end)
        premium = is_weekend(shift_date, day_offset) or is_night_minute(minute_of_day)
        multiplier = PREMIUM_MULTIPLIER if premium else base_multiplier
        hours = (chunk_end - cursor) / MINUTES_PER_HOUR
        chunks.append(
            ShiftChunk(
                start=cursor,
                end=chunk_end,
                multiplier=multiplier,
                hours=hours,
                value=hours * hourly_rate * multiplier,
            )
        )
        cursor = chunk_end
    return chunks


def standard_model_value(
    entry: DayEntry,
    hourly_rate: float,
    base_multiplier: float,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> float:
    """Return the value of a shift under the standard night/weekend rules."""
    total = 0.0
    for chunk in split_shift(entry, hourly_rate, base_multiplier, policy):
        total += chunk.value
    return total


def value_of_day(
    entry: DayEntry,
    registry: CalculationRegistry,
    hourly_rate: float,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> float:
    """Return the monetary value of one day entry.

    Entries with no worked time are worth 0. A model id the registry does
    not know is paid at straight time.
    """
    hours = worked_hours(entry.start_time, entry.end_time, policy)
    if hours <= 0:
        return 0.0
    model = registry.lookup(entry.calculation_model_id)
    if model is not None and model.is_standard:
        return standard_model_value(entry, hourly_rate, model.multiplier, policy)
    multiplier = model.multiplier if model is not None else UNRESOLVED_MULTIPLIER
    return hours * hourly_rate * multiplier
