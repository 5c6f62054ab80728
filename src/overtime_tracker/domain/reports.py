"""Monthly totals and chart breakdowns over day entries."""

import math
from collections.abc import Iterable, Sequence

from overtime_tracker.domain.calculation import CalculationRegistry
from overtime_tracker.domain.hours import (
    DailyAverage,
    DayEntry,
    FlatRateTotals,
    MonthlyTotals,
    MonthReport,
    ProjectSummary,
    SeriesPoint,
)
from overtime_tracker.domain.timekeeping import OvernightPolicy, worked_hours
from overtime_tracker.domain.valuation import value_of_day

MONTHLY_HOURS_BASE = 160
OVERTIME_50_MULTIPLIER = 1.5
OVERTIME_100_MULTIPLIER = 2.0


def hourly_rate(salary: float | None) -> float:
    """Return the base hourly rate for a monthly salary."""
    if salary is None:
        return 0.0
    rate = salary / MONTHLY_HOURS_BASE
    return rate if math.isfinite(rate) else 0.0


def monthly_totals(
    days: Iterable[DayEntry],
    salary: float | None,
    registry: CalculationRegistry,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> MonthlyTotals:
    """Return total hours and value for a month of entries.

    Sums use ``math.fsum`` so the totals do not depend on entry order.
    """
    entries = list(days)
    rate = hourly_rate(salary)
    return MonthlyTotals(
        total_hours=math.fsum(
            worked_hours(day.start_time, day.end_time, policy) for day in entries
        ),
        total_value=math.fsum(
            value_of_day(day, registry, rate, policy) for day in entries
        ),
    )


def flat_rate_totals(days: Iterable[DayEntry], salary: float | None) -> FlatRateTotals:
    """Return totals priced at fixed 50% and 100% overtime rates."""
    total_hours = math.fsum(
        worked_hours(day.start_time, day.end_time, OvernightPolicy.NO_WRAP)
        for day in days
    )
    rate = hourly_rate(salary)
    return FlatRateTotals(
        total_hours=total_hours,
        total_50=total_hours * rate * OVERTIME_50_MULTIPLIER,
        total_100=total_hours * rate * OVERTIME_100_MULTIPLIER,
    )


def per_date_series(
    days: Iterable[DayEntry], policy: OvernightPolicy = OvernightPolicy.WRAP
) -> list[SeriesPoint]:
    """Return hours per date, oldest first."""
    totals: dict[str, list[float]] = {}
    for day in days:
        if not day.is_complete:
            continue
        hours = worked_hours(day.start_time, day.end_time, policy)
        if hours <= 0:
            continue
        totals.setdefault(day.date, []).append(hours)
    return [
        SeriesPoint(label=label, hours=math.fsum(values))
        for label, values in sorted(totals.items())
    ]


def per_project_series(
    days: Iterable[DayEntry], policy: OvernightPolicy = OvernightPolicy.WRAP
) -> list[SeriesPoint]:
    """Return hours per project, largest first."""
    totals: dict[str, list[float]] = {}
    for day, hours in _worked_entries(days, policy):
        totals.setdefault(day.project_label, []).append(hours)
    points = [
        SeriesPoint(label=label, hours=math.fsum(values))
        for label, values in totals.items()
    ]
    return sorted(points, key=lambda point: point.hours, reverse=True)


def per_project_summary(
    days: Iterable[DayEntry],
    salary: float | None,
    registry: CalculationRegistry,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> list[ProjectSummary]:
    """Return hours and value per project, largest first."""
    rate = hourly_rate(salary)
    hours_by_project: dict[str, list[float]] = {}
    value_by_project: dict[str, list[float]] = {}
    for day, hours in _worked_entries(days, policy):
        label = day.project_label
        hours_by_project.setdefault(label, []).append(hours)
        value_by_project.setdefault(label, []).append(
            value_of_day(day, registry, rate, policy)
        )
    summaries = [
        ProjectSummary(
            label=label,
            hours=math.fsum(hours),
            total_value=math.fsum(value_by_project[label]),
        )
        for label, hours in hours_by_project.items()
    ]
    return sorted(summaries, key=lambda summary: summary.hours, reverse=True)


def daily_average(
    days: Iterable[DayEntry], policy: OvernightPolicy = OvernightPolicy.WRAP
) -> DailyAverage:
    """Return the mean hours across dates with worked time."""
    series = per_date_series(days, policy)
    if not series:
        return DailyAverage(average_hours=0.0, worked_days=0)
    return DailyAverage(
        average_hours=math.fsum(point.hours for point in series) / len(series),
        worked_days=len(series),
    )


def build_month_report(
    days: Sequence[DayEntry],
    salary: float | None,
    registry: CalculationRegistry,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> MonthReport:
    """Bundle totals and every breakdown for one month."""
    return MonthReport(
        totals=monthly_totals(days, salary, registry, policy),
        day_hours=per_date_series(days, policy),
        project_hours=per_project_series(days, policy),
        project_summary=per_project_summary(days, salary, registry, policy),
        daily_average=daily_average(days, policy),
    )


def _worked_entries(
    days: Iterable[DayEntry], policy: OvernightPolicy
) -> Iterable[tuple[DayEntry, float]]:
    for day in days:
        if not day.start_time or not day.end_time:
            continue
        hours = worked_hours(day.start_time, day.end_time, policy)
        if hours > 0:
            yield day, hours
