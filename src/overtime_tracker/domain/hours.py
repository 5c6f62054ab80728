"""Domain models for logged working hours."""

from dataclasses import dataclass, field, replace
from uuid import uuid4

from overtime_tracker.domain.timekeeping import OvernightPolicy, worked_hours

NO_PROJECT_LABEL = "No project"


def generate_entry_id() -> str:
    """Return a new opaque identifier for a day entry."""
    return str(uuid4())


@dataclass(frozen=True)
class DayEntry:
    """One interval of work on a calendar date."""

    date: str
    start_time: str
    end_time: str
    project_worked: str = ""
    calculation_model_id: str = ""
    id: str = field(default_factory=generate_entry_id)

    @property
    def project_label(self) -> str:
        """Trimmed project name, or the no-project label when blank."""
        return self.project_worked.strip() or NO_PROJECT_LABEL

    @property
    def is_complete(self) -> bool:
        """True when date, start, and end are all filled in."""
        return bool(self.date and self.start_time and self.end_time)

    def with_model(self, model_id: str) -> "DayEntry":
        """Return a copy pointing at another calculation model."""
        return replace(self, calculation_model_id=model_id)


@dataclass(frozen=True)
class StoredDayEntry:
    """Day entry as persisted, with hours precomputed at write time."""

    entry: DayEntry
    worked_hours: float

    @classmethod
    def from_entry(cls, entry: DayEntry) -> "StoredDayEntry":
        """Attach write-time hours, which never wrap past midnight."""
        return cls(
            entry=entry,
            worked_hours=worked_hours(
                entry.start_time, entry.end_time, OvernightPolicy.NO_WRAP
            ),
        )


@dataclass(frozen=True)
class MonthlyRecord:
    """Salary and day entries saved for one month."""

    month: str
    salary: float
    days: list[DayEntry]

    @classmethod
    def empty(cls, month: str) -> "MonthlyRecord":
        """Return the record used when nothing was saved for the month."""
        return cls(month=month, salary=0.0, days=[])


@dataclass(frozen=True)
class MonthlyTotals:
    """Worked hours and monetary value for a month."""

    total_hours: float
    total_value: float


@dataclass(frozen=True)
class FlatRateTotals:
    """Month totals priced at fixed 50% and 100% overtime rates."""

    total_hours: float
    total_50: float
    total_100: float


@dataclass(frozen=True)
class SeriesPoint:
    """Labelled hours value for a chart series."""

    label: str
    hours: float


@dataclass(frozen=True)
class ProjectSummary:
    """Hours and value accumulated for one project."""

    label: str
    hours: float
    total_value: float


@dataclass(frozen=True)
class DailyAverage:
    """Average hours over the dates that have worked time."""

    average_hours: float
    worked_days: int


@dataclass(frozen=True)
class MonthReport:
    """Everything the statistics view needs for one month."""

    totals: MonthlyTotals
    day_hours: list[SeriesPoint]
    project_hours: list[SeriesPoint]
    project_summary: list[ProjectSummary]
    daily_average: DailyAverage
