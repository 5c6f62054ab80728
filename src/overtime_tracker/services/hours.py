"""Month records of worked hours and their reports."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from overtime_tracker.domain.hours import (
    DayEntry,
    MonthlyRecord,
    MonthReport,
    StoredDayEntry,
)
from overtime_tracker.domain.reports import build_month_report
from overtime_tracker.domain.timekeeping import OvernightPolicy
from overtime_tracker.services.models import CalculationModelService

logger = logging.getLogger(__name__)

_MONTH_PATTERN = re.compile(r"\d{4}-\d{2}")


class HoursRepository(Protocol):
    """Persistence interface for monthly hour records."""

    def get_month(self, user_id: UUID, month: str) -> MonthlyRecord | None:
        """Return the saved record for a month, if present."""

    def replace_month(
        self,
        user_id: UUID,
        month: str,
        salary: float,
        days: list[StoredDayEntry],
    ) -> None:
        """Store the salary and replace every day entry of the month."""


def is_valid_month(value: str | None) -> bool:
    """Return True for YYYY-MM month keys."""
    return bool(value) and _MONTH_PATTERN.fullmatch(value) is not None


def current_month(today: date | None = None) -> str:
    """Return the month key for today on the server clock."""
    resolved = today or datetime.now().date()  # noqa: DTZ005
    return f"{resolved.year:04d}-{resolved.month:02d}"


def resolve_month(value: str | None, today: date | None = None) -> str:
    """Return the month key, defaulting to the current month when invalid."""
    if value is not None and is_valid_month(value):
        return value
    return current_month(today)


@dataclass
class HoursService:
    """Application service for month records."""

    repository: HoursRepository
    model_service: CalculationModelService
    overnight_policy: OvernightPolicy = OvernightPolicy.WRAP

    def get_month(self, user_id: UUID, month: str) -> MonthlyRecord:
        """Return the month record, or an empty one when nothing is saved."""
        record = self.repository.get_month(user_id, month)
        return record or MonthlyRecord.empty(month)

    def save_month(
        self, user_id: UUID, month: str, salary: float, days: list[DayEntry]
    ) -> MonthlyRecord:
        """Replace the month's salary and entries."""
        stored = [StoredDayEntry.from_entry(day) for day in days]
        self.repository.replace_month(user_id, month, salary, stored)
        logger.info(
            "Saved month record",
            extra={"user_id": str(user_id), "month": month, "days": len(days)},
        )
        return MonthlyRecord(month=month, salary=salary, days=list(days))

    def get_report(self, user_id: UUID, month: str) -> MonthReport:
        """Compute totals and breakdowns for a month."""
        record = self.get_month(user_id, month)
        registry = self.model_service.get_registry(user_id, month)
        days = registry.assign_fallback(record.days)
        return build_month_report(days, record.salary, registry, self.overnight_policy)
