"""Calculation model management per user and month."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from overtime_tracker.domain.calculation import (
    CalculationModel,
    CalculationRegistry,
)
from overtime_tracker.domain.hours import MonthlyRecord, StoredDayEntry

logger = logging.getLogger(__name__)


class CalculationModelRepository(Protocol):
    """Persistence interface for calculation models."""

    def get_models(self, user_id: UUID, month: str) -> list[dict[str, object]] | None:
        """Return the raw stored models for a month, if any were saved."""

    def save_models(
        self, user_id: UUID, month: str, models: list[CalculationModel]
    ) -> None:
        """Persist the models for a month."""


class MonthRecordStore(Protocol):
    """Subset of the hours repository needed to cascade model removals."""

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


@dataclass
class CalculationModelService:
    """Service for reading and editing a month's calculation models."""

    repository: CalculationModelRepository
    records: MonthRecordStore

    def get_registry(self, user_id: UUID, month: str) -> CalculationRegistry:
        """Return the normalized registry, or the defaults when none is saved."""
        stored = self.repository.get_models(user_id, month)
        if stored is None:
            return CalculationRegistry.default()
        return CalculationRegistry.normalized(stored)

    def add_model(
        self,
        user_id: UUID,
        month: str,
        name: str | None = None,
        multiplier: float | None = None,
    ) -> tuple[CalculationRegistry, CalculationModel]:
        """Add a flat model and persist the registry."""
        registry = self.get_registry(user_id, month)
        if multiplier is None:
            updated, model = registry.add(name)
        else:
            updated, model = registry.add(name, multiplier)
        self.repository.save_models(user_id, month, list(updated.models))
        logger.info(
            "Added calculation model",
            extra={"user_id": str(user_id), "month": month, "model_id": model.id},
        )
        return updated, model

    def update_model(
        self,
        user_id: UUID,
        month: str,
        model_id: str,
        name: str | None = None,
        multiplier: float | None = None,
    ) -> CalculationRegistry:
        """Rename or re-price a model and persist the registry."""
        registry = self.get_registry(user_id, month)
        if name is not None:
            registry = registry.rename(model_id, name)
        if multiplier is not None:
            registry = registry.set_multiplier(model_id, multiplier)
        self.repository.save_models(user_id, month, list(registry.models))
        return registry

    def remove_model(
        self, user_id: UUID, month: str, model_id: str
    ) -> CalculationRegistry:
        """Remove a model and move the month's entries to the fallback model.

        Entries are rewritten before the registry is saved; the fallback
        model belongs to both registries, so stopping between the two writes
        leaves no entry pointing at a missing model.
        """
        registry = self.get_registry(user_id, month)
        record = self.records.get_month(user_id, month)
        days = record.days if record else []
        updated, reassigned = registry.remove(model_id, days)
        if record is not None and reassigned != record.days:
            self.records.replace_month(
                user_id,
                month,
                record.salary,
                [StoredDayEntry.from_entry(day) for day in reassigned],
            )
        self.repository.save_models(user_id, month, list(updated.models))
        logger.info(
            "Removed calculation model",
            extra={
                "user_id": str(user_id),
                "month": month,
                "model_id": model_id,
                "fallback_id": updated.fallback_id,
            },
        )
        return updated
