"""Supabase repository for calculation models."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from overtime_tracker.domain.calculation import CalculationModel, serialize_model
from overtime_tracker.services.models import CalculationModelRepository


@dataclass
class SupabaseCalculationModelRepository(CalculationModelRepository):
    """Stores each month's models as one JSON list per user."""

    client: Client

    def get_models(self, user_id: UUID, month: str) -> list[dict[str, object]] | None:
        """Return the stored model list, if the month has one."""
        response = (
            self.client.table("calculation_models")
            .select("models")
            .eq("user_id", str(user_id))
            .eq("month", month)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        models = response.data[0].get("models")
        if not isinstance(models, list):
            return []
        return [model for model in models if isinstance(model, dict)]

    def save_models(
        self, user_id: UUID, month: str, models: list[CalculationModel]
    ) -> None:
        """Upsert the month's model list."""
        self.client.table("calculation_models").upsert(
            {
                "user_id": str(user_id),
                "month": month,
                "models": [serialize_model(model) for model in models],
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,month",
        ).execute()
