"""Calculation models and the registry that resolves them."""

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from uuid import uuid4

from overtime_tracker.domain.hours import DayEntry

STANDARD_MODEL_ID = "default-standard"
STANDARD_MODEL_NAME = "CLT Standard"
STANDARD_MODEL_MULTIPLIER = 1.5
NEW_MODEL_MULTIPLIER = 1.5


class ModelKind(StrEnum):
    """How a calculation model prices worked time."""

    STANDARD = "standard"
    FLAT = "flat"


class RegistryError(ValueError):
    """Raised when a registry change would break its invariants."""


@dataclass(frozen=True)
class CalculationModel:
    """Named pay multiplier applied to the base hourly rate."""

    id: str
    name: str
    multiplier: float
    kind: ModelKind = ModelKind.FLAT

    @property
    def is_standard(self) -> bool:
        return self.kind is ModelKind.STANDARD


STANDARD_MODEL = CalculationModel(
    id=STANDARD_MODEL_ID,
    name=STANDARD_MODEL_NAME,
    multiplier=STANDARD_MODEL_MULTIPLIER,
    kind=ModelKind.STANDARD,
)


def default_models() -> list[CalculationModel]:
    """Return the models a new month starts with."""
    return [
        STANDARD_MODEL,
        CalculationModel(id="default-100", name="Overtime 100%", multiplier=2.0),
    ]


@dataclass(frozen=True)
class CalculationRegistry:
    """Ordered, validated set of calculation models.

    Build it with :meth:`normalized` at load boundaries; the standard model is
    always present and first, and every mutation returns a new registry.
    """

    models: tuple[CalculationModel, ...]

    @classmethod
    def default(cls) -> "CalculationRegistry":
        return cls(models=tuple(default_models()))

    @classmethod
    def normalized(
        cls, models: Iterable[CalculationModel | Mapping[str, object]]
    ) -> "CalculationRegistry":
        """Return a registry with the fixed standard model placed first.

        Entries without an id or name are dropped, names are trimmed, and
        multipliers that are not positive numbers become 1. Whatever was
        stored under the standard id is replaced by the fixed definition.
        """
        candidates = list(models)
        cleaned: list[CalculationModel] = []
        seen: set[str] = {STANDARD_MODEL_ID}
        for raw in candidates:
            model = _coerce_model(raw)
            if model is None or model.id in seen:
                continue
            seen.add(model.id)
            cleaned.append(model)
        if not cleaned and not _mentions_standard(candidates):
            return cls.default()
        return cls(models=(STANDARD_MODEL, *cleaned))

    @property
    def fallback_id(self) -> str:
        """Id used for entries without a resolvable model."""
        return self.models[0].id

    def lookup(self, model_id: str | None) -> CalculationModel | None:
        if not model_id:
            return None
        for model in self.models:
            if model.id == model_id:
                return model
        return None

    def __contains__(self, model_id: object) -> bool:
        return isinstance(model_id, str) and self.lookup(model_id) is not None

    def __iter__(self) -> Iterator[CalculationModel]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    def add(
        self, name: str | None = None, multiplier: float = NEW_MODEL_MULTIPLIER
    ) -> tuple["CalculationRegistry", CalculationModel]:
        """Append a flat model and return it with the new registry."""
        label = (name or "").strip() or f"Model {len(self.models) + 1}"
        model = CalculationModel(
            id=str(uuid4()), name=label, multiplier=_require_multiplier(multiplier)
        )
        return CalculationRegistry(models=(*self.models, model)), model

    def rename(self, model_id: str, name: str) -> "CalculationRegistry":
        label = name.strip()
        if not label:
            raise RegistryError("Model name cannot be blank.")
        target = self._editable(model_id)
        return self._swap(
            CalculationModel(
                id=target.id, name=label, multiplier=target.multiplier, kind=target.kind
            )
        )

    def set_multiplier(self, model_id: str, multiplier: float) -> "CalculationRegistry":
        target = self._editable(model_id)
        return self._swap(
            CalculationModel(
                id=target.id,
                name=target.name,
                multiplier=_require_multiplier(multiplier),
                kind=target.kind,
            )
        )

    def remove(
        self, model_id: str, days: Sequence[DayEntry] = ()
    ) -> tuple["CalculationRegistry", list[DayEntry]]:
        """Remove a model and move entries that used it to the fallback model."""
        self._editable(model_id)
        if len(self.models) <= 1:
            raise RegistryError("At least one calculation model is required.")
        remaining = CalculationRegistry(
            models=tuple(model for model in self.models if model.id != model_id)
        )
        fallback = remaining.fallback_id
        reassigned = [
            day.with_model(fallback) if day.calculation_model_id == model_id else day
            for day in days
        ]
        return remaining, reassigned

    def assign_fallback(self, days: Iterable[DayEntry]) -> list[DayEntry]:
        """Point entries with an empty or unknown model id at the fallback."""
        fallback = self.fallback_id
        return [
            day if day.calculation_model_id in self else day.with_model(fallback)
            for day in days
        ]

    def _editable(self, model_id: str) -> CalculationModel:
        model = self.lookup(model_id)
        if model is None:
            raise KeyError(model_id)
        if model.is_standard:
            raise RegistryError("The standard model cannot be changed.")
        return model

    def _swap(self, updated: CalculationModel) -> "CalculationRegistry":
        return CalculationRegistry(
            models=tuple(
                updated if model.id == updated.id else model for model in self.models
            )
        )


def ensure_standard_model(
    models: Iterable[CalculationModel | Mapping[str, object]],
) -> list[CalculationModel]:
    """Return the models with the fixed standard model first."""
    return list(CalculationRegistry.normalized(models).models)


def serialize_model(model: CalculationModel) -> dict[str, object]:
    return {"id": model.id, "name": model.name, "multiplier": model.multiplier}


def _coerce_model(
    raw: CalculationModel | Mapping[str, object],
) -> CalculationModel | None:
    if isinstance(raw, CalculationModel):
        model_id, name, multiplier = raw.id, raw.name, raw.multiplier
    else:
        model_id = str(raw.get("id") or "")
        name = str(raw.get("name") or "")
        multiplier = raw.get("multiplier")
    if not model_id or not name.strip() or model_id == STANDARD_MODEL_ID:
        return None
    return CalculationModel(
        id=model_id, name=name.strip(), multiplier=_positive_or_one(multiplier)
    )


def _mentions_standard(models: Iterable[object]) -> bool:
    for raw in models:
        if isinstance(raw, CalculationModel) and raw.id == STANDARD_MODEL_ID:
            return True
        if isinstance(raw, Mapping) and raw.get("id") == STANDARD_MODEL_ID:
            return True
    return False


def _positive_or_one(value: object) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(number) or number <= 0:
        return 1.0
    return number


def _require_multiplier(value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise RegistryError("Multiplier must be a number.") from exc
    if not math.isfinite(number) or number <= 0:
        raise RegistryError("Multiplier must be greater than zero.")
    return number
