"""Calculation model endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from overtime_tracker.api.deps import get_container, require_user
from overtime_tracker.api.schemas import ModelPayload  # noqa: TC001
from overtime_tracker.domain.calculation import (
    CalculationRegistry,
    RegistryError,
    serialize_model,
)
from overtime_tracker.services.auth import AccessClaims  # noqa: TC001
from overtime_tracker.services.hours import resolve_month

if TYPE_CHECKING:
    from overtime_tracker.containers import AppContainer

router = APIRouter(prefix="/models", tags=["models"])


@router.get("")
async def list_models(
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, object]:
    """Return the month's calculation models, standard model first."""
    container: AppContainer = get_container(request)
    resolved = resolve_month(month)
    registry = container.model_service.get_registry(claims.user_id, resolved)
    return _registry_response(resolved, registry)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_model(
    payload: ModelPayload,
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, object]:
    """Add a flat multiplier model."""
    container: AppContainer = get_container(request)
    resolved = resolve_month(month)
    try:
        registry, model = container.model_service.add_model(
            claims.user_id, resolved, payload.name, payload.multiplier
        )
    except RegistryError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"model": serialize_model(model), **_registry_response(resolved, registry)}


@router.patch("/{model_id}")
async def update_model(
    model_id: str,
    payload: ModelPayload,
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, object]:
    """Rename or re-price a model."""
    container: AppContainer = get_container(request)
    resolved = resolve_month(month)
    try:
        registry = container.model_service.update_model(
            claims.user_id, resolved, model_id, payload.name, payload.multiplier
        )
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Model not found."
        ) from exc
    except RegistryError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _registry_response(resolved, registry)


@router.delete("/{model_id}")
async def delete_model(
    model_id: str,
    request: Request,
    month: str | None = None,
    claims: AccessClaims = Depends(require_user),
) -> dict[str, object]:
    """Remove a model; entries that used it move to the fallback model."""
    container: AppContainer = get_container(request)
    resolved = resolve_month(month)
    try:
        registry = container.model_service.remove_model(
            claims.user_id, resolved, model_id
        )
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Model not found."
        ) from exc
    except RegistryError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return _registry_response(resolved, registry)


def _registry_response(
    month: str, registry: CalculationRegistry
) -> dict[str, object]:
    return {
        "month": month,
        "fallbackModelId": registry.fallback_id,
        "models": [serialize_model(model) for model in registry],
    }
