"""Account and token endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from overtime_tracker.api.deps import get_container, require_user
from overtime_tracker.api.schemas import (  # noqa: TC001
    LoginPayload,
    RefreshPayload,
    RegisterPayload,
)
from overtime_tracker.domain.models import UserRecord
from overtime_tracker.domain.sessions import AuthTokens, DeviceMetadata
from overtime_tracker.services.auth import (
    AccessClaims,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from overtime_tracker.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterPayload, request: Request) -> dict[str, object]:
    """Create an account."""
    container: AppContainer = get_container(request)
    try:
        user = container.auth_service.register(
            payload.name, str(payload.email), payload.password
        )
    except EmailAlreadyRegisteredError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Email already registered."
        ) from exc
    return {"user": _serialize_user(user, include_created=True)}


@router.post("/login")
async def login(payload: LoginPayload, request: Request) -> dict[str, object]:
    """Exchange credentials for an access and refresh token."""
    container: AppContainer = get_container(request)
    metadata = _device_metadata(request)
    if payload.device_name:
        metadata = DeviceMetadata(
            device_name=payload.device_name,
            user_agent=metadata.user_agent,
            ip_address=metadata.ip_address,
        )
    try:
        tokens = container.auth_service.login(
            str(payload.email), payload.password, metadata
        )
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials."
        ) from exc
    return _serialize_tokens(tokens)


@router.post("/refresh")
async def refresh(payload: RefreshPayload, request: Request) -> dict[str, object]:
    """Rotate a refresh token."""
    container: AppContainer = get_container(request)
    try:
        tokens = container.auth_service.refresh(payload.refresh_token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc
    return _serialize_tokens(tokens)


@router.post("/logout")
async def logout(payload: RefreshPayload, request: Request) -> dict[str, str]:
    """Revoke the session behind a refresh token."""
    container: AppContainer = get_container(request)
    container.auth_service.logout(payload.refresh_token)
    return {"message": "Logged out."}


@router.post("/logout-all")
async def logout_all(
    request: Request, claims: AccessClaims = Depends(require_user)
) -> dict[str, str]:
    """Revoke every session of the caller."""
    container: AppContainer = get_container(request)
    container.auth_service.logout_all(claims.user_id)
    return {"message": "Logged out everywhere."}


@router.get("/me")
async def me(
    request: Request, claims: AccessClaims = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's account."""
    container: AppContainer = get_container(request)
    try:
        user = container.auth_service.get_user(claims.user_id)
    except UserNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="User not found."
        ) from exc
    return {"user": _serialize_user(user, include_created=True)}


def _device_metadata(request: Request) -> DeviceMetadata:
    forwarded = request.headers.get("x-forwarded-for")
    ip_address = request.client.host if request.client else None
    if ip_address is None and forwarded:
        ip_address = forwarded.split(",")[0].strip() or None
    return DeviceMetadata(
        device_name=request.headers.get("x-device-name"),
        user_agent=request.headers.get("user-agent"),
        ip_address=ip_address,
    )


def _serialize_user(
    user: UserRecord, include_created: bool = False
) -> dict[str, object]:
    data: dict[str, object] = {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
    }
    if include_created:
        data["createdAt"] = user.created_at.isoformat() if user.created_at else None
    return data


def _serialize_tokens(tokens: AuthTokens) -> dict[str, object]:
    return {
        "token": tokens.token,
        "refreshToken": tokens.refresh_token,
        "user": _serialize_user(tokens.user),
    }
