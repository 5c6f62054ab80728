"""Shared request dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from overtime_tracker.services.auth import AccessClaims, InvalidTokenError

if TYPE_CHECKING:
    from overtime_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> AccessClaims:
    """Resolve the bearer token into the caller's identity."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Token not provided."
        )
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token."
        )
    container = get_container(request)
    try:
        return container.auth_service.verify_access_token(token.strip())
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc
