"""Domain models for refresh sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from overtime_tracker.domain.models import UserRecord


@dataclass(frozen=True)
class DeviceMetadata:
    """Client details captured when a session is opened."""

    device_name: str | None = None
    user_agent: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class RefreshSessionRecord:
    """Represents a persisted refresh session for one device."""

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    revoked_at: datetime | None = None
    device_name: str | None = None

    def is_usable(self, now: datetime) -> bool:
        """Return True when the session is neither revoked nor expired."""
        return self.revoked_at is None and self.expires_at > now


@dataclass(frozen=True)
class AuthTokens:
    """Access and refresh token pair issued to a client."""

    token: str
    refresh_token: str
    user: UserRecord
