"""Supabase-backed refresh session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from overtime_tracker.domain.sessions import DeviceMetadata, RefreshSessionRecord
from overtime_tracker.services.auth import RefreshSessionRepository

_SESSION_COLUMNS = "id, user_id, token_hash, expires_at, revoked_at, device_name"


@dataclass
class SupabaseSessionRepository(RefreshSessionRepository):
    """Supabase implementation for refresh sessions."""

    client: Client

    def create_session(
        self, user_id: UUID, metadata: DeviceMetadata, expires_at: datetime
    ) -> RefreshSessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table("refresh_sessions")
            .insert(
                {
                    "user_id": str(user_id),
                    "token_hash": "",
                    "device_name": metadata.device_name,
                    "user_agent": metadata.user_agent,
                    "ip_address": metadata.ip_address,
                    "expires_at": expires_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create refresh session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: UUID) -> RefreshSessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("refresh_sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def update_token(
        self,
        session_id: UUID,
        token_hash: str,
        expires_at: datetime,
        last_used_at: datetime,
    ) -> None:
        """Store the current token hash and expiry."""
        self.client.table("refresh_sessions").update(
            {
                "token_hash": token_hash,
                "expires_at": expires_at.isoformat(),
                "last_used_at": last_used_at.isoformat(),
            }
        ).eq("id", str(session_id)).execute()

    def revoke_session(
        self, session_id: UUID, user_id: UUID, revoked_at: datetime
    ) -> None:
        """Mark an active session of the user as revoked."""
        self.client.table("refresh_sessions").update(
            {"revoked_at": revoked_at.isoformat()}
        ).eq("id", str(session_id)).eq("user_id", str(user_id)).is_(
            "revoked_at", "null"
        ).execute()

    def revoke_all(self, user_id: UUID, revoked_at: datetime) -> None:
        """Mark every active session of the user as revoked."""
        self.client.table("refresh_sessions").update(
            {"revoked_at": revoked_at.isoformat()}
        ).eq("user_id", str(user_id)).is_("revoked_at", "null").execute()


def _parse_session(row: dict[str, object]) -> RefreshSessionRecord:
    revoked_raw = row.get("revoked_at")
    return RefreshSessionRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        token_hash=str(row.get("token_hash") or ""),
        expires_at=datetime.fromisoformat(str(row["expires_at"])),
        revoked_at=(
            datetime.fromisoformat(revoked_raw)
            if isinstance(revoked_raw, str) and revoked_raw
            else None
        ),
        device_name=row.get("device_name"),  # type: ignore[arg-type]
    )
