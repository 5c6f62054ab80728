"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from overtime_tracker.domain.models import UserCredentials, UserRecord
from overtime_tracker.services.auth import UserRepository

_USER_COLUMNS = "id, name, email, password_hash, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_email(self, email: str) -> UserCredentials | None:
        """Return the user and password hash for an email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserCredentials(
            user=_parse_user(row), password_hash=str(row.get("password_hash", ""))
        )

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert({"name": name, "email": email, "password_hash": password_hash})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
