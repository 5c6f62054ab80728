"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserCredentials:
    """User record together with its password hash."""

    user: UserRecord
    password_hash: str
