"""Account registration and token sessions."""

import hashlib
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

import jwt
from passlib.context import CryptContext

from overtime_tracker.domain.models import UserCredentials, UserRecord
from overtime_tracker.domain.sessions import (
    AuthTokens,
    DeviceMetadata,
    RefreshSessionRecord,
)

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

REFRESH_TOKEN_TYPE = "refresh"


class AuthError(Exception):
    """Base class for authentication failures."""


class EmailAlreadyRegisteredError(AuthError):
    """Raised when registering an email that already has an account."""


class InvalidCredentialsError(AuthError):
    """Raised when an email and password do not match."""


class InvalidTokenError(AuthError):
    """Raised when a token or its session cannot be trusted."""


class UserNotFoundError(AuthError):
    """Raised when the token's user no longer exists."""


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_email(self, email: str) -> UserCredentials | None:
        """Return the user and password hash for an email, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user record."""


class RefreshSessionRepository(Protocol):
    """Persistence interface for refresh sessions."""

    def create_session(
        self, user_id: UUID, metadata: DeviceMetadata, expires_at: datetime
    ) -> RefreshSessionRecord:
        """Create a session row with an empty token hash and return it."""

    def get_session(self, session_id: UUID) -> RefreshSessionRecord | None:
        """Return a session by id, if present."""

    def update_token(
        self,
        session_id: UUID,
        token_hash: str,
        expires_at: datetime,
        last_used_at: datetime,
    ) -> None:
        """Store the hash of the current refresh token for a session."""

    def revoke_session(
        self, session_id: UUID, user_id: UUID, revoked_at: datetime
    ) -> None:
        """Revoke a session if it belongs to the user and is still active."""

    def revoke_all(self, user_id: UUID, revoked_at: datetime) -> None:
        """Revoke every active session of a user."""


@dataclass(frozen=True)
class AccessClaims:
    """Identity carried by a verified access token."""

    user_id: UUID
    email: str
    name: str


def hash_password(password: str) -> str:
    """Hash a password with PBKDF2."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against its hash."""
    return pwd_context.verify(password, password_hash)


def hash_token(token: str) -> str:
    """Return the SHA-256 hex digest stored for a refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass
class AuthService:
    """Issues, rotates and revokes tokens for registered users."""

    user_repository: UserRepository
    session_repository: RefreshSessionRepository
    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)

    def register(self, name: str, email: str, password: str) -> UserRecord:
        """Create an account for a new email."""
        normalized_email = email.strip().lower()
        if self.user_repository.get_by_email(normalized_email):
            raise EmailAlreadyRegisteredError(normalized_email)
        user = self.user_repository.create_user(
            name.strip(), normalized_email, hash_password(password)
        )
        logger.info("Registered user", extra={"user_id": str(user.id)})
        return user

    def login(
        self,
        email: str,
        password: str,
        metadata: DeviceMetadata | None = None,
    ) -> AuthTokens:
        """Verify credentials and open a refresh session."""
        credentials = self.user_repository.get_by_email(email.strip().lower())
        if credentials is None or not verify_password(
            password, credentials.password_hash
        ):
            raise InvalidCredentialsError
        user = credentials.user
        now = datetime.now(tz=UTC)
        session = self.session_repository.create_session(
            user.id, metadata or DeviceMetadata(), now
        )
        refresh_token = self._issue_refresh_token(user.id, session.id, now)
        return AuthTokens(
            token=self._issue_access_token(user, now),
            refresh_token=refresh_token,
            user=user,
        )

    def refresh(self, refresh_token: str) -> AuthTokens:
        """Rotate a refresh token and issue a new access token."""
        user_id, session_id = self._decode_refresh_token(refresh_token)
        now = datetime.now(tz=UTC)
        session = self.session_repository.get_session(session_id)
        if (
            session is None
            or session.user_id != user_id
            or not session.is_usable(now)
            or session.token_hash != hash_token(refresh_token)
        ):
            logger.warning(
                "Rejected refresh token", extra={"session_id": str(session_id)}
            )
            raise InvalidTokenError("Invalid session.")
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise InvalidTokenError("Invalid user.")
        return AuthTokens(
            token=self._issue_access_token(user, now),
            refresh_token=self._issue_refresh_token(user.id, session.id, now),
            user=user,
        )

    def logout(self, refresh_token: str) -> None:
        """Revoke the session behind a refresh token; bad tokens are ignored."""
        try:
            user_id, session_id = self._decode_refresh_token(refresh_token)
        except InvalidTokenError:
            logger.info("Logout with an unusable refresh token")
            return
        self.session_repository.revoke_session(
            session_id, user_id, datetime.now(tz=UTC)
        )

    def logout_all(self, user_id: UUID) -> None:
        """Revoke every session of a user."""
        self.session_repository.revoke_all(user_id, datetime.now(tz=UTC))
        logger.info("Revoked all sessions", extra={"user_id": str(user_id)})

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return the user for an id."""
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    def verify_access_token(self, token: str) -> AccessClaims:
        """Decode an access token into its claims."""
        try:
            payload = jwt.decode(token, self.access_secret, algorithms=[self.algorithm])
            return AccessClaims(
                user_id=UUID(str(payload["sub"])),
                email=str(payload.get("email", "")),
                name=str(payload.get("name", "")),
            )
        except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
            raise InvalidTokenError("Expired or invalid token.") from exc

    def _issue_access_token(self, user: UserRecord, now: datetime) -> str:
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "exp": now + self.access_ttl,
        }
        return jwt.encode(payload, self.access_secret, algorithm=self.algorithm)

    def _issue_refresh_token(
        self, user_id: UUID, session_id: UUID, now: datetime
    ) -> str:
        expires_at = now + self.refresh_ttl
        payload = {
            "sub": str(user_id),
            "sid": str(session_id),
            "token_type": REFRESH_TOKEN_TYPE,
            "jti": uuid4().hex,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self.refresh_secret, algorithm=self.algorithm)
        self.session_repository.update_token(
            session_id, hash_token(token), expires_at, now
        )
        return token

    def _decode_refresh_token(self, token: str) -> tuple[UUID, UUID]:
        try:
            payload = jwt.decode(
                token, self.refresh_secret, algorithms=[self.algorithm]
            )
            if payload.get("token_type") != REFRESH_TOKEN_TYPE:
                raise InvalidTokenError("Invalid refresh token.")
            return UUID(str(payload["sub"])), UUID(str(payload["sid"]))
        except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
            raise InvalidTokenError("Expired or invalid refresh token.") from exc
