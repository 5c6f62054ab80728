"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from overtime_tracker.domain.timekeeping import OvernightPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    jwt_refresh_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 15
    jwt_refresh_expires_days: int = 7
    overnight_policy: str = OvernightPolicy.WRAP.value
    cors_allowed_origins: str | None = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]


def parse_overnight_policy(raw: str | None) -> OvernightPolicy:
    """Parse the overnight policy name, defaulting to wraparound."""
    if not raw:
        return OvernightPolicy.WRAP
    normalized = raw.strip().lower().replace("-", "_")
    try:
        return OvernightPolicy(normalized)
    except ValueError:
        return OvernightPolicy.WRAP
