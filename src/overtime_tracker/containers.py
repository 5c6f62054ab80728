"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from overtime_tracker.adapters.supabase_calculation_model_repository import (
    SupabaseCalculationModelRepository,
)
from overtime_tracker.adapters.supabase_hours_repository import (
    SupabaseHoursRepository,
)
from overtime_tracker.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from overtime_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from overtime_tracker.config import Settings, parse_overnight_policy
from overtime_tracker.services.auth import AuthService
from overtime_tracker.services.hours import HoursService
from overtime_tracker.services.models import CalculationModelService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    hours_service: HoursService
    model_service: CalculationModelService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    hours_repository = SupabaseHoursRepository(supabase_client)
    model_service = CalculationModelService(
        repository=SupabaseCalculationModelRepository(supabase_client),
        records=hours_repository,
    )
    hours_service = HoursService(
        repository=hours_repository,
        model_service=model_service,
        overnight_policy=parse_overnight_policy(resolved_settings.overnight_policy),
    )
    auth_service = AuthService(
        user_repository=SupabaseUserRepository(supabase_client),
        session_repository=SupabaseSessionRepository(supabase_client),
        access_secret=resolved_settings.jwt_secret,
        refresh_secret=resolved_settings.jwt_refresh_secret,
        algorithm=resolved_settings.jwt_algorithm,
        access_ttl=timedelta(minutes=resolved_settings.jwt_expires_minutes),
        refresh_ttl=timedelta(days=resolved_settings.jwt_refresh_expires_days),
    )
    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        hours_service=hours_service,
        model_service=model_service,
    )
