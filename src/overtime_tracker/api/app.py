"""FastAPI application factory."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from overtime_tracker.api.auth import router as auth_router
from overtime_tracker.api.hours import router as hours_router
from overtime_tracker.api.models import router as models_router
from overtime_tracker.app_logging import configure_logging
from overtime_tracker.config import parse_cors_origins
from overtime_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    origins = parse_cors_origins(container.settings.cors_allowed_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(auth_router)
    app.include_router(hours_router)
    app.include_router(models_router)

    @app.get("/")
    async def root() -> dict[str, object]:
        """Service banner."""
        return {"online": True, "app": "overtime-tracker"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    logger.info(
        "Application created",
        extra={
            "environment": container.settings.environment,
            "overnight_policy": container.hours_service.overnight_policy.value,
        },
    )
    return app
