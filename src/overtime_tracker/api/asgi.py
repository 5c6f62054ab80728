"""ASGI entrypoint for the overtime tracker API."""

from overtime_tracker.api.app import create_app
from overtime_tracker.containers import build_container

app = create_app(build_container())
