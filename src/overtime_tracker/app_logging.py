"""Logging configuration helpers."""

import logging

LOGGER_NAME = "overtime_tracker"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level: str | int | None) -> int:
    """Return a logging level for a name such as ``"debug"``, INFO if unknown."""
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Set the package log level and install a single stream handler.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
