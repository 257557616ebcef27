"""Structured logging configuration using structlog."""

import logging
import sys

import structlog

from app.config import settings


def configure_logging() -> None:
    """Configure structured logging for the application."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer() if settings.ENVIRONMENT == "production"
            else structlog.dev.ConsoleRenderer(colors=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Cached loggers ignore later reconfiguration (structlog.testing.capture_logs)
        cache_logger_on_first_use=settings.ENVIRONMENT == "production",
    )

    # Service context on every event
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=settings.APP_NAME,
        environment=settings.ENVIRONMENT,
    )
