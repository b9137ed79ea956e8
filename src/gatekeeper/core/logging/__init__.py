"""Structured logging configuration."""

import logging

import structlog

from gatekeeper.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the application.

    Production renders JSON lines; every other environment uses the
    human-readable console renderer.

    Args:
        settings: Application settings providing log level and environment
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.is_production
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Cached loggers keep the stream they first wrote to
        cache_logger_on_first_use=settings.is_production,
    )


__all__ = [
    "configure_logging",
]
