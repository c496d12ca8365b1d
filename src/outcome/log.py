"""Structured logging for the outcome library, built on structlog.

The library never configures logging on import. Applications call
``configure_logging`` (or ``configure_from_settings``) once at startup to
see ``failure_captured`` events.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

from src.outcome.config import OutcomeSettings, get_settings

if TYPE_CHECKING:
    from structlog.typing import Processor


def configure_logging(
    *,
    json_format: bool = False,
    log_level: str = "INFO",
) -> None:
    """Route library events to stderr, as JSON lines or console text.

    Args:
        json_format: Render one JSON object per event.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # The module-level logger in outcome.py must follow reconfiguration
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: OutcomeSettings | None = None) -> None:
    """Apply logging options from ``OutcomeSettings`` (defaults to the cached ones)."""
    settings = settings or get_settings()
    configure_logging(json_format=settings.log_json, log_level=settings.log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a lazily bound structlog logger, typically for ``__name__``."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
