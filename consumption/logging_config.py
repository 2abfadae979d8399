"""Structured logging configuration.

Log events go to stderr as JSON lines; stdout belongs to ``log_and_return``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name, e.g. ``"DEBUG"`` or ``"WARNING"``.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def get_logger(name: str) -> Any:
    """Return a module logger, configuring defaults on first use.

    Args:
        name: Logger name, usually __name__.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
