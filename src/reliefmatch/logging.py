"""Structured logging setup for ranking runs."""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_logging(level: str | int = "INFO") -> None:
    """Emit one JSON object per event, filtered at ``level``.

    Loggers are not cached so every event is written to the stream current
    at call time.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def request_logger(base: Any, *, mission_id: str, **context: Any) -> Any:
    """Bind per-request context onto ``base`` without touching global state."""
    return base.bind(mission_id=mission_id, **context)
