"""Structured logging for spind.

JSON logs by default (LOG_FORMAT=json), human-readable console output with
LOG_FORMAT=console. Level comes from LOG_LEVEL (default INFO).

Modules call `get_logger(__name__)`; configuration happens lazily on the
first call so importing the library never touches global logging state
that an application already set up.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure an ISO 8601 UTC timestamp is present."""
    event_dict.setdefault("ts", datetime.now(timezone.utc).isoformat())
    return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Looked up per logger so a swapped sys.stderr (test runners, CLI harnesses) is honored
    return structlog.PrintLogger(file=sys.stderr)


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level: str | int | None = None, fmt: str | None = None) -> None:
    """Configure structlog processors, renderer and level filter.

    Calling this explicitly always reconfigures; `get_logger` only configures
    when nothing has been configured yet.
    """
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).strip().lower()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if fmt == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a lazy logger tagged with the emitting component.

    The proxy re-reads the structlog configuration on every call, so a later
    `configure_logging` (e.g. from CLI flags) applies to module-level loggers.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(component=name)
