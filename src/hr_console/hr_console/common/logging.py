"""Logging configuration shared by the Flask app and the scripts."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    resolved = logging.getLevelName(value.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    json: Optional[bool] = None,
    force: bool = False,
) -> None:
    """Configure stdlib logging with a structlog formatter.

    Modules keep using ``logging.getLogger(__name__)``; only the output format
    is owned by structlog. Existing root handlers are left alone unless
    ``force`` is set (pytest installs its own).
    """
    resolved_level = _resolve_level(level, debug)

    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    if root_logger.handlers and not force:
        return

    if force:
        root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_SHARED_PROCESSORS)
    )
    root_logger.addHandler(handler)
