"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def _resolve_level() -> int:
    name = (os.environ.get("BUILDFS_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def setup_logging() -> structlog.typing.FilteringBoundLogger:
    """Configure structlog with console output.

    Leaves an existing configuration alone so a host application keeps control
    of rendering.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.dev.set_exc_info,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(_resolve_level()),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
            cache_logger_on_first_use=True,
        )

    return structlog.get_logger("buildfs")


logger: structlog.typing.FilteringBoundLogger = setup_logging()
