"""structlog setup for applications that embed a version ring.

The library only asks for loggers via :func:`get_logger`; rendering is
decided once by the embedding application through :func:`setup_logging`,
driven by ``LogConfig`` (``VERSIONRING_LOG_LEVEL`` / ``VERSIONRING_LOG_FORMAT``).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from versionring.config import load_config
from versionring.models.config import LogConfig


def _renderer(fmt: str) -> structlog.typing.Processor:
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging(config: LogConfig | None = None, *, stream: TextIO | None = None) -> None:
    """Configure structlog from *config*, or from the environment when omitted.

    Ring events (``version_pushed``, ``moved_back``, ...) are emitted at debug
    level, so they only appear with ``level="debug"``.
    """
    config = config or load_config().log
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            _renderer(config.format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
