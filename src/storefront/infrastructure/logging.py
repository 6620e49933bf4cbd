"""Logging configuration.

Modules log through ``structlog.get_logger(__name__)`` with event-style
messages and key/value context. ``configure_logging`` routes structlog
through the standard library so third-party loggers share one handler.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_FORMAT_ENV = "STOREFRONT_LOG_FORMAT"


def configure_logging(level: str = "WARNING") -> None:
    """Configure stdlib logging and structlog for the CLI.

    Logs go to stderr so command output on stdout stays clean. Set
    ``STOREFRONT_LOG_FORMAT=json`` for one JSON object per line.
    """
    level = level.upper()

    handler = logging.StreamHandler(sys.stderr)
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    processors: list = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if os.getenv(LOG_FORMAT_ENV, "console").lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
