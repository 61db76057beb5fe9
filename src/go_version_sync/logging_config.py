"""Structured logging configuration.

Logs go to stderr through structlog so that stdout carries only the
human-readable "Added version ..." progress lines. In development the
output is pretty-printed; in production it is JSON, one event per line,
ready for CI log collectors.

Usage:
    from go_version_sync.logging_config import setup_logging, get_logger

    setup_logging(environment="production")
    logger = get_logger(__name__)
    logger.warning("release_skipped", version="go1.21rc2", reason="no_source_file")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_logging(
    environment: str | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structured logging for the job.

    Args:
        environment: "development" or "production". Reads from
                     ENVIRONMENT env var if not provided.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
                   Reads from LOG_LEVEL env var if not provided,
                   defaulting to WARNING so stderr only carries skips
                   and failures.

    Raises:
        ValueError: If the resolved log level is not one of LOG_LEVELS.
                    Nothing is reconfigured in that case.
    """

    env = environment or os.environ.get("ENVIRONMENT", "development")
    level = (log_level or os.environ.get("LOG_LEVEL", "WARNING")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level {level!r}; expected one of {', '.join(LOG_LEVELS)}"
        )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if env == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Third-party libraries (httpx) log through the standard library.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.WARNING,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        A structlog bound logger
    """
    return structlog.get_logger(name)
