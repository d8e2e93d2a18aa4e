"""Structured logging setup.

Example usage:
    from imagepicker.observability.logging import setup_logging

    # Configure logging at application startup
    setup_logging(level="INFO", format="json")
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(
    level: str = "INFO",
    format: str = "text",  # noqa: A002 - mirrors the log_format setting
) -> None:
    """Configure structured logging with structlog.

    Args:
        level: Log level string. One of: DEBUG, INFO, WARNING, ERROR.
            Default is "INFO".
        format: Output format. Either "json" for machine-readable JSON
            or "text" for human-readable console output. Default is "text".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Emit through stdlib handlers so records follow whatever stream they own
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
