"""Structured logging for pipeline runs, built on structlog."""

import datetime as dt
import logging
import sys
from decimal import Decimal
from typing import Any

import structlog

from ontariovax.config.settings import LoggingConfig


def _render_domain_values(
    _logger: Any, _method: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Render decimals and dates as plain strings so JSON logs stay readable."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
        elif isinstance(value, dt.date):
            event_dict[key] = value.isoformat()
    return event_dict


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    """Bind to the current stderr, which test runners may swap out."""
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Log lines go to stderr; stdout is reserved for command output such as
    rendered reports and tables.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, emit one JSON object per line (for scheduled runs).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _render_domain_values,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        processors = [*shared_processors, structlog.processors.format_exc_info, renderer]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        processors = [*shared_processors, renderer]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: LoggingConfig) -> None:
    """Apply the ``logging`` section of a pipeline config."""
    configure_logging(level=settings.level, json_output=settings.json_output)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module).
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind values to every log line emitted inside the block.

    Example:
        with log_context(cases="cases.json", hospitalizations="hosp.json"):
            log.info("Joining datasets")
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
