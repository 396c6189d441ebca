"""Structured logging configuration using structlog.

Diagnostics go to stderr so they never mix with the chat transcript on
stdout. The default level keeps them quiet unless asked for.
"""

import sys
from typing import Any, cast

import structlog

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def setup_logging(level: str = "WARNING", format: str = "console") -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: "console" for a human readable line, "json" for one JSON object per event
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.upper(), 30)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Configures the default (quiet, stderr) setup if nothing has yet, so
    library use never prints diagnostics onto the chat transcript.
    """
    if not structlog.is_configured():
        setup_logging()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(module=name))
