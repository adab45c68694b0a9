"""Structured logging configuration.

This module initializes structlog once with a stable JSON event format.
Events go to stderr so stdout stays reserved for command output.
"""

from __future__ import annotations

import sys
from typing import Any

import structlog


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            logger_factory=structlog.PrintLoggerFactory(_CurrentStderr()),
            cache_logger_on_first_use=True,
        )
    return structlog.get_logger(name)


class _CurrentStderr:
    """File-like writer that resolves ``sys.stderr`` on every write."""

    def write(self, text: str) -> int:
        return sys.stderr.write(text)

    def flush(self) -> None:
        sys.stderr.flush()
