"""Structured logging for run-time API calls.

Uses structlog for structured logging on top of stdlib logging.
Each session logs through an ``ApiLogger`` bound to its session id and
filtered by the session's configured level.
"""

from __future__ import annotations

import logging
import sys
import uuid
from typing import Any

import structlog

from scorm_runtime.core.config import ObservabilityConfig
from scorm_runtime.core.enums import LogLevel


def new_session_id() -> str:
    return str(uuid.uuid4())


_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def setup_logging(
    level: LogLevel | str = LogLevel.INFO,
    format: str = "console",
) -> None:
    """Configure structlog on top of stdlib logging for the host process.

    ``level`` is the process-wide stdlib threshold.  Each session still
    filters its own API-call log through ``ApiLogger``.

    Args:
        level: ``LogLevel`` or its name, case-insensitive.
        format: "json" for production, "console" for development.
    """
    if not isinstance(level, LogLevel):
        level = LogLevel(level.lower())

    renderer: Any
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=_STDLIB_LEVELS[level])


def setup_logging_from(config: ObservabilityConfig) -> None:
    """Apply the ``observability`` section of ``RuntimeSettings``."""
    setup_logging(config.log_level, config.log_format)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)


class ApiLogger:
    """Level-filtered API call log for one session.

    A message is emitted only when its level is at or above the session's
    configured threshold.
    """

    def __init__(
        self,
        threshold: LogLevel = LogLevel.ERROR,
        *,
        session_id: str | None = None,
        name: str = "scorm_runtime.api",
    ) -> None:
        self.threshold = threshold
        self.session_id = session_id or new_session_id()
        self._log = get_logger(name).bind(session_id=self.session_id)

    def enabled_for(self, level: LogLevel) -> bool:
        return level.severity >= self.threshold.severity

    def log(
        self,
        function_name: str,
        element: str | None,
        message: str,
        level: LogLevel = LogLevel.INFO,
        **extra: Any,
    ) -> None:
        if not self.enabled_for(level):
            return
        emit = getattr(self._log, level.value)
        if element:
            emit(message, function=function_name, element=element, **extra)
        else:
            emit(message, function=function_name, **extra)
