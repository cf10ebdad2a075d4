"""Per-process log level set through ``logging/setLevel``."""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(str, Enum):
    """The eight syslog severities MCP clients may request."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"


_PYTHON_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.NOTICE: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ALERT: logging.CRITICAL,
    LogLevel.EMERGENCY: logging.CRITICAL,
}


def python_level(level: LogLevel) -> int:
    """Map an MCP severity onto a :mod:`logging` level."""
    return _PYTHON_LEVELS[level]


class LogLevelState:
    """Holds the level requested by the client.

    When a *logger* is attached, the initial level and every change are
    applied to it as well, so the requested severity actually filters that
    logger's output. Writes are a single attribute assignment and need no
    locking.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger
        self.set(level)

    @property
    def level(self) -> LogLevel:
        return self._level

    def set(self, level: LogLevel) -> None:
        self._level = level
        if self._logger is not None:
            self._logger.setLevel(python_level(level))
