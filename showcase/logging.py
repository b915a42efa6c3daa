"""Logging helpers built on femtologging.

Log levels are normalised here so the command line and environment can feed
arbitrary strings in, and messages are pre-formatted with percent-style
interpolation before they reach femtologging.

Example:
>>> from showcase.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Fetched %d repositories", 12)

"""

from __future__ import annotations

import enum
import os
import typing as typ

from femtologging import basicConfig, get_logger

LOG_LEVEL_ENV_VAR = "SHOWCASE_LOG_LEVEL"


class LogLevel(enum.StrEnum):
    """Log levels accepted by femtologging."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Normalise a log level string and report invalid inputs.

    Parameters
    ----------
    level : str | None
        Raw log level, typically from ``--log-level`` or the environment.

    Returns
    -------
    tuple[str, bool]
        The normalised level and ``True`` when the input was unusable.

    """
    if not level:
        return (LogLevel.INFO.value, True)

    normalized = level.strip().upper()
    if normalized in LogLevel.__members__:
        return (normalized, False)

    return (LogLevel.INFO.value, True)


def resolve_log_level(cli_level: str | None) -> str | None:
    """Prefer an explicit CLI level over ``SHOWCASE_LOG_LEVEL``."""
    if cli_level:
        return cli_level
    return os.environ.get(LOG_LEVEL_ENV_VAR)


def configure_logging(level: str | None, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging and return the normalised level.

    Parameters
    ----------
    level : str | None
        Raw log level string.
    force : bool, optional
        Replace any existing handler configuration.

    Returns
    -------
    tuple[str, bool]
        The normalised level and a flag indicating invalid input.

    """
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


class _SupportsLog(typ.Protocol):
    """Protocol for femtologging-compatible loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into a percent-style ``template``."""
    return template % args if args else template


def log_info(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log an INFO message with percent-style formatting."""
    logger.log("INFO", format_log_message(template, *args))


def log_warning(logger: _SupportsLog, template: str, *args: object) -> None:
    """Log a WARNING message with percent-style formatting."""
    logger.log("WARNING", format_log_message(template, *args))


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: BaseException | None = None,
) -> None:
    """Log an ERROR message, attaching ``exc_info`` when an error caused it."""
    logger.log("ERROR", format_log_message(template, *args), exc_info=exc_info)


__all__ = [
    "LOG_LEVEL_ENV_VAR",
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_error",
    "log_info",
    "log_warning",
    "normalize_log_level",
    "resolve_log_level",
]
