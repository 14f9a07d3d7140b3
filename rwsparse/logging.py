"""Logging utilities for rwsparse.

Provides per-module loggers that share one handler configuration so that the
reweighting driver and the solver oracles report in a consistent format.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Default logging level
_DEFAULT_LEVEL = logging.WARNING

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Handler settings applied to loggers created after configure_logging()
_format: str = _DEFAULT_FORMAT
_stream: Optional[object] = None

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached so repeated calls never stack duplicate handlers. The
    name should typically be ``__name__`` from the calling module.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger ``rwsparse``.

    Returns:
        Configured logger instance.

    Example:
        >>> from rwsparse.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Solving weighted L1 sub-problem")
    """
    if name is None:
        name = "rwsparse"

    if name == "rwsparse" or name.startswith("rwsparse."):
        logger_name = name
    else:
        logger_name = f"rwsparse.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)

        handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_format))

        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all rwsparse loggers.

    Args:
        level: Logging level (``logging.DEBUG``, ``logging.INFO``, ...) or its
            name as a string (``"DEBUG"``, ``"INFO"``, ...).

    Example:
        >>> from rwsparse.logging import set_log_level
        >>> set_log_level("INFO")
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for rwsparse.

    Replaces the handlers of every existing rwsparse logger and sets the
    default level used for loggers created afterwards. Call it once at
    application startup, e.g. from an example script.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses
            ``[LEVEL] name: message``.
        stream: Output stream (default: ``sys.stderr``).
    """
    level = _coerce_level(level)

    if stream is None:
        stream = sys.stderr

    format_string = format_string or _DEFAULT_FORMAT
    formatter = logging.Formatter(format_string)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    global _DEFAULT_LEVEL, _format, _stream
    _DEFAULT_LEVEL = level
    _format = format_string
    _stream = stream


__all__ = ["get_logger", "set_log_level", "configure_logging"]
