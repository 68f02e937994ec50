"""Logging utilities for stepsearch.

Line searches report each trial step at DEBUG level and every failed search
at WARNING level. Nothing is printed below WARNING unless the level is
lowered with ``set_log_level`` or ``configure_logging``.

Example:
    >>> import logging
    >>> from stepsearch.logging import configure_logging
    >>> configure_logging(level=logging.DEBUG)  # show every trial step
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_ROOT = "stepsearch"

_level = logging.WARNING
_loggers: dict[str, logging.Logger] = {}


def _as_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _attach_handler(
    logger: logging.Logger, level: int, stream: object, formatter: logging.Formatter
) -> None:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for a stepsearch module.

    Names outside the package are nested under ``stepsearch.``, so
    ``get_logger("solver")`` yields ``stepsearch.solver``. Loggers write to
    stderr and do not propagate to the root logger.
    """
    if name is None or name == _ROOT:
        logger_name = _ROOT
    elif name.startswith(_ROOT + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT}.{name}"

    logger = _loggers.get(logger_name)
    if logger is not None:
        return logger

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_level)
        _attach_handler(logger, _level, sys.stderr, logging.Formatter(_FORMAT))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every stepsearch logger and of loggers created later.

    Args:
        level: A ``logging`` level or its name, e.g. ``"DEBUG"``.
    """
    global _level
    _level = _as_level(level)
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Route every stepsearch logger to one stream.

    Existing handlers are replaced. Typically called once at application
    startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format; defaults to ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).
    """
    global _level
    _level = _as_level(level)
    formatter = logging.Formatter(format_string or _FORMAT)
    stream = stream if stream is not None else sys.stderr

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        _attach_handler(logger, _level, stream, formatter)
