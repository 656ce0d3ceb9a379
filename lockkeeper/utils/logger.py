"""
Logging utilities for lockkeeper.

This module centralizes logger configuration, formatting, and retrieval
for the lockkeeper package. It is safe for library use (a ``NullHandler``
is installed until the CLI configures output) and supports optional
colorized level names.

The reconciliation engine has an explicit *debug* switch instead of a
process-wide flag; :func:`diagnostic_level` maps that switch to the level
its diagnostics are emitted at.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from lockkeeper.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "lockkeeper"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Logging formatter that colors the level name on capable terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if not (color and self.use_color and _stderr_supports_color()):
            return super().format(record)

        # Color a copy of the level name only; other handlers see the original
        original = record.levelname
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _stderr_supports_color() -> bool:
    """Return True if ANSI colors should be written to stderr."""
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stderr.isatty()
    except (AttributeError, OSError):
        return False


def level_for_verbosity(verbose: int) -> int:
    """Map a ``-v`` count to a logging level.

    ``0`` → WARNING, ``1`` → INFO, ``2`` or more → DEBUG.
    """
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def diagnostic_level(debug: bool) -> int:
    """Level used for engine diagnostics: INFO in debug mode, else DEBUG."""
    return logging.INFO if debug else logging.DEBUG


def _build_handler(stream: Optional[IO[str]], verbose: bool) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=not os.environ.get("NO_COLOR"),
        )
    )
    return handler


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Send lockkeeper log records to ``stream`` (stderr by default).

    Replaces any handler installed by an earlier call, and stops records
    from propagating to the application's root logger.

    Args:
        level: Minimum level to emit.
        verbose: Use the long format with timestamp and logger name.
        stream: Output stream.
    """
    global _logging_configured

    handler = _build_handler(stream, verbose)
    handler.setLevel(level)

    with _lock:
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.handlers[:] = [handler]
        root.setLevel(level)
        root.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``lockkeeper.<name>``, or the package logger for no name."""
    if not name or name == ROOT_LOGGER_NAME:
        qualified = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME + "."):
        qualified = name
    else:
        qualified = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(qualified)


def is_logging_configured() -> bool:
    """Return True once :func:`setup_logging` has run."""
    return _logging_configured


def disable_logging() -> None:
    """Silence lockkeeper output until :func:`setup_logging` runs again."""
    global _logging_configured

    with _lock:
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.handlers[:] = [logging.NullHandler()]
        root.setLevel(logging.NOTSET)
        _logging_configured = False


# Library use: stay silent until an application configures logging
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
