"""Logging setup for paramfit.

Only the ``paramfit`` package logger carries a handler. Module loggers are
plain children that inherit its level and propagate their records to it, so
a single call to :func:`configure_logging` or :func:`set_log_level` controls
the output of the whole library. The package logger itself does not
propagate, which keeps the records out of the application's root handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

PACKAGE = "paramfit"
DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown logging level: {level!r}")
    return resolved


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)
        root.propagate = False
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the logger for ``name`` inside the ``paramfit`` hierarchy.

    Args:
        name: Module name, usually ``__name__``. Names outside the package
            are nested under ``paramfit.``; ``None`` gives the package logger.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("Bracketing minimum")
    """
    root = _package_logger()
    if name is None or name == PACKAGE:
        return root
    if not name.startswith(PACKAGE + "."):
        name = f"{PACKAGE}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the threshold shared by every paramfit logger.

    Args:
        level: A ``logging`` constant or its name, e.g. ``"DEBUG"``.
    """
    _package_logger().setLevel(_resolve_level(level))


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Replace the package handler and set the level.

    Args:
        level: Threshold for all paramfit output (default: WARNING).
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        stream: Destination stream (default: ``sys.stderr``).
    """
    root = _package_logger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


__all__ = ["DEFAULT_FORMAT", "PACKAGE", "configure_logging", "get_logger", "set_log_level"]
