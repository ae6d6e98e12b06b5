"""
Package logger for promptkit.

All modules log under ``promptkit.*``. The prompts own stdout, so records
only ever go to stderr, a caller supplied stream, or a file.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_root_logger = logging.getLogger("promptkit")
_root_logger.addHandler(logging.NullHandler())


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Replace the package handlers.

    With only *file* given, no stream handler is installed, which keeps
    stderr quiet while a prompt is drawing.

    Args:
        level: Level name such as ``"DEBUG"``, or its numeric value.
        format: Record format; defaults to :data:`DEFAULT_FORMAT`.
        stream: Stream for records; stderr when omitted.
        file: Path of a log file to append to.

    Example:
        setup_logging("DEBUG", file="prompts.log")
    """
    level = _coerce_level(level)
    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    handlers: list[logging.Handler] = []
    if stream is not None or not file:
        handlers.append(logging.StreamHandler(stream or sys.stderr))
    if file:
        handlers.append(logging.FileHandler(file, encoding="utf-8"))

    _root_logger.handlers.clear()
    _root_logger.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Return the logger for a submodule.

    Args:
        name: Dotted name relative to the package (``"prompts.select"``);
            an already qualified ``promptkit.`` name is accepted as is.
    """
    if not name.startswith("promptkit."):
        name = f"promptkit.{name}"
    return logging.getLogger(name)


def set_level(level: str | int) -> None:
    _root_logger.setLevel(_coerce_level(level))


def disable() -> None:
    """Mute every promptkit logger."""
    _root_logger.disabled = True


def enable() -> None:
    _root_logger.disabled = False
