"""
Logging utilities for ssh-admin.

Provides a centralized logging configuration for the entire package.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("ssh_admin")


def setup_logging(
    level: str | int = "WARNING",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for ssh-admin.

    A stream handler is installed unless only a *file* is given: the
    interactive screen owns the terminal, so ``run`` logs to a file alone.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr when no file is given)
        file: Optional file path to write logs

    Example:
        from ssh_admin.logging import setup_logging

        # Basic setup
        setup_logging("DEBUG")

        # File only, while the screen is active
        setup_logging("INFO", file="ssh-admin.log")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    if stream is not None or not file:
        stream_handler = logging.StreamHandler(stream or sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(level)
        _root_logger.addHandler(stream_handler)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "users_list", "directory")

    Returns:
        Logger instance
    """
    if name.startswith("ssh_admin."):
        return logging.getLogger(name)
    return logging.getLogger(f"ssh_admin.{name}")


def disable() -> None:
    """
    Silence all ssh-admin logging, child loggers included.

    The package logger gets a ``NullHandler`` so records never fall through
    to ``logging.lastResort`` on stderr, and a level above ``CRITICAL`` that
    child loggers inherit.  :func:`setup_logging` undoes this.
    """
    _root_logger.handlers.clear()
    _root_logger.addHandler(logging.NullHandler())
    _root_logger.setLevel(logging.CRITICAL + 1)
