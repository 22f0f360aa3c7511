"""Logging setup shared by the command line and library callers."""

from __future__ import annotations

import sys

from loguru import logger


LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | <level>{message}</level>"


def configure_logging(level: str = "WARNING") -> None:
    """Route loguru output to stderr at ``level``, replacing any earlier sinks."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=None)


__all__ = ["configure_logging", "logger"]
