"""Logging configuration for the cluster_registry package."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from cluster_registry.config import settings


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name or number into a logging level, defaulting to INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    # getLevelName returns "Level <name>" for names it does not know
    return value if isinstance(value, int) else logging.INFO


def setup_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Set up a logger with the specified name and log level.

    Args:
        name: The name of the logger
        level: The logging level (default: ``settings.log_level``).  An
            unknown level name falls back to ``INFO``.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level if level is not None else settings.log_level))

    # Don't add handlers if they're already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
