"""Centralised logging helpers for partman."""

from __future__ import annotations

import logging
from typing import Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = "partman") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def resolve_level(level: Optional[str]) -> int:
    """Map a level name to a :mod:`logging` level, defaulting to INFO."""

    return _LEVELS.get((level or "info").lower(), logging.INFO)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a console handler to the ``partman`` logger.

    Safe to call more than once; the handler is only added the first time.
    """

    logger = get_logger("partman")
    logger.setLevel(resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False
    return logger
