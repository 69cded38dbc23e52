"""Logger setup shared by the storage and API modules."""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "portfolio"


def get_logger(name: str = ROOT_LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """Create (or return) a configured logger.

    Child loggers (``portfolio.storage.collection`` etc.) propagate to the
    ``portfolio`` logger, which owns the single stderr handler.

    Args:
        name: Logger name.
        level: Optional log level string (e.g. "INFO"). If omitted, keeps existing.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(handler)
    if root.level == logging.NOTSET:
        root.setLevel(logging.INFO)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level.upper())
    return logger
