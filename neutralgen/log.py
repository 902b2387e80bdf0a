# File: neutralgen/log.py
"""Logging setup for the ``neutralgen`` logger hierarchy."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

LOG_FORMAT: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
LOG_DATE_FORMAT: str = "%H:%M:%S"


def level_for_verbosity(verbosity: int) -> int:
    """0 = WARNING, 1 = INFO, 2+ = DEBUG."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity >= 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbosity: int = 0, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the ``neutralgen`` logger.

    Existing handlers are replaced, so calling this twice does not duplicate
    output.  Records do not propagate to the root logger.
    """
    level: int = level_for_verbosity(verbosity)

    handler: logging.StreamHandler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root_logger: logging.Logger = logging.getLogger("neutralgen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False
    return root_logger


__all__: List[str] = [
    "LOG_FORMAT",
    "LOG_DATE_FORMAT",
    "level_for_verbosity",
    "setup_logging",
]
