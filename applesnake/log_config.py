"""
log_config.py — Logging setup for the game process.
"""

import logging
import os

from .config import LOG_FORMAT, LOG_LEVEL_ENV


def setup_logging(level: str | None = None) -> None:
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
