"""
Logging setup. Every module logs through loguru's shared `logger`;
entry points call configure_logging() once.
"""
from __future__ import annotations

import sys

from loguru import logger

from config import settings

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with a single stderr sink at *level*."""
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.log_level), format=_FORMAT)
