"""Loguru setup shared by the API and the maintenance scripts."""

import sys

from loguru import logger

from core.config import settings


def configure_logging(level: str | None = None) -> None:
    level = (level or settings.log_level).upper()
    if settings.debug:
        level = "DEBUG"
    logger.remove()
    logger.add(sys.stderr, level=level)
