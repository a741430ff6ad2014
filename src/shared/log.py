"""
Loguru setup for the CLI: JSON lines for collectors, coloured text for humans.
"""

import sys
from typing import Optional

from loguru import logger

from .config import Settings, get_settings

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(settings: Optional[Settings] = None, level: Optional[str] = None) -> int:
    """
    Replace loguru's default sink with one stderr sink.

    Args:
        settings: Source of LOG_FORMAT / LOG_LEVEL (cached settings if None)
        level: Overrides LOG_LEVEL when given

    Returns:
        The loguru handler id of the new sink
    """
    settings = settings or get_settings()
    level = (level or settings.log_level).upper()
    logger.remove()

    if settings.log_format.lower() == "json":
        return logger.add(sys.stderr, format="{message}", level=level, serialize=True)
    return logger.add(sys.stderr, format=TEXT_FORMAT, level=level, colorize=None)
