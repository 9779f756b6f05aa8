"""
Logging configuration for the timeline API.

Sets up loguru with a human-readable console format. Call ``setup_logging``
once at startup; modules log through ``from loguru import logger``.
"""

import sys
from typing import Optional

from loguru import logger

from .config import settings


FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Set up logging configuration.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
    """
    level = log_level or settings.LOG_LEVEL

    # Remove default handler
    logger.remove()
    logger.add(
        sys.stderr,
        format=FORMAT,
        level=level,
        backtrace=settings.DEBUG,
        diagnose=settings.DEBUG,
    )

    logger.info(f"Logging initialized with level: {level}")
