"""loguru sink configuration for the API process."""

from __future__ import annotations

import sys

from loguru import logger

from backend.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def configure_logging(settings: Settings) -> None:
    logger.remove()  # drop the default stderr handler
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=settings.log_level,
        colorize=True,
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            format=FILE_FORMAT,
            level=settings.log_level,
            rotation="10 MB",
        )
    logger.info(f"Logging initialized at level {settings.log_level}")
