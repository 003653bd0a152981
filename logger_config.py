"""Centralized logging configuration."""

import sys

from loguru import logger

from config import settings


log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss}</>",
        "<lvl>{level:<8}</>",
        "<c>{module}</>",
        "{message}",
    )
)


def setup_logging(level: str = settings.LOG_LEVEL) -> None:
    # Replace loguru's default stderr handler with a single console sink
    logger.remove()
    logger.add(sys.stdout, format=log_format, level=level.upper())
