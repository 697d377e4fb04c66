"""Logging setup for the explorer."""

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Send log records at *level* and above to stderr."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )
