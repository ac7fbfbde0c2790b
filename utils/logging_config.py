"""
Logging Setup
loguru sinks for the deployment scripts
"""

import os
import sys
from typing import Optional
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Replace loguru's default sink

    Logs always go to stderr; stdout is left for the script's result.

    Args:
        level: stderr level (default LOG_LEVEL or INFO)
        log_file: Optional rotating log file (default LOG_FILE)
    """
    level = (level or os.getenv('LOG_LEVEL') or 'INFO').upper()
    log_file = log_file or os.getenv('LOG_FILE')

    # checked before removing sinks so the error can still be logged
    try:
        logger.level(level)
    except ValueError:
        raise ValueError(f"LOG_LEVEL must be a loguru level name, got {level!r}") from None

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
