import os
import sys
from typing import Optional

from loguru import logger

from linkwatch.core.constants import LOG_FILE

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "INFO", log_file: Optional[str] = LOG_FILE):
    """
    Route loguru output to stderr and, optionally, a rotating file.

    Args:
        level: Minimum level for the stderr sink
        log_file: Path of the DEBUG-level file sink, or None to skip it
    """
    logger.remove()  # Remove default handler

    # Add stderr handler only if available (not in windowed exe)
    if sys.stderr:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        logger.add(
            log_file,
            rotation="1 MB",
            retention="10 days",
            format=FILE_FORMAT,
            level="DEBUG",
        )


def get_logger():
    return logger
