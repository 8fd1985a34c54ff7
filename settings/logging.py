"""Logging configuration."""

import sys
from pathlib import Path

from loguru import logger

from settings import LOG_DIR

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "INFO", to_file: bool = True, log_dir: Path | None = None):
    """Configure console logging and, optionally, a daily rotated audit file.

    Seat assignments and term activations are logged at INFO, so the file sink
    doubles as an audit trail of council changes.
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if to_file:
        target = log_dir or LOG_DIR
        target.mkdir(parents=True, exist_ok=True)
        logger.add(
            target / "council_{time:YYYY-MM-DD}.log",
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
            enqueue=True,
        )
        logger.info("Logging to {}", target)

    return logger
