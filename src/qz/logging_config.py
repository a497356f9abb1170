"""
Logging Configuration
Sets up the package logger for the application.
"""
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV = "QZ_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Union[int, str, None]) -> int:
    """Accept a logging constant, a level name, or None (read QZ_LOG_LEVEL)."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        named = logging.getLevelName(level.strip().upper())
        return named if isinstance(named, int) else logging.INFO
    return level


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'qz' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, "debug"); defaults to the
            QZ_LOG_LEVEL environment variable, then INFO.
        log_file: Optional path to save logs to a file.
    """
    level = resolve_level(level)
    logger = logging.getLogger("qz")
    logger.setLevel(level)

    # Drop our own handlers so calling this twice does not duplicate lines
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
