"""
Logging setup for the system.
"""
import logging
from typing import Optional

from bedflow.config import settings


ROOT_LOGGER_NAME = "bedflow"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configures and returns the root logger of the system.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger
    """
    if level is None:
        level = settings.LOG_LEVEL

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        settings.LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Avoid duplicated handlers on reload
    if not logger.handlers:
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Returns a child logger for a specific module.

    Args:
        name: Module name

    Returns:
        Logger under the system root logger
    """
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
