"""Logging setup"""
import logging
import sys
from typing import Optional

from sticker_sync.core.config import settings

LOGGER_NAME = "sticker_sync"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FORMATS = {
    "production": "%(asctime)s - %(levelname)s - %(message)s",
    "development": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
}

IS_PRODUCTION = settings.environment == "production"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger; safe to call more than once.

    Args:
        level: level name, defaults to settings.log_level. DEBUG is raised
            to INFO in production.
    """
    logger = logging.getLogger(LOGGER_NAME)

    level_name = (level or settings.log_level).upper()
    if IS_PRODUCTION and level_name == "DEBUG":
        level_name = "INFO"
    logger.setLevel(getattr(logging, level_name))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        fmt = LOG_FORMATS["production" if IS_PRODUCTION else "development"]
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """Return a single-line, length-capped version of scraped text for logging.

    Sticker dumps can run to several kilobytes and contain line breaks that
    break log aggregation.

    Args:
        value: text to log
        max_length: maximum length before truncation

    Returns:
        sanitized string
    """
    if not value:
        return "[empty]"

    result = " ".join(value.split())

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
