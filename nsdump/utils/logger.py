"""Logging configuration."""

import logging
from typing import Optional

LOGGER_PREFIX = "nsdump"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name or __name__)

    # Only configure if no handlers exist
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger


def set_log_level(level: int) -> None:
    """Apply a level to every package logger created so far."""
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(LOGGER_PREFIX) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
