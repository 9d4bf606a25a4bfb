"""
Centralized logging configuration for sitemap-maker
统一日志配置模块
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

# Global logger instance
_logger: Optional[logging.Logger] = None

LOGGER_NAME = "sitemap_maker"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get or create the package logger.

    Modules pass ``__name__``; every ``sitemap_maker.*`` logger propagates to
    the package logger, which owns the single console handler.

    Args:
        name: Logger name, defaults to "sitemap_maker"

    Returns:
        Configured logger instance
    """
    global _logger

    if _logger is None:
        _logger = logging.getLogger(LOGGER_NAME)
        _logger.setLevel(logging.INFO)

        # Avoid adding handlers multiple times
        if not _logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(logging.INFO)

            # Format: [LEVEL] message
            formatter = logging.Formatter("[%(levelname)s] %(message)s")
            console_handler.setFormatter(formatter)

            _logger.addHandler(console_handler)

    if name == LOGGER_NAME:
        return _logger
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """
    Set the package log level.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               or integer level
    """
    logger = get_logger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
