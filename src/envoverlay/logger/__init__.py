"""
envoverlay Logger Module

Usage:
    from envoverlay.logger import get_logger, create_logger

    logger = get_logger("envoverlay")
    logger.info("Fetched remote environment", peer="local", entries=12)

    logger = create_logger(name="envoverlay", level=logging.DEBUG, json_format=True)

Environment Variables:
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name ("envoverlay" -> ENVOVERLAY)
"""

import logging
import os
from typing import Any, Dict, Optional

from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter

_loggers: Dict[str, Logger] = {}


def _get_env_prefix(name: str) -> str:
    """Convert logger name to environment variable prefix.

    Examples:
        "envoverlay" -> "ENVOVERLAY"
        "envoverlay-peer" -> "ENVOVERLAY_PEER"
    """
    return name.upper().replace("-", "_").replace(".", "_")


def create_logger(
    name: str = "envoverlay",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
    stream: Any = None,
) -> Logger:
    """Create a new logger instance, replacing any handlers registered under ``name``.

    Parameters left as None are read from {PREFIX}_LOG_LEVEL,
    {PREFIX}_LOG_FILE and {PREFIX}_LOG_JSON.
    """
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    logger = StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
        stream=stream,
    )
    _loggers[name] = logger
    return logger


def get_logger(name: str = "envoverlay") -> Logger:
    """Get the logger for ``name``, creating it from the environment on first use."""
    logger = _loggers.get(name)
    if logger is None:
        logger = create_logger(name=name)
    return logger


__all__ = [
    "Logger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "create_logger",
    "get_logger",
]
