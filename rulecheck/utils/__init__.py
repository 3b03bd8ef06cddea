"""
rulecheck Utils Package
=======================

Path helpers and logging.
"""

from __future__ import annotations

from rulecheck.utils.helpers import (
    MISSING,
    PATH_SEPARATOR,
    is_missing,
    is_number,
    is_numeric,
    resolve_path,
    to_int,
    to_number,
    to_text,
)
from rulecheck.utils.logger import Logger, LogLevel, configure_logging, get_logger

__all__ = [
    # Helpers
    "MISSING",
    "PATH_SEPARATOR",
    "is_missing",
    "is_number",
    "is_numeric",
    "resolve_path",
    "to_int",
    "to_number",
    "to_text",
    # Logging
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
]
