"""
rulecheck Core Module
=====================

Configuration shared by the validator, the sanitizer and
the logger.
"""

from rulecheck.core.config import Config, ConfigSource, config, get_config, reset_config

__all__ = [
    "Config",
    "ConfigSource",
    "config",
    "get_config",
    "reset_config",
]
