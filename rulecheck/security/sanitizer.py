"""
rulecheck Input Sanitizer
=========================

Prepares validated input for safe embedding in HTML output:
leading and trailing whitespace is trimmed and the HTML
metacharacters & < > " ' are escaped.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from rulecheck.core.config import Config, get_config


@dataclass
class SanitizerConfig:
    """Sanitizer configuration."""

    # Trim whitespace
    trim_whitespace: bool = True

    # Escape " and ' as well as & < >
    escape_quotes: bool = True

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "SanitizerConfig":
        """Build from the `sanitizer.*` configuration keys."""
        config = config or get_config()
        return cls(
            trim_whitespace=config.get_bool("sanitizer.trim_whitespace", True),
            escape_quotes=config.get_bool("sanitizer.escape_quotes", True),
        )


class Sanitizer:
    """
    Input sanitizer for string values.

    Always trims and escapes quotes unless given another
    SanitizerConfig. Sanitizer.from_config() reads the settings
    from configuration instead.

    Example:
        sanitizer = Sanitizer()

        sanitizer.string("  <b>Hi</b> ")
        # "&lt;b&gt;Hi&lt;/b&gt;"

        sanitizer.mapping({"bio": " <i>x</i>", "age": 25})
        # {"bio": "&lt;i&gt;x&lt;/i&gt;", "age": 25}
    """

    def __init__(self, config: Optional[SanitizerConfig] = None) -> None:
        self.config = config or SanitizerConfig()

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "Sanitizer":
        """Build a sanitizer from the `sanitizer.*` configuration keys."""
        return cls(SanitizerConfig.from_config(config))

    def string(self, value: str) -> str:
        """
        Sanitize a string.

        Args:
            value: Input string

        Returns:
            Trimmed, HTML-escaped string
        """
        if self.config.trim_whitespace:
            value = value.strip()
        return html.escape(value, quote=self.config.escape_quotes)

    def value(self, value: Any) -> Any:
        """Sanitize strings; pass anything else through unchanged."""
        if isinstance(value, str):
            return self.string(value)
        return value

    def mapping(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Sanitize the top level of a mapping.

        Returns a new dict with the same keys. Nested containers
        are not walked; they are shared with the input.
        """
        return {key: self.value(item) for key, item in data.items()}


def sanitize(data: Mapping[str, Any], config: Optional[SanitizerConfig] = None) -> Dict[str, Any]:
    """Shortcut for Sanitizer(config).mapping(data)."""
    return Sanitizer(config).mapping(data)
