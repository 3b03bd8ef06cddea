"""
rulecheck Security Module
=========================

Sanitization of validated input for safe HTML output.
"""

from rulecheck.security.sanitizer import Sanitizer, SanitizerConfig, sanitize

__all__ = [
    "Sanitizer",
    "SanitizerConfig",
    "sanitize",
]
