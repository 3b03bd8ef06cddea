"""
rulecheck - Declarative Data Validation
=======================================

Validates mappings of input data against per-field rule
strings, collects readable error messages and returns a
sanitized copy of the input.

Quick Start:
    from rulecheck import Validator

    validator = Validator({"name": "John_Doe", "age": 25})
    validator.set_rules({
        "name": "required|string|alpha_dash",
        "age": "required|integer|min:18|max:60",
    })

    if validator.validate():
        data = validator.sanitized()
    else:
        print(validator.errors())
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

from rulecheck.core.config import Config, get_config
from rulecheck.security.sanitizer import Sanitizer, sanitize
from rulecheck.utils.helpers import MISSING, resolve_path
from rulecheck.utils.logger import configure_logging, get_logger
from rulecheck.validation.rules import Rule
from rulecheck.validation.validator import (
    ConfigurationError,
    ValidationError,
    ValidationResult,
    Validator,
    validate,
    validate_or_fail,
)

__all__ = [
    # Metadata
    "__version__",
    "__license__",
    # Validation
    "Validator",
    "ValidationResult",
    "ValidationError",
    "ConfigurationError",
    "Rule",
    "validate",
    "validate_or_fail",
    # Helpers
    "MISSING",
    "resolve_path",
    "Sanitizer",
    "sanitize",
    # Config and logging
    "Config",
    "get_config",
    "configure_logging",
    "get_logger",
]
