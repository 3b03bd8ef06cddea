"""
rulecheck Validation System
===========================

Rule-based validation of request data.

Features:
- Pipe-separated rule strings ("required|string|min:3")
- Custom rules that shadow built-in ones
- Nested data addressed with dot paths
- Custom error messages per field and rule
- Defaults for missing fields
"""

from rulecheck.validation.validator import (
    ConfigurationError,
    Validator,
    ValidationError,
    ValidationResult,
    validate,
    validate_or_fail,
)
from rulecheck.validation.messages import MessageBag
from rulecheck.validation.parser import RuleInvocation, parse_rules
from rulecheck.validation.rules import (
    BUILTIN_RULES,
    BuiltinRule,
    CustomRule,
    Rule,
    ValueKind,
    get_builtin,
    Required,
    String,
    Integer,
    Min,
    Max,
    Email,
    Boolean,
    Url,
    Alpha,
    AlphaDash,
    Numeric,
    Equal,
    In,
    NotIn,
    Date,
)

__all__ = [
    # Core
    "Validator",
    "ConfigurationError",
    "ValidationError",
    "ValidationResult",
    "validate",
    "validate_or_fail",
    # Parsing and messages
    "RuleInvocation",
    "parse_rules",
    "MessageBag",
    # Rules
    "Rule",
    "ValueKind",
    "BuiltinRule",
    "BUILTIN_RULES",
    "CustomRule",
    "get_builtin",
    "Required",
    "String",
    "Integer",
    "Min",
    "Max",
    "Email",
    "Boolean",
    "Url",
    "Alpha",
    "AlphaDash",
    "Numeric",
    "Equal",
    "In",
    "NotIn",
    "Date",
]
