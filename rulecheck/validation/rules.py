"""
rulecheck Validation Rules
==========================

Collection of built-in validation rules.

Every rule receives the resolved field value, the optional
parameter from its "name:param" token and the full data being
validated, and reports whether the value passes.
"""

from __future__ import annotations

import math
import numbers
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Pattern, Union
from urllib.parse import urlsplit

from rulecheck.utils.helpers import (
    MISSING,
    is_numeric,
    resolve_path,
    to_int,
    to_number,
    to_text,
)

Predicate = Callable[[Any, Optional[str]], Any]


class ValueKind(Enum):
    """Runtime shape of a field value, as seen by the rules."""

    MISSING = "missing"
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    TEXT = "text"
    LIST = "list"
    MAP = "map"
    OTHER = "other"

    @classmethod
    def of(cls, value: Any) -> "ValueKind":
        if value is MISSING:
            return cls.MISSING
        if value is None:
            return cls.NULL
        # bool before number: bool is an int subclass
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, numbers.Real):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.TEXT
        if isinstance(value, Mapping):
            return cls.MAP
        if isinstance(value, (list, tuple, set, frozenset)):
            return cls.LIST
        return cls.OTHER


class Rule(ABC):
    """
    Abstract validation rule.

    Implement `validate` to create a rule. `message` is a template
    with {field} and {param} placeholders.

    Example:
        @dataclass
        class Positive(Rule):
            name = "positive"
            message: str = "{field} must be positive."

            def validate(self, value, param, data) -> bool:
                return ValueKind.of(value) is ValueKind.NUMBER and value > 0
    """

    name: ClassVar[str] = ""
    message: str = "{field} is invalid."

    @abstractmethod
    def validate(
        self,
        value: Any,
        param: Optional[str],
        data: Mapping[str, Any],
    ) -> bool:
        """
        Validate the value.

        Args:
            value: Resolved field value, possibly MISSING
            param: Text after the first ":" of the token, or None
            data: Full data being validated

        Returns:
            True if valid, False otherwise
        """
        ...

    def get_message(self, field: str, param: Optional[str], value: Any = None) -> str:
        """Get the default error message for a failed check."""
        return self.message.format(field=field, param=_param_text(param))

    def __call__(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        return self.validate(value, param, data)


def _param_text(param: Optional[str]) -> str:
    return "" if param is None else param


def _pattern_text(value: Any) -> Optional[str]:
    """Text a pattern rule should match, or None if it cannot apply."""
    kind = ValueKind.of(value)
    if kind is ValueKind.TEXT:
        return value
    if kind is ValueKind.NUMBER:
        return to_text(value)
    return None


@dataclass
class Required(Rule):
    """Require field to be present and not empty."""

    name = "required"
    message: str = "{field} is required."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        kind = ValueKind.of(value)
        if kind in (ValueKind.MISSING, ValueKind.NULL):
            return False
        # False reads as empty form input
        if kind is ValueKind.BOOL:
            return value
        if kind is ValueKind.TEXT:
            return bool(value.strip())
        if kind in (ValueKind.LIST, ValueKind.MAP):
            return len(value) > 0
        return True


@dataclass
class String(Rule):
    """Value must be a string."""

    name = "string"
    message: str = "{field} must be a string."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        return ValueKind.of(value) is ValueKind.TEXT


@dataclass
class Integer(Rule):
    """Value must be an integer, or text holding one."""

    name = "integer"
    message: str = "{field} must be an integer."

    _pattern: ClassVar[Pattern] = re.compile(r"[+-]?(?:0|[1-9][0-9]*)")

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        kind = ValueKind.of(value)
        if kind is ValueKind.NUMBER:
            if isinstance(value, numbers.Integral):
                return True
            return math.isfinite(value) and value == int(value)
        if kind is ValueKind.TEXT:
            return bool(self._pattern.fullmatch(value.strip()))
        return False


class _Bound(Rule):
    """
    Shared logic of min and max.

    Numbers and numeric strings are compared by value, other
    strings by length. Any other kind of value is not checked.
    """

    length_message: str = ""

    @abstractmethod
    def compare(self, measured: Union[int, float], limit: int) -> bool:
        ...

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        limit = to_int(param)
        if is_numeric(value):
            return self.compare(to_number(value), limit)
        if ValueKind.of(value) is ValueKind.TEXT:
            return self.compare(len(value), limit)
        return True

    def get_message(self, field: str, param: Optional[str], value: Any = None) -> str:
        template = self.message if is_numeric(value) else self.length_message
        return template.format(field=field, param=_param_text(param))


@dataclass
class Min(_Bound):
    """Minimum value for numbers, length for strings."""

    name = "min"
    message: str = "{field} must be at least {param}."
    length_message: str = "{field} must be at least {param} characters."

    def compare(self, measured: Union[int, float], limit: int) -> bool:
        return measured >= limit


@dataclass
class Max(_Bound):
    """Maximum value for numbers, length for strings."""

    name = "max"
    message: str = "{field} must not exceed {param}."
    length_message: str = "{field} must not exceed {param} characters."

    def compare(self, measured: Union[int, float], limit: int) -> bool:
        return measured <= limit


@dataclass
class Email(Rule):
    """Validate email format."""

    name = "email"
    message: str = "{field} must be a valid email."

    _pattern: ClassVar[Pattern] = re.compile(
        r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}"
    )

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        if ValueKind.of(value) is not ValueKind.TEXT:
            return False
        return bool(self._pattern.fullmatch(value))


@dataclass
class Boolean(Rule):
    """Value must be a boolean."""

    name = "boolean"
    message: str = "{field} must be a boolean value."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        return ValueKind.of(value) is ValueKind.BOOL


@dataclass
class Url(Rule):
    """Validate URL format: a scheme, a host, no whitespace."""

    name = "url"
    message: str = "{field} must be a valid URL."

    _scheme: ClassVar[Pattern] = re.compile(r"[a-zA-Z][a-zA-Z0-9+.-]*")
    _whitespace: ClassVar[Pattern] = re.compile(r"[\s\x00-\x1f\x7f]")

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        if ValueKind.of(value) is not ValueKind.TEXT:
            return False
        if self._whitespace.search(value):
            return False
        try:
            parts = urlsplit(value)
            hostname = parts.hostname
            parts.port  # raises on a malformed port
        except ValueError:
            return False
        return bool(self._scheme.fullmatch(parts.scheme) and hostname)


@dataclass
class Alpha(Rule):
    """Value must contain only ASCII letters."""

    name = "alpha"
    message: str = "{field} must contain only alphabetic characters."

    _pattern: ClassVar[Pattern] = re.compile(r"[a-zA-Z]+")

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        text = _pattern_text(value)
        return text is not None and bool(self._pattern.fullmatch(text))


@dataclass
class AlphaDash(Rule):
    """Value must contain only letters, digits, dashes and underscores."""

    name = "alpha_dash"
    message: str = (
        "{field} must contain only alphanumeric characters, dashes, and underscores."
    )

    _pattern: ClassVar[Pattern] = re.compile(r"[a-zA-Z0-9_-]+")

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        text = _pattern_text(value)
        return text is not None and bool(self._pattern.fullmatch(text))


@dataclass
class Numeric(Rule):
    """Value must be a number or a numeric string."""

    name = "numeric"
    message: str = "{field} must be numeric."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        return is_numeric(value)


@dataclass
class Equal(Rule):
    """Value must be identical, type included, to another field."""

    name = "equal"
    message: str = "{field} must be equal to {param}."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        other = resolve_path(param, data) if param else MISSING
        if value is other:
            return True
        return type(value) is type(other) and value == other


@dataclass
class In(Rule):
    """Value must be in the comma-separated list."""

    name = "in"
    message: str = "{field} must be one of the following values: {param}."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        return to_text(value) in (param or "").split(",")


@dataclass
class NotIn(Rule):
    """Value must not be in the comma-separated list."""

    name = "not_in"
    message: str = "{field} must not be one of the following values: {param}."

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        return to_text(value) not in (param or "").split(",")


@dataclass
class Date(Rule):
    """Value must be a calendar date written exactly as YYYY-MM-DD."""

    name = "date"
    message: str = "{field} must be a valid date."

    format: str = "%Y-%m-%d"

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        if ValueKind.of(value) is not ValueKind.TEXT:
            return False
        try:
            parsed = datetime.strptime(value, self.format).date()
        except ValueError:
            return False
        # Rejects rollovers and unpadded forms such as 2024-2-3
        return parsed.isoformat() == value


class CustomRule(Rule):
    """
    Rule wrapper for a registered predicate.

    The predicate is called as predicate(value, param); a missing
    value is passed as None. Any falsy return fails the rule.
    """

    message = "{field} validation failed."

    def __init__(self, name: str, predicate: Predicate) -> None:
        self.name = name  # type: ignore[misc]
        self.predicate = predicate

    def validate(self, value: Any, param: Optional[str], data: Mapping[str, Any]) -> bool:
        if value is MISSING:
            value = None
        return bool(self.predicate(value, param))

    def __repr__(self) -> str:
        return f"CustomRule(name={self.name!r}, predicate={self.predicate!r})"


class BuiltinRule(str, Enum):
    """Names of the built-in rules."""

    REQUIRED = "required"
    STRING = "string"
    INTEGER = "integer"
    MIN = "min"
    MAX = "max"
    EMAIL = "email"
    BOOLEAN = "boolean"
    URL = "url"
    ALPHA = "alpha"
    ALPHA_DASH = "alpha_dash"
    NUMERIC = "numeric"
    EQUAL = "equal"
    IN = "in"
    NOT_IN = "not_in"
    DATE = "date"


BUILTIN_RULES: Dict[BuiltinRule, Rule] = {
    BuiltinRule.REQUIRED: Required(),
    BuiltinRule.STRING: String(),
    BuiltinRule.INTEGER: Integer(),
    BuiltinRule.MIN: Min(),
    BuiltinRule.MAX: Max(),
    BuiltinRule.EMAIL: Email(),
    BuiltinRule.BOOLEAN: Boolean(),
    BuiltinRule.URL: Url(),
    BuiltinRule.ALPHA: Alpha(),
    BuiltinRule.ALPHA_DASH: AlphaDash(),
    BuiltinRule.NUMERIC: Numeric(),
    BuiltinRule.EQUAL: Equal(),
    BuiltinRule.IN: In(),
    BuiltinRule.NOT_IN: NotIn(),
    BuiltinRule.DATE: Date(),
}


def get_builtin(name: str) -> Optional[Rule]:
    """Look up a built-in rule by name."""
    try:
        return BUILTIN_RULES[BuiltinRule(name)]
    except ValueError:
        return None
