"""
rulecheck Helpers
=================

Path resolution and value coercion helpers shared by the
validator, the rules and the sanitizer.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping
from typing import Any, Optional, Union


class _Missing:
    """Marker for a field path that does not exist in the data."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self


MISSING = _Missing()

PATH_SEPARATOR = "."


# Optional sign, digits, optional fraction, optional exponent.
# Surrounding whitespace is tolerated, as in form input.
_NUMERIC_PATTERN = re.compile(
    r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$"
)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def resolve_path(
    path: str,
    data: Any,
    separator: str = PATH_SEPARATOR,
) -> Any:
    """
    Get nested value from a mapping using dot notation.

    Stops at the first segment that is absent and returns
    MISSING instead of raising.

    Args:
        path: Dot-separated path
        data: Source mapping
        separator: Path separator

    Returns:
        Value at path or MISSING

    Example:
        >>> resolve_path("a.b", {"a": {"b": 1}})
        1
        >>> resolve_path("a.c", {"a": {"b": 1}})
        MISSING
    """
    current = data

    for key in path.split(separator):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]

    return current


def is_missing(value: Any) -> bool:
    """Check for the MISSING sentinel."""
    return value is MISSING


def is_number(value: Any) -> bool:
    """Check for a real number (int, float, Decimal, Fraction), excluding booleans."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    """
    Check if value is a number or a string holding one.

    Example:
        >>> is_numeric("17")
        True
        >>> is_numeric(" -1.5e3 ")
        True
        >>> is_numeric("12abc")
        False
    """
    if is_number(value):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_PATTERN.match(value))
    return False


def to_number(value: Any) -> Union[int, float]:
    """
    Convert a numeric value to int or float.

    Assumes `is_numeric(value)` holds.
    """
    if is_number(value):
        return value
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def to_int(text: Optional[str]) -> int:
    """
    Cast a rule parameter to int.

    Reads the leading number and truncates it; anything
    that does not start with a number casts to 0.

    Example:
        >>> to_int("18")
        18
        >>> to_int("3.9")
        3
        >>> to_int("abc")
        0
    """
    if text is None:
        return 0
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0
    try:
        return int(float(match.group(0)))
    except (OverflowError, ValueError):
        return 0


def to_text(value: Any) -> str:
    """
    Render a scalar the way form input would carry it.

    None and MISSING become "", booleans "true"/"false",
    integral floats and Decimals drop their fraction part.
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if (
        is_number(value)
        and not isinstance(value, numbers.Integral)
        and math.isfinite(value)
        and value == int(value)
    ):
        return str(int(value))
    return str(value)
