"""
Unit Tests for the built-in rules.

Each rule is exercised directly through the dispatch table,
including the boundary cases of loosely typed input.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional

import pytest

from rulecheck.utils.helpers import MISSING
from rulecheck.validation.rules import (
    BUILTIN_RULES,
    BuiltinRule,
    CustomRule,
    Min,
    ValueKind,
    get_builtin,
)


def check(name: str, value: Any, param: Optional[str] = None, data: Optional[dict] = None) -> bool:
    rule = get_builtin(name)
    assert rule is not None, name
    return rule.validate(value, param, data or {})


class TestDispatchTable:
    """The name -> rule table."""

    def test_every_builtin_has_a_rule(self) -> None:
        assert set(BUILTIN_RULES) == set(BuiltinRule)
        for variant, rule in BUILTIN_RULES.items():
            assert rule.name == variant.value

    def test_unknown_name(self) -> None:
        assert get_builtin("adult") is None
        assert get_builtin("") is None

    def test_names_are_case_sensitive(self) -> None:
        assert get_builtin("Required") is None


class TestValueKind:

    @pytest.mark.parametrize(
        "value,kind",
        [
            (MISSING, ValueKind.MISSING),
            (None, ValueKind.NULL),
            (True, ValueKind.BOOL),
            (0, ValueKind.NUMBER),
            (1.5, ValueKind.NUMBER),
            ("x", ValueKind.TEXT),
            ([1], ValueKind.LIST),
            ((1,), ValueKind.LIST),
            ({"a": 1}, ValueKind.MAP),
            (b"x", ValueKind.OTHER),
        ],
    )
    def test_classification(self, value, kind) -> None:
        assert ValueKind.of(value) is kind


@pytest.mark.parametrize(
    "value,expected",
    [
        (MISSING, False),
        (None, False),
        ("", False),
        ("   ", False),
        ("a", True),
        (0, True),
        (True, True),
        (False, False),
        ([], False),
        ({}, False),
        ([0], True),
    ],
)
def test_required(value, expected) -> None:
    assert check("required", value) is expected


@pytest.mark.parametrize("value,expected", [("x", True), ("", True), (1, False), (None, False)])
def test_string(value, expected) -> None:
    assert check("string", value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (25, True),
        ("25", True),
        (" 25 ", True),
        ("-3", True),
        ("+3", True),
        ("0", True),
        ("007", False),
        ("2.5", False),
        (2.0, True),
        (2.5, False),
        (Decimal("4.0"), True),
        (Fraction(1, 2), False),
        (float("inf"), False),
        (True, False),
        ("abc", False),
        ("", False),
        (MISSING, False),
        (None, False),
    ],
)
def test_integer(value, expected) -> None:
    assert check("integer", value) is expected


class TestMinMax:
    """Numeric comparison, length comparison, and the permissive gap."""

    @pytest.mark.parametrize(
        "value,param,expected",
        [
            ("17", "18", False),
            (18, "18", True),
            (17.5, "18", False),
            ("abc", "3", True),
            ("ab", "3", False),
            (3, "3.9", True),
            (Decimal("17.5"), "18", False),
            (Fraction(37, 2), "18", True),
            ("", "0", True),
        ],
    )
    def test_min(self, value, param, expected) -> None:
        assert check("min", value, param) is expected

    @pytest.mark.parametrize(
        "value,param,expected",
        [
            ("61", "60", False),
            (60, "60", True),
            ("abcd", "3", False),
            ("abc", "3", True),
            (-1, "0", True),
        ],
    )
    def test_max(self, value, param, expected) -> None:
        assert check("max", value, param) is expected

    @pytest.mark.parametrize("name", ["min", "max"])
    @pytest.mark.parametrize("value", [True, False, [1, 2, 3], {"a": 1}, None, MISSING])
    def test_non_numeric_non_string_values_are_not_checked(self, name, value) -> None:
        """Known permissive boundary: these kinds always pass."""
        assert check(name, value, "1") is True
        assert check(name, value, "-1") is True

    def test_non_numeric_param_casts_to_zero(self) -> None:
        assert check("min", -1, "abc") is False
        assert check("min", 0, "abc") is True

    def test_message_depends_on_value_kind(self) -> None:
        rule = Min()

        assert rule.get_message("age", "18", "17") == "age must be at least 18."
        assert rule.get_message("age", "18", 17) == "age must be at least 18."
        assert rule.get_message("name", "3", "Jo") == "name must be at least 3 characters."

    def test_max_messages(self) -> None:
        rule = get_builtin("max")

        assert rule.get_message("age", "60", 61) == "age must not exceed 60."
        assert rule.get_message("name", "2", "abc") == "name must not exceed 2 characters."

    def test_missing_param_renders_empty(self) -> None:
        assert get_builtin("min").get_message("n", None, 5) == "n must be at least ."
        assert get_builtin("equal").get_message("n", None) == "n must be equal to ."


@pytest.mark.parametrize(
    "value,expected",
    [
        ("a@b.com", True),
        ("john.doe@example.co.uk", True),
        ("first+tag@mail-server.org", True),
        ("not-an-email", False),
        ("a@b", False),
        ("a b@c.com", False),
        ("a@b.com ", False),
        (5, False),
        (None, False),
    ],
)
def test_email(value, expected) -> None:
    assert check("email", value) is expected


@pytest.mark.parametrize("value,expected", [(True, True), (False, True), (1, False), ("true", False)])
def test_boolean(value, expected) -> None:
    assert check("boolean", value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("https://example.com", True),
        ("http://localhost:8000/path?q=1", True),
        ("ftp://files.example.org/pub", True),
        ("example.com", False),
        ("http://", False),
        ("https://exa mple.com", False),
        ("javascript:alert(1)", False),
        ("http://example.com:99999", False),
        (42, False),
        (MISSING, False),
    ],
)
def test_url(value, expected) -> None:
    assert check("url", value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("John", True),
        ("John1", False),
        ("", False),
        ("Jöhn", False),
        ("John Doe", False),
        (5, False),
        (None, False),
    ],
)
def test_alpha(value, expected) -> None:
    assert check("alpha", value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("John_Doe", True),
        ("a-b_c9", True),
        ("a b", False),
        ("a.b", False),
        ("", False),
        (123, True),
        (1.5, False),
        (True, False),
        (None, False),
    ],
)
def test_alpha_dash(value, expected) -> None:
    assert check("alpha_dash", value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (5, True),
        (2.5, True),
        (Decimal("2.5"), True),
        ("17", True),
        ("-1.5e3", True),
        (" 4 ", True),
        (".5", True),
        ("abc", False),
        ("", False),
        ("1_000", False),
        ("nan", False),
        (True, False),
        (None, False),
    ],
)
def test_numeric(value, expected) -> None:
    assert check("numeric", value) is expected


class TestEqual:
    """Strict comparison against another field."""

    def test_same_value(self) -> None:
        data = {"emails": {"email": "a@b.com"}}
        assert check("equal", "a@b.com", "emails.email", data) is True

    def test_different_value(self) -> None:
        data = {"password": "secret"}
        assert check("equal", "Secret", "password", data) is False

    def test_type_must_match(self) -> None:
        data = {"count": 1}
        assert check("equal", "1", "count", data) is False
        assert check("equal", True, "count", data) is False
        assert check("equal", 1, "count", data) is True

    def test_other_field_missing(self) -> None:
        assert check("equal", "x", "nowhere", {}) is False
        assert check("equal", None, "nowhere", {}) is False

    def test_both_missing(self) -> None:
        assert check("equal", MISSING, "nowhere", {}) is True


class TestInNotIn:

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("technology", True),
            ("sports", False),
            ("Technology", False),
            ("", False),
            (MISSING, False),
        ],
    )
    def test_in(self, value, expected) -> None:
        assert check("in", value, "technology,health,education") is expected

    def test_in_compares_text_form(self) -> None:
        assert check("in", 1, "1,2") is True
        assert check("in", 2.0, "1,2") is True
        assert check("in", True, "true,false") is True

    @pytest.mark.parametrize("value,expected", [("active", True), ("deleted", False), (None, True)])
    def test_not_in(self, value, expected) -> None:
        assert check("not_in", value, "suspended,deleted") is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1999-12-31", True),
        ("2024-02-29", True),
        ("2024-02-30", False),
        ("2023-02-29", False),
        ("2024-2-3", False),
        ("31-12-1999", False),
        ("2024-02-03T00:00", False),
        ("", False),
        (20240101, False),
        (None, False),
    ],
)
def test_date(value, expected) -> None:
    assert check("date", value) is expected


class TestCustomRule:

    def test_missing_value_passed_as_none(self) -> None:
        rule = CustomRule("probe", lambda value, param: value is None and param == "p")

        assert rule.validate(MISSING, "p", {}) is True

    def test_falsy_result_fails(self) -> None:
        rule = CustomRule("zero", lambda value, param: 0)

        assert rule.validate(1, None, {}) is False
        assert rule.get_message("count", None) == "count validation failed."
