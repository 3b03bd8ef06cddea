"""
rulecheck Validator
===================

Core validation engine.

Validates a mapping of input data against per-field rule
strings and collects every failure as a readable message.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from rulecheck.security.sanitizer import Sanitizer
from rulecheck.utils.helpers import PATH_SEPARATOR, resolve_path
from rulecheck.utils.logger import get_logger
from rulecheck.validation.messages import MessageBag
from rulecheck.validation.parser import (
    PARAM_SEPARATOR,
    RULE_SEPARATOR,
    RuleInvocation,
    RuleSpec,
    parse_rules,
)
from rulecheck.validation.rules import CustomRule, Predicate, get_builtin

logger = get_logger("rulecheck.validation")


class ConfigurationError(ValueError):
    """
    Malformed configuration handed to a Validator.

    Raised at configuration time, never during validation.
    """


class ValidationError(Exception):
    """
    Validation failed exception.

    Contains all validation errors.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            error_list = []
            for field_name, messages in self.errors.items():
                for msg in messages:
                    error_list.append(f"  - {field_name}: {msg}")
            return "Validation failed:\n" + "\n".join(error_list)
        return "Validation failed"

    def first(self, field_name: Optional[str] = None) -> Optional[str]:
        """Get first error message."""
        return _first_error(self.errors, field_name)


@dataclass
class ValidationResult:
    """
    Result of validation.

    Contains the sanitized data and any errors.
    """

    valid: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    def failed(self) -> bool:
        return not self.valid

    def has_error(self, field_name: str) -> bool:
        return field_name in self.errors

    def get_errors(self, field_name: str) -> List[str]:
        return self.errors.get(field_name, [])

    def first_error(self, field_name: Optional[str] = None) -> Optional[str]:
        return _first_error(self.errors, field_name)

    def all_errors(self) -> List[str]:
        """Get all error messages as flat list."""
        all_msgs = []
        for messages in self.errors.values():
            all_msgs.extend(messages)
        return all_msgs

    def raise_if_invalid(self) -> None:
        """Raise ValidationError if invalid."""
        if not self.valid:
            raise ValidationError(errors=self.errors)


def _first_error(
    errors: Dict[str, List[str]],
    field_name: Optional[str] = None,
) -> Optional[str]:
    if field_name:
        messages = errors.get(field_name, [])
        return messages[0] if messages else None
    for messages in errors.values():
        if messages:
            return messages[0]
    return None


class Validator:
    """
    Main validation class.

    Holds the input data together with its rules, custom
    messages, custom rules and defaults.

    Example:
        validator = Validator({"name": "John_Doe", "age": "17"})
        validator.set_rules({
            "name": "required|string|alpha_dash",
            "age": "required|numeric|min:18|max:60",
        })

        if not validator.validate():
            print(validator.errors())
            # {"age": ["age must be at least 18."]}

    Rules run in declaration order and never stop early: a field
    collects one message per failed rule, and every field is
    checked. Unknown rule names are reported as errors too.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        rules: Optional[Mapping[str, RuleSpec]] = None,
        messages: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Initialize validator.

        Args:
            data: Input data, kept by reference
            rules: Rule string per field path
            messages: Custom error messages keyed "field.rule"
            defaults: Values for absent top-level keys
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"data must be a mapping, got {type(data).__name__}"
            )

        self._data = data
        self._rules: Dict[str, List[RuleInvocation]] = {}
        self._messages = MessageBag()
        self._custom_rules: Dict[str, CustomRule] = {}
        self._defaults: Dict[str, Any] = {}
        self._errors: Dict[str, List[str]] = {}

        if rules is not None:
            self.set_rules(rules)
        if messages is not None:
            self.set_messages(messages)
        if defaults is not None:
            self.set_defaults(defaults)

    @property
    def data(self) -> Mapping[str, Any]:
        """The live input data, defaults included."""
        return self._data

    @property
    def rules(self) -> Dict[str, List[RuleInvocation]]:
        return {name: list(invocations) for name, invocations in self._rules.items()}

    @property
    def defaults(self) -> Dict[str, Any]:
        return dict(self._defaults)

    def set_rules(self, rules: Mapping[str, RuleSpec]) -> "Validator":
        """
        Replace the rule table.

        Args:
            rules: Mapping of field path to "rule|rule:param" string
                (or a sequence of rule tokens)
        """
        if not isinstance(rules, Mapping):
            raise ConfigurationError("rules must be a mapping of field to rule string")

        parsed: Dict[str, List[RuleInvocation]] = {}
        for field_name, spec in rules.items():
            if not isinstance(field_name, str):
                raise ConfigurationError(f"field name must be a string, got {field_name!r}")
            if not _is_rule_spec(spec):
                raise ConfigurationError(
                    f"rules for {field_name!r} must be a string or a list of strings"
                )
            parsed[field_name] = parse_rules(spec)

        self._rules = parsed
        return self

    def set_messages(self, messages: Mapping[str, Any]) -> "Validator":
        """
        Replace the custom message table.

        Args:
            messages: "field.rule" -> message, or field -> {rule: message}
        """
        if not isinstance(messages, Mapping):
            raise ConfigurationError("messages must be a mapping")

        for key, value in messages.items():
            texts = value.values() if isinstance(value, Mapping) else [value]
            if not isinstance(key, str) or not all(isinstance(t, str) for t in texts):
                raise ConfigurationError(f"message for {key!r} must be a string")

        self._messages = MessageBag(messages)
        return self

    def add_custom_rule(self, name: str, predicate: Predicate) -> "Validator":
        """
        Register a custom rule.

        A custom rule takes precedence over a built-in rule of
        the same name.

        Args:
            name: Rule name used in rule strings; may not contain
                "|", ":" or "." so that "field.rule" message keys
                stay unambiguous
            predicate: Called as predicate(value, param); falsy fails
        """
        if (
            not isinstance(name, str)
            or not name
            or name != name.strip()
            or RULE_SEPARATOR in name
            or PARAM_SEPARATOR in name
            or PATH_SEPARATOR in name
        ):
            raise ConfigurationError(f"invalid custom rule name: {name!r}")
        if not callable(predicate):
            raise ConfigurationError(f"predicate for rule {name!r} is not callable")

        self._custom_rules[name] = CustomRule(name, predicate)
        return self

    def set_defaults(self, defaults: Mapping[str, Any]) -> "Validator":
        """
        Fill absent top-level keys of the data with defaults.

        Applied immediately to the live data. Keys are not treated
        as paths: "a.b" is inserted as a top-level key.
        """
        if not isinstance(defaults, Mapping):
            raise ConfigurationError("defaults must be a mapping")

        self._defaults = dict(defaults)

        missing = [key for key in defaults if key not in self._data]
        if missing and not isinstance(self._data, MutableMapping):
            raise ConfigurationError("defaults cannot be applied to read-only data")

        for key in missing:
            self._data[key] = defaults[key]

        if missing:
            logger.debug("Defaults applied", fields=",".join(map(str, missing)))
        return self

    def validate(self) -> bool:
        """
        Run every rule against the data.

        Errors from a previous run are discarded first.

        Returns:
            True if no rule failed
        """
        rules = dict(self._rules)
        messages = self._messages
        custom_rules = dict(self._custom_rules)

        errors: Dict[str, List[str]] = {}

        for field_name, invocations in rules.items():
            value = resolve_path(field_name, self._data)

            for invocation in invocations:
                message = self._apply(
                    field_name, invocation, value, messages, custom_rules
                )
                if message is not None:
                    errors.setdefault(field_name, []).append(message)

        self._errors = errors

        logger.debug(
            "Validation finished",
            fields=len(rules),
            failed_fields=len(errors),
            errors=sum(len(m) for m in errors.values()),
        )
        return not errors

    def _apply(
        self,
        field_name: str,
        invocation: RuleInvocation,
        value: Any,
        messages: MessageBag,
        custom_rules: Dict[str, CustomRule],
    ) -> Optional[str]:
        """Apply one rule; return the error message, or None if it passed."""
        name, param = invocation.name, invocation.param

        custom = custom_rules.get(name)
        if custom is not None:
            try:
                passed = custom.validate(value, param, self._data)
            except Exception as exc:
                logger.warning(
                    "Custom rule raised", exception=exc, field=field_name, rule=name
                )
                passed = False
            if passed:
                return None
            return messages.resolve(field_name, name, custom.get_message(field_name, param))

        rule = get_builtin(name)
        if rule is None:
            logger.warning("Unknown rule", field=field_name, rule=name)
            return messages.resolve(field_name, name, f"Invalid rule: {name}.")

        if rule.validate(value, param, self._data):
            return None
        return messages.resolve(field_name, name, rule.get_message(field_name, param, value))

    def fails(self) -> bool:
        """Run validation and report failure."""
        return not self.validate()

    def errors(self) -> Dict[str, List[str]]:
        """Errors of the last run, field path -> messages."""
        return {name: list(messages) for name, messages in self._errors.items()}

    def first_error(self, field_name: Optional[str] = None) -> Optional[str]:
        return _first_error(self._errors, field_name)

    def sanitized(self, sanitizer: Optional[Sanitizer] = None) -> Dict[str, Any]:
        """
        Get a sanitized copy of the data.

        Top-level strings are trimmed and HTML-escaped; the stored
        data is left untouched. Pass a sanitizer to change that,
        e.g. Sanitizer.from_config().
        """
        return (sanitizer or Sanitizer()).mapping(self._data)

    def result(self) -> ValidationResult:
        """Validate and bundle the outcome with the sanitized data."""
        valid = self.validate()
        return ValidationResult(
            valid=valid,
            data=self.sanitized(),
            errors=self.errors(),
        )


def _is_rule_spec(spec: Any) -> bool:
    if isinstance(spec, str):
        return True
    return isinstance(spec, Sequence) and all(isinstance(token, str) for token in spec)


# Convenience functions

def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, RuleSpec],
    messages: Optional[Mapping[str, Any]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    custom_rules: Optional[Mapping[str, Predicate]] = None,
) -> ValidationResult:
    """
    Validate data with rules.

    Convenience function that builds a Validator and runs it.
    Defaults are applied to `data` in place.

    Example:
        result = validate(
            {"email": "test@example.com"},
            {"email": "required|email"},
        )
    """
    validator = Validator(data, rules=rules, messages=messages, defaults=defaults)
    for name, predicate in (custom_rules or {}).items():
        validator.add_custom_rule(name, predicate)
    return validator.result()


def validate_or_fail(
    data: Mapping[str, Any],
    rules: Mapping[str, RuleSpec],
    messages: Optional[Mapping[str, Any]] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    custom_rules: Optional[Mapping[str, Predicate]] = None,
) -> Dict[str, Any]:
    """
    Validate data and raise on failure.

    Returns the sanitized data if successful.
    Raises ValidationError if validation fails.

    Example:
        try:
            data = validate_or_fail(form, {"email": "required|email"})
        except ValidationError as e:
            return {"errors": e.errors}
    """
    result = validate(data, rules, messages, defaults, custom_rules)
    result.raise_if_invalid()
    return result.data
