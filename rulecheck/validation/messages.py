"""
rulecheck Message Overrides
===========================

Custom error messages keyed by field and rule.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from rulecheck.utils.helpers import PATH_SEPARATOR


class MessageBag:
    """
    Two-level lookup of custom messages: field -> rule -> message.

    Flat keys like "emails.email_confirm.equal" are split on their
    last dot, since field paths may contain dots but rule names
    never do. Nested mappings are accepted as well.

    Example:
        bag = MessageBag({
            "age.min": "You must be an adult.",
            "name": {"required": "Tell us your name."},
        })

        bag.get("age", "min")       # "You must be an adult."
        bag.get("age", "max")       # None
    """

    def __init__(self, messages: Optional[Mapping[str, Any]] = None) -> None:
        self._messages: Dict[str, Dict[str, str]] = {}

        for key, value in (messages or {}).items():
            if isinstance(value, Mapping):
                for rule, message in value.items():
                    self.add(key, rule, message)
            else:
                field, _, rule = key.rpartition(PATH_SEPARATOR)
                self.add(field, rule, value)

    def add(self, field: str, rule: str, message: str) -> None:
        """Register one message."""
        self._messages.setdefault(field, {})[rule] = message

    def get(self, field: str, rule: str) -> Optional[str]:
        """Get the custom message for a field and rule, if any."""
        return self._messages.get(field, {}).get(rule)

    def resolve(self, field: str, rule: str, default: str) -> str:
        """Get the custom message or fall back to the default."""
        message = self.get(field, rule)
        return default if message is None else message

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._messages.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        field, _, rule = key.rpartition(PATH_SEPARATOR)
        return self.get(field, rule) is not None
