"""
rulecheck Rule Parser
=====================

Turns rule specifications such as "required|string|min:3"
into an ordered list of rule invocations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

RULE_SEPARATOR = "|"
PARAM_SEPARATOR = ":"

RuleSpec = Union[str, Sequence[str]]


@dataclass(frozen=True)
class RuleInvocation:
    """One rule to run against a field, with its optional parameter."""

    name: str
    param: Optional[str] = None

    @classmethod
    def from_token(cls, token: str) -> "RuleInvocation":
        """
        Parse a single token.

        Only the first ":" separates name and parameter, so
        parameters may contain colons themselves.
        """
        if PARAM_SEPARATOR in token:
            name, param = token.split(PARAM_SEPARATOR, 1)
            return cls(name=name, param=param)
        return cls(name=token)

    def __str__(self) -> str:
        if self.param is None:
            return self.name
        return f"{self.name}{PARAM_SEPARATOR}{self.param}"


def parse_rules(spec: RuleSpec) -> List[RuleInvocation]:
    """
    Parse a rule specification.

    Accepts a pipe-separated string or a sequence of tokens.
    Tokens are stripped and kept in order. A blank token inside
    the spec keeps its place with an empty name, so it is
    reported as an invalid rule. A blank spec means no rules.

    Example:
        >>> parse_rules("required|in:a,b")
        [RuleInvocation(name='required', param=None), RuleInvocation(name='in', param='a,b')]
        >>> parse_rules("required|")
        [RuleInvocation(name='required', param=None), RuleInvocation(name='', param=None)]
    """
    if isinstance(spec, str):
        if not spec.strip():
            return []
        tokens = spec.split(RULE_SEPARATOR)
    else:
        tokens = list(spec)

    return [RuleInvocation.from_token(token.strip()) for token in tokens]
