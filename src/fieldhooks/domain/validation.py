"""Validator collaborator — rule registration and evaluation.

Handlers register rules during ``before_validate``; the host evaluates
them against the submitted data afterwards. Failures are returned as
:class:`ValidationFailed` records, never raised.

Evaluation per path:

- An *empty* value (``None``, ``""``, empty list/dict) short-circuits
  the path's rules. If the path does not allow empty values the empty
  message is reported; otherwise the path passes.
- Otherwise every rule runs in registration order and each failure is
  reported, so the first failure for a path is the most significant.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

RulePredicate = Callable[[Any, Mapping[str, Any]], bool]

DEFAULT_EMPTY_MESSAGE = "This field cannot be left empty"
DEFAULT_RULE_MESSAGE = "The provided value is invalid"


@dataclass(frozen=True)
class ValidationRule:
    """A named predicate with the message reported when it fails."""

    name: str
    predicate: RulePredicate
    message: str = DEFAULT_RULE_MESSAGE

    def check(self, value: Any, context: Mapping[str, Any]) -> bool:
        return bool(self.predicate(value, context))


@dataclass(frozen=True)
class ValidationFailed:
    """One failed rule: where, which rule, and what to tell the user."""

    path: str
    rule: str
    message: str


@dataclass
class _PathRules:
    allow_empty: bool = True
    empty_message: str = DEFAULT_EMPTY_MESSAGE
    rules: list[ValidationRule] = field(default_factory=list)


def is_empty(value: Any) -> bool:
    """Whether *value* counts as empty for ``allow_empty`` purposes."""
    if value is None:
        return True
    if isinstance(value, str | list | dict | tuple):
        return len(value) == 0
    return False


class Validator:
    """Collects rules per field path and evaluates submitted data."""

    def __init__(self) -> None:
        self._paths: dict[str, _PathRules] = {}

    def _entry(self, path: str) -> _PathRules:
        return self._paths.setdefault(path, _PathRules())

    def allow_empty(self, path: str, allowed: bool = True, message: str | None = None) -> Validator:
        """Declare whether *path* may be submitted empty. Chainable."""
        entry = self._entry(path)
        entry.allow_empty = allowed
        if message:
            entry.empty_message = message
        return self

    def add(self, path: str, rule: ValidationRule) -> Validator:
        """Append *rule* to *path*. Chainable.

        A rule with the same name on the same path is replaced in place.
        """
        rules = self._entry(path).rules
        for i, existing in enumerate(rules):
            if existing.name == rule.name:
                rules[i] = rule
                break
        else:
            rules.append(rule)
        return self

    def rules_for(self, path: str) -> list[ValidationRule]:
        """Rules registered on *path*, in evaluation order."""
        entry = self._paths.get(path)
        return list(entry.rules) if entry else []

    def validate(self, data: Mapping[str, Any]) -> list[ValidationFailed]:
        """Evaluate every registered path against *data*.

        The whole *data* mapping is passed to each predicate as context.
        """
        failures: list[ValidationFailed] = []
        for path, entry in self._paths.items():
            value = data.get(path)
            if is_empty(value):
                if not entry.allow_empty:
                    failures.append(ValidationFailed(path, "_empty", entry.empty_message))
                continue
            for rule in entry.rules:
                if not rule.check(value, data):
                    failures.append(ValidationFailed(path, rule.name, rule.message))
        return failures
