"""
A small declarative rule engine for request DTOs.

A ``RuleSet`` is an ordered list of rules. Every rule is evaluated, so a
single response reports all failures at once.
"""
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic.alias_generators import to_camel

from inventory.core.exceptions import ValidationFailedError


@dataclass(frozen=True)
class ValidationFailure:
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class Rule:
    field: str
    check: Callable[[Any], bool]
    message: str
    when: Callable[[Any], bool] | None = None

    def applies_to(self, obj: Any) -> bool:
        return self.when is None or self.when(obj)


def _get(obj: Any, attr: str) -> Any:
    return getattr(obj, attr, None)


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _label(attr: str) -> str:
    return attr.replace("_", " ").capitalize()


def required(attr: str, message: str | None = None) -> Rule:
    def check(obj):
        value = _get(obj, attr)
        if isinstance(value, str):
            return bool(value.strip())
        return value is not None

    return Rule(attr, check, message or f"{_label(attr)} is required")


def max_length(attr: str, limit: int, message: str | None = None) -> Rule:
    return Rule(
        attr,
        lambda obj: len(_get(obj, attr)) <= limit,
        message or f"{_label(attr)} cannot exceed {limit} characters",
        when=lambda obj: _has_text(_get(obj, attr)),
    )


def in_range(attr: str, low: int, high: int, message: str | None = None) -> Rule:
    return Rule(
        attr,
        lambda obj: low <= _get(obj, attr) <= high,
        message or f"{_label(attr)} must be between {low} and {high}",
        when=lambda obj: _get(obj, attr) is not None,
    )


def non_negative(attr: str, message: str | None = None) -> Rule:
    return Rule(
        attr,
        lambda obj: Decimal(_get(obj, attr)) >= 0,
        message or f"{_label(attr)} cannot be negative",
        when=lambda obj: _get(obj, attr) is not None,
    )


def _both_dates(later: str, earlier: str) -> Callable[[Any], bool]:
    def when(obj):
        return isinstance(_get(obj, later), date) and isinstance(_get(obj, earlier), date)

    return when


def date_after(later: str, earlier: str, message: str) -> Rule:
    return Rule(later, lambda obj: _get(obj, later) > _get(obj, earlier), message, when=_both_dates(later, earlier))


def date_on_or_after(later: str, earlier: str, message: str) -> Rule:
    return Rule(later, lambda obj: _get(obj, later) >= _get(obj, earlier), message, when=_both_dates(later, earlier))


class RuleSet:
    def __init__(self, *rules: Rule):
        self.rules = list(rules)

    def __add__(self, other: "RuleSet") -> "RuleSet":
        return RuleSet(*self.rules, *other.rules)

    def validate(self, obj: Any) -> list[ValidationFailure]:
        failures = []
        for rule in self.rules:
            if not rule.applies_to(obj):
                continue
            if not rule.check(obj):
                failures.append(ValidationFailure(to_camel(rule.field), rule.message))
        return failures

    def ensure_valid(self, obj: Any) -> None:
        failures = self.validate(obj)
        if failures:
            raise ValidationFailedError(failures)
