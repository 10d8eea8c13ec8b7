"""Standalone rules for the RuleEngine.

These take their thresholds as arguments and know nothing about the page. Each
factory returns a FieldRule whose failing outcome carries a ready-to-show message.

Usage:
    engine = RuleEngine()
    engine.register_field("name", required(), min_length(2))
    engine.register_field("email", email())
"""

import re
from typing import Any, Callable, Optional, Union

from formguard.validators.base import parse_number
from formguard.validators.models import FieldRule, RuleOutcome
from formguard.validators.string_validator import EMAIL_PATTERN


def _rule(name: str, check: Callable[[Any], bool], default_message: str, message: Optional[str]) -> FieldRule:
    text = message or default_message

    def predicate(value: Any) -> RuleOutcome:
        if check(value):
            return RuleOutcome.ok()
        return RuleOutcome.fail(text)

    predicate.__name__ = name
    return FieldRule(name=name, predicate=predicate, message=message)


def required(message: Optional[str] = None) -> FieldRule:
    """Non-blank text, a number, or a non-empty selection."""
    def check(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        if isinstance(value, (list, tuple)):
            return len(value) > 0
        return True

    return _rule("required", check, "required field", message)


def is_string(message: Optional[str] = None) -> FieldRule:
    return _rule("is_string", lambda value: isinstance(value, str), "must be a string", message)


def is_number(message: Optional[str] = None) -> FieldRule:
    return _rule("is_number", lambda value: parse_number(value) is not None, "must be a number", message)


def min_length(length: int, message: Optional[str] = None) -> FieldRule:
    return _rule(
        "min_length",
        lambda value: isinstance(value, str) and len(value) >= length,
        f"minimum {length} characters",
        message,
    )


def max_length(length: int, message: Optional[str] = None) -> FieldRule:
    return _rule(
        "max_length",
        lambda value: isinstance(value, str) and len(value) <= length,
        f"maximum {length} characters",
        message,
    )


def email(message: Optional[str] = None) -> FieldRule:
    return _rule(
        "email",
        lambda value: isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None,
        "invalid email",
        message,
    )


def pattern(regex: Union[str, re.Pattern], message: Optional[str] = None) -> FieldRule:
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    return _rule(
        "pattern",
        lambda value: isinstance(value, str) and compiled.search(value) is not None,
        "does not match the expected format",
        message,
    )


def min_value(bound: float, message: Optional[str] = None) -> FieldRule:
    def check(value: Any) -> bool:
        number = parse_number(value)
        return number is not None and number >= bound

    return _rule("min_value", check, f"must be at least {bound:g}", message)


def max_value(bound: float, message: Optional[str] = None) -> FieldRule:
    def check(value: Any) -> bool:
        number = parse_number(value)
        return number is not None and number <= bound

    return _rule("max_value", check, f"must be at most {bound:g}", message)


def integer(message: Optional[str] = None) -> FieldRule:
    def check(value: Any) -> bool:
        number = parse_number(value)
        return number is not None and number.is_integer()

    return _rule("integer", check, "must be a whole number", message)


def min_items(count: int, message: Optional[str] = None) -> FieldRule:
    return _rule(
        "min_items",
        lambda value: isinstance(value, (list, tuple)) and len(value) >= count,
        f"select at least {count}",
        message,
    )


def max_items(count: int, message: Optional[str] = None) -> FieldRule:
    return _rule(
        "max_items",
        lambda value: isinstance(value, (list, tuple)) and len(value) <= count,
        f"select at most {count}",
        message,
    )
