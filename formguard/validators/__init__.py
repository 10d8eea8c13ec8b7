"""Rule engine and typed rule builders.

Usage:
    from formguard.validators import RuleEngine, predicates

    engine = RuleEngine()
    engine.register_field("name", predicates.required(), predicates.min_length(2))
    engine.set_value("name", "Artem")
    assert engine.is_form_valid()
"""

from formguard.validators import predicates
from formguard.validators.array_validator import ArrayValidator
from formguard.validators.base import BaseRuleBuilder, DeclaredConstraints
from formguard.validators.engine import RuleEngine
from formguard.validators.messages import DEFAULT_MESSAGES, resolve_message
from formguard.validators.models import (
    FieldConfig,
    FieldResult,
    FieldRule,
    FormResult,
    RuleName,
    RuleOutcome,
    ValueKind,
)
from formguard.validators.number_validator import NumberValidator
from formguard.validators.string_validator import StringValidator

__all__ = [
    "predicates",
    "RuleEngine",
    "BaseRuleBuilder",
    "DeclaredConstraints",
    "StringValidator",
    "NumberValidator",
    "ArrayValidator",
    "FieldConfig",
    "FieldRule",
    "FieldResult",
    "FormResult",
    "RuleName",
    "RuleOutcome",
    "ValueKind",
    "DEFAULT_MESSAGES",
    "resolve_message",
]
