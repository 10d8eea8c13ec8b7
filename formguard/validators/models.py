"""Validation models: value kinds, rules, outcomes, and result structures.

Evaluation is deterministic: same rules + same value → same outcomes.
"""

from enum import Enum
from typing import Any, Callable, Optional, Union

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger()

# A field value is text, a number, or the ordered selection of a multi-select group.
FieldValue = Union[str, int, float, list[str]]


class ValueKind(str, Enum):
    """Value kind a field is registered with."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"


class RuleName(str, Enum):
    """Identifiers of the rules the typed builders append.

    Message overrides and the default message table are keyed by these values.
    """

    REQUIRED = "required"
    MIN = "min"
    MAX = "max"
    EMAIL = "email"
    PATTERN = "pattern"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    INTEGER = "integer"


class RuleOutcome(BaseModel):
    """Result of one rule applied to one value."""

    valid: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> "RuleOutcome":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: Optional[str] = None) -> "RuleOutcome":
        return cls(valid=False, message=message)


class FieldRule(BaseModel):
    """A named predicate in a field's rule chain."""

    name: str
    predicate: Callable[[Any], Union[RuleOutcome, bool]]
    message: Optional[str] = None

    model_config = {"frozen": True}

    def run(self, value: Any) -> RuleOutcome:
        """Apply the predicate; a crashing predicate yields a failing outcome."""
        try:
            result = self.predicate(value)
        except Exception as e:
            logger.error("rule_crashed", rule=self.name, error=str(e), error_type=type(e).__name__)
            return RuleOutcome.fail(self.message)

        if isinstance(result, RuleOutcome):
            if not result.valid and result.message is None and self.message is not None:
                return RuleOutcome.fail(self.message)
            return result
        if result:
            return RuleOutcome.ok()
        return RuleOutcome.fail(self.message)


class FieldConfig(BaseModel):
    """Rule chain registered for a single field.

    The two evaluation policies are kept apart on purpose:
        - evaluate_all(): every rule runs, one outcome per rule
        - evaluate_first_failure(): stops at the first failing rule
    """

    field_name: str
    value_kind: Optional[ValueKind] = None
    rules: list[FieldRule] = Field(default_factory=list)

    def append(self, rule: FieldRule) -> None:
        self.rules.append(rule)

    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def evaluate_all(self, value: Any) -> list[RuleOutcome]:
        """Run every rule in registration order."""
        return [rule.run(value) for rule in self.rules]

    def evaluate_first_failure(self, value: Any) -> Optional[tuple[FieldRule, RuleOutcome]]:
        """Run rules in order and return the first failing (rule, outcome) pair.

        Rules after the failing one are not evaluated. Returns None if all pass.
        """
        for rule in self.rules:
            outcome = rule.run(value)
            if not outcome.valid:
                return rule, outcome
        return None


class FieldResult(BaseModel):
    """Single-message result for one field."""

    is_valid: bool
    message: Optional[str] = None


class FormResult(BaseModel):
    """Aggregate result of validating several fields."""

    is_valid: bool
    errors: dict[str, Optional[str]] = Field(default_factory=dict)

    @property
    def failed_fields(self) -> list[str]:
        return [name for name, message in self.errors.items() if message is not None]
