"""Base rule builder: abstract class shared by the typed (string/number/array) builders.

Each builder owns the rule list of exactly one FieldConfig. Rule methods append to
that list and return the builder so calls can be chained.
"""

from abc import ABC, abstractmethod
import math
import re
from typing import Any, Callable, Optional

from formguard.validators.models import FieldConfig, FieldRule, RuleOutcome, ValueKind


class DeclaredConstraints:
    """Read-only view of the constraints declared on a field's element.

    Attribute lookups go to the live element on every call. A field whose element
    was never discovered declares nothing.
    """

    def __init__(self, element_getter: Callable[[], Any]):
        self._element_getter = element_getter

    @property
    def element(self):
        return self._element_getter()

    def has(self, attribute: str) -> bool:
        element = self.element
        return element is not None and element.has_attr(attribute)

    def get(self, attribute: str) -> Optional[str]:
        element = self.element
        if element is None:
            return None
        value = element.get(attribute)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def integer(self, attribute: str) -> Optional[int]:
        return parse_int(self.get(attribute))

    def number(self, attribute: str) -> Optional[float]:
        return parse_number(self.get(attribute))

    @property
    def input_type(self) -> str:
        return (self.get("type") or "").lower()


class BaseRuleBuilder(ABC):
    """Abstract base for the kind-specific fluent builders.

    Contract:
        - every rule method appends exactly one FieldRule and returns self
        - predicates never raise; a value of the wrong kind is a failing outcome
        - without an explicit threshold, a rule reads the declared constraint;
          a missing constraint makes the rule always pass
    """

    def __init__(self, config: FieldConfig, constraints: DeclaredConstraints):
        self._config = config
        self._constraints = constraints

    @property
    @abstractmethod
    def kind(self) -> ValueKind:
        ...

    @property
    def field_name(self) -> str:
        return self._config.field_name

    @property
    def rules(self) -> list[FieldRule]:
        return self._config.rules

    # ── Helper Methods ──

    def _append(self, name: str, predicate: Callable[[Any], bool], message: Optional[str]):
        """Append a rule to the owned config and return self for chaining."""
        def run(value: Any) -> RuleOutcome:
            return RuleOutcome(valid=bool(predicate(value)))

        run.__name__ = name
        self._config.append(FieldRule(name=name, predicate=run, message=message))
        return self

    def _threshold(self, explicit: Optional[float], declared: Optional[float]) -> Optional[float]:
        """Explicit threshold wins over the declared one."""
        return explicit if explicit is not None else declared

    def _is_required(self, enforce: Optional[bool]) -> bool:
        return enforce if enforce is not None else self._constraints.has("required")


def parse_number(value: Any) -> Optional[float]:
    """Parse numeric input: 42, 4.2, '42', ' 4.2 ', '1e3'.

    Returns None for blanks, booleans, lists, NaN and anything non-numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


def parse_int(value: Any) -> Optional[int]:
    """Parse a leading integer from an attribute value: '5', ' 5 ', '5px'."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None

    match = re.match(r"\s*([+-]?\d+)", value)
    if not match:
        return None
    return int(match.group(1))


def is_blank(value: str) -> bool:
    return len(value.strip()) == 0
