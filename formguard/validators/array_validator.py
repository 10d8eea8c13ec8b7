"""Array Validator: rules over the selected values of a checkbox group or multi-select."""

from typing import Any, Optional

from formguard.validators.base import BaseRuleBuilder
from formguard.validators.models import RuleName, ValueKind

# Minimum selection count when neither an explicit nor a declared one exists
DEFAULT_MIN_SELECTED = 1


def _is_selection(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


class ArrayValidator(BaseRuleBuilder):
    """Rules for multi-select groups. Limits come from data-min/data-max/required."""

    @property
    def kind(self) -> ValueKind:
        return ValueKind.ARRAY

    def required(self, message: Optional[str] = None, enforce: Optional[bool] = None) -> "ArrayValidator":
        """At least one selection, when the group is declared required."""
        def check(value) -> bool:
            if not _is_selection(value):
                return False
            if not self._is_required(enforce):
                return True
            return len(value) > 0

        return self._append(RuleName.REQUIRED.value, check, message)

    def min(self, count: Optional[int] = None, message: Optional[str] = None) -> "ArrayValidator":
        """At least `count` selections (default: data-min, else 1)."""
        def check(value) -> bool:
            if not _is_selection(value):
                return False
            limit = self._threshold(count, self._constraints.integer("data-min"))
            if limit is None:
                limit = DEFAULT_MIN_SELECTED
            return len(value) >= limit

        return self._append(RuleName.MIN.value, check, message)

    def max(self, count: Optional[int] = None, message: Optional[str] = None) -> "ArrayValidator":
        """At most `count` selections (default: data-max)."""
        def check(value) -> bool:
            if not _is_selection(value):
                return False
            limit = self._threshold(count, self._constraints.integer("data-max"))
            return limit is None or len(value) <= limit

        return self._append(RuleName.MAX.value, check, message)
