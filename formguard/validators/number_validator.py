"""Number Validator: numeric rules; unparseable input fails every rule except required."""

from typing import Optional

from formguard.validators.base import BaseRuleBuilder, parse_number
from formguard.validators.models import RuleName, ValueKind


class NumberValidator(BaseRuleBuilder):
    """Rules for numeric inputs. Values may be numbers or numeric text."""

    @property
    def kind(self) -> ValueKind:
        return ValueKind.NUMBER

    def required(self, message: Optional[str] = None, enforce: Optional[bool] = None) -> "NumberValidator":
        """Fails only for a required field whose raw value is the empty string."""
        def check(value) -> bool:
            if not self._is_required(enforce):
                return True
            return not (parse_number(value) is None and value == "")

        return self._append(RuleName.REQUIRED.value, check, message)

    def min(self, bound: Optional[float] = None, message: Optional[str] = None) -> "NumberValidator":
        """Value >= bound (default: the min attribute)."""
        def check(value) -> bool:
            number = parse_number(value)
            if number is None:
                return False
            limit = self._threshold(bound, self._constraints.number("min"))
            return limit is None or number >= limit

        return self._append(RuleName.MIN.value, check, message)

    def max(self, bound: Optional[float] = None, message: Optional[str] = None) -> "NumberValidator":
        """Value <= bound (default: the max attribute)."""
        def check(value) -> bool:
            number = parse_number(value)
            if number is None:
                return False
            limit = self._threshold(bound, self._constraints.number("max"))
            return limit is None or number <= limit

        return self._append(RuleName.MAX.value, check, message)

    def positive(self, message: Optional[str] = None) -> "NumberValidator":
        def check(value) -> bool:
            number = parse_number(value)
            return number is not None and number > 0

        return self._append(RuleName.POSITIVE.value, check, message)

    def negative(self, message: Optional[str] = None) -> "NumberValidator":
        def check(value) -> bool:
            number = parse_number(value)
            return number is not None and number < 0

        return self._append(RuleName.NEGATIVE.value, check, message)

    def integer(self, message: Optional[str] = None) -> "NumberValidator":
        def check(value) -> bool:
            number = parse_number(value)
            return number is not None and number.is_integer()

        return self._append(RuleName.INTEGER.value, check, message)
