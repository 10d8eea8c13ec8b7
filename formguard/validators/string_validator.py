"""String Validator: text rules read their limits from minlength/maxlength/required/type."""

import re
from typing import Optional, Union

from formguard.validators.base import BaseRuleBuilder, is_blank
from formguard.validators.models import RuleName, ValueKind

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class StringValidator(BaseRuleBuilder):
    """Rules for text inputs and textareas."""

    @property
    def kind(self) -> ValueKind:
        return ValueKind.STRING

    def required(self, message: Optional[str] = None, enforce: Optional[bool] = None) -> "StringValidator":
        """Non-blank text, when the element is declared required (or enforce=True)."""
        def check(value) -> bool:
            if not isinstance(value, str):
                return False
            if not self._is_required(enforce):
                return True
            return not is_blank(value)

        return self._append(RuleName.REQUIRED.value, check, message)

    def min(self, length: Optional[int] = None, message: Optional[str] = None) -> "StringValidator":
        """At least `length` characters (default: the minlength attribute).

        Blank values pass; emptiness is what required() is for.
        """
        def check(value) -> bool:
            if not isinstance(value, str):
                return False
            limit = self._threshold(length, self._constraints.integer("minlength"))
            if limit is None or is_blank(value):
                return True
            return len(value) >= limit

        return self._append(RuleName.MIN.value, check, message)

    def max(self, length: Optional[int] = None, message: Optional[str] = None) -> "StringValidator":
        """At most `length` characters (default: the maxlength attribute)."""
        def check(value) -> bool:
            if not isinstance(value, str):
                return False
            limit = self._threshold(length, self._constraints.integer("maxlength"))
            if limit is None:
                return True
            return len(value) <= limit

        return self._append(RuleName.MAX.value, check, message)

    def email(self, message: Optional[str] = None) -> "StringValidator":
        """Email shape check, enforced only on type="email" inputs."""
        def check(value) -> bool:
            if not isinstance(value, str):
                return False
            if self._constraints.input_type != "email":
                return True
            return EMAIL_PATTERN.fullmatch(value) is not None

        return self._append(RuleName.EMAIL.value, check, message)

    def pattern(self, regex: Union[str, re.Pattern], message: Optional[str] = None) -> "StringValidator":
        """Text containing a match for `regex` (anchor it to match the whole value)."""
        compiled = re.compile(regex) if isinstance(regex, str) else regex

        def check(value) -> bool:
            if not isinstance(value, str):
                return False
            return compiled.search(value) is not None

        return self._append(RuleName.PATTERN.value, check, message)
