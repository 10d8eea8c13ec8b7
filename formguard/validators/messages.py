"""Message resolution table: built-in default messages keyed by rule identifier."""

from typing import Optional

from formguard.validators.models import RuleName

DEFAULT_MESSAGES: dict[str, str] = {
    RuleName.REQUIRED.value: "this field is required",
    RuleName.MIN.value: "value too short",
    RuleName.MAX.value: "value too long",
    RuleName.EMAIL.value: "invalid email address",
    RuleName.PATTERN.value: "value does not match the expected format",
    RuleName.POSITIVE.value: "value must be positive",
    RuleName.NEGATIVE.value: "value must be negative",
    RuleName.INTEGER.value: "value must be an integer",
}

GENERIC_MESSAGE = "validation failed"

# Attribute prefix for per-field overrides, e.g. data-error-required="Name please"
OVERRIDE_ATTRIBUTE_PREFIX = "data-error-"


def override_attribute(rule_name: str) -> str:
    return f"{OVERRIDE_ATTRIBUTE_PREFIX}{rule_name}"


def resolve_message(
    rule_name: str,
    override: Optional[str] = None,
    literal: Optional[str] = None,
    outcome_message: Optional[str] = None,
    generic: Optional[str] = None,
) -> str:
    """Pick the message for a failing rule.

    Priority, highest first:
        1. per-field override declared on the element
        2. message literal given at registration
        3. default message for the rule identifier
        4. message carried by the rule's own outcome
        5. generic fallback
    """
    if override:
        return override
    if literal:
        return literal
    if rule_name in DEFAULT_MESSAGES:
        return DEFAULT_MESSAGES[rule_name]
    if outcome_message:
        return outcome_message
    return generic or GENERIC_MESSAGE
