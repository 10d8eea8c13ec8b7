"""formguard: declarative validation for HTML forms.

Usage:
    import formguard

    validator = formguard.form(html)
    validator.input("name").string().required().min()
    result = validator.validate_form()
"""

from formguard.binder import FieldMetadata, FormBinder, InputBuilder, discover, form
from formguard.config import Settings, get_settings
from formguard.log_config import configure_logging
from formguard.validators import (
    FieldResult,
    FieldRule,
    FormResult,
    RuleEngine,
    RuleOutcome,
    ValueKind,
    predicates,
)

__version__ = "0.1.0"

__all__ = [
    "form",
    "FormBinder",
    "InputBuilder",
    "FieldMetadata",
    "discover",
    "RuleEngine",
    "predicates",
    "FieldRule",
    "RuleOutcome",
    "FieldResult",
    "FormResult",
    "ValueKind",
    "Settings",
    "get_settings",
    "configure_logging",
]
