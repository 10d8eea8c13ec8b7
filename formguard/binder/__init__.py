"""Field Binder: rule chains bound to a form's elements, labels, and error regions."""

from formguard.binder.discovery import FieldMetadata, discover, discover_fields, find_error_region, find_label
from formguard.binder.form import FormBinder, InputBuilder, form

__all__ = [
    "FormBinder",
    "InputBuilder",
    "FieldMetadata",
    "form",
    "discover",
    "discover_fields",
    "find_label",
    "find_error_region",
]
