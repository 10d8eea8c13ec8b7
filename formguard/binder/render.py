"""Write-back of validation state into the document.

Repeating a call with the same message leaves the document unchanged.
"""

from typing import Optional

from bs4 import Tag

from formguard.binder.discovery import FieldMetadata


def _classes(element: Tag) -> list[str]:
    value = element.get("class", [])
    if isinstance(value, str):
        return value.split()
    return list(value)


def add_class(element: Tag, name: str) -> None:
    classes = _classes(element)
    if name not in classes:
        element["class"] = classes + [name]


def remove_class(element: Tag, name: str) -> None:
    classes = [c for c in _classes(element) if c != name]
    if classes:
        element["class"] = classes
    elif element.has_attr("class"):
        del element["class"]


def show_error(metadata: FieldMetadata, message: Optional[str], invalid_class: str) -> None:
    """Render `message` for the field, or clear the field's error state when None."""
    element = metadata.element
    region = metadata.error_region

    if message:
        if region is not None:
            region.string = message
            if region.has_attr("hidden"):
                del region["hidden"]
        element["aria-invalid"] = "true"
        add_class(element, invalid_class)
    else:
        if region is not None:
            region.clear()
        if element.has_attr("aria-invalid"):
            del element["aria-invalid"]
        remove_class(element, invalid_class)
