"""Structural discovery: locate each field's element, label, and error region.

Runs once per binder. Every lookup is first-match-wins:

Label:
    1. <label for="..."> anywhere in the document matching the field's id
    2. the nearest enclosing <label>
    3. none

Error region (an element with role="alert" or an aria-live attribute):
    1. the first following sibling carrying the marker
    2. the first marked element inside the field's parent
    3. the first marked element inside each further ancestor, up to the form
    4. a new marked element inserted right after the field
"""

from typing import Optional

import structlog
from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel

from formguard.config import Settings, get_settings

logger = structlog.get_logger()

FIELD_TAGS = ["input", "textarea", "select"]

# Inputs that submit or reset the form rather than carry a value
NON_FIELD_TYPES = {"submit", "button", "reset", "image"}


class FieldMetadata(BaseModel):
    """Discovery result for one field."""

    field_name: str
    element: Tag
    label: Optional[Tag] = None
    error_region: Optional[Tag] = None
    region_synthesized: bool = False

    model_config = {"arbitrary_types_allowed": True}

    @property
    def label_text(self) -> Optional[str]:
        if self.label is None:
            return None
        return self.label.get_text(" ", strip=True)


def is_error_marker(tag: Tag) -> bool:
    """True for elements announced by assistive technology (alert role or live region)."""
    return isinstance(tag, Tag) and (tag.get("role") == "alert" or tag.has_attr("aria-live"))


def field_name_of(element: Tag) -> Optional[str]:
    """A field is keyed by its name attribute, falling back to its id."""
    return element.get("name") or element.get("id") or None


def document_root(tag: Tag) -> Tag:
    root = tag
    for parent in tag.parents:
        root = parent
    return root


def find_label(field: Tag) -> Optional[Tag]:
    field_id = field.get("id")
    if field_id:
        label = document_root(field).find("label", attrs={"for": field_id})
        if label is not None:
            return label

    return field.find_parent("label")


def find_error_region(form: Tag, field: Tag) -> Optional[Tag]:
    # 1. Following siblings, skipping text nodes
    for sibling in field.next_siblings:
        if isinstance(sibling, Tag) and is_error_marker(sibling):
            return sibling

    # 2. Anywhere inside the parent
    parent = field.parent
    if parent is not None:
        region = parent.find(is_error_marker)
        if region is not None:
            return region

    # 3. Outward through the ancestors, stopping at the form
    for ancestor in field.parents:
        if ancestor is form:
            break
        if ancestor is parent:
            continue
        region = ancestor.find(is_error_marker)
        if region is not None:
            return region

    return None


def synthesize_error_region(field: Tag, settings: Optional[Settings] = None) -> Tag:
    """Create a live-region element and insert it right after the field."""
    settings = settings or get_settings()
    attrs = {"role": "alert", "aria-live": settings.ERROR_LIVE_MODE}

    root = document_root(field)
    if isinstance(root, BeautifulSoup):
        region = root.new_tag(settings.ERROR_REGION_TAG, attrs=attrs)
    else:
        region = Tag(name=settings.ERROR_REGION_TAG, attrs=attrs)

    field.insert_after(region)
    return region


def discover(form: Tag, field: Tag, settings: Optional[Settings] = None) -> FieldMetadata:
    """Build the metadata for one field, synthesizing its error region if needed."""
    name = field_name_of(field)
    if not name:
        raise ValueError("Field has neither a name nor an id")

    metadata = FieldMetadata(
        field_name=name,
        element=field,
        label=find_label(field),
        error_region=find_error_region(form, field),
    )

    if metadata.error_region is None:
        metadata.error_region = synthesize_error_region(field, settings)
        metadata.region_synthesized = True
        logger.debug("error_region_synthesized", field=name)

    return metadata


def is_field(element: Tag) -> bool:
    if element.name == "input" and (element.get("type") or "").lower() in NON_FIELD_TYPES:
        return False
    return field_name_of(element) is not None


def discover_fields(form: Tag, settings: Optional[Settings] = None) -> dict[str, FieldMetadata]:
    """Discover every named field in the form.

    Elements sharing a name (checkbox groups, radios) are keyed once, by the first
    element of the group in document order.
    """
    fields: dict[str, FieldMetadata] = {}

    for element in form.find_all(FIELD_TAGS):
        if not is_field(element):
            continue
        name = field_name_of(element)
        if name in fields:
            continue
        fields[name] = discover(form, element, settings)

    logger.info(
        "field_discovery_complete",
        fields=len(fields),
        labelled=sum(1 for m in fields.values() if m.label is not None),
        synthesized_regions=sum(1 for m in fields.values() if m.region_synthesized),
    )
    return fields
