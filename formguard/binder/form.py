"""Field Binder: the rule engine bound to a form in a parsed HTML document.

Usage:
    binder = form(html)
    binder.input("name").string().required().min(message="Too short!")
    binder.input("age").number().min().max()
    result = binder.validate_form()
    if not result.is_valid:
        # Messages are already rendered into each field's error region
        ...
"""

import time
from typing import Optional, Union

import structlog
from bs4 import BeautifulSoup, Tag

from formguard.binder.discovery import FieldMetadata, discover_fields
from formguard.binder.render import show_error
from formguard.binder.values import read_selection, read_value, write_selection, write_value
from formguard.config import Settings, get_settings
from formguard.validators.array_validator import ArrayValidator
from formguard.validators.base import DeclaredConstraints
from formguard.validators.engine import RuleEngine, RuleLike
from formguard.validators.messages import override_attribute, resolve_message
from formguard.validators.models import (
    FieldConfig,
    FieldResult,
    FieldRule,
    FieldValue,
    FormResult,
    RuleOutcome,
    ValueKind,
)
from formguard.validators.number_validator import NumberValidator
from formguard.validators.string_validator import StringValidator

logger = structlog.get_logger()


class InputBuilder:
    """First step of the builder chain: pick the value kind of a field.

    Each kind call registers a fresh, empty rule chain for the field.
    """

    def __init__(self, binder: "FormBinder", name: str):
        self._binder = binder
        self._name = name

    def _config(self, kind: ValueKind) -> FieldConfig:
        return self._binder.register_field(self._name, kind=kind)

    def string(self) -> StringValidator:
        return StringValidator(self._config(ValueKind.STRING), self._binder.constraints(self._name))

    def number(self) -> NumberValidator:
        return NumberValidator(self._config(ValueKind.NUMBER), self._binder.constraints(self._name))

    def array(self) -> ArrayValidator:
        return ArrayValidator(self._config(ValueKind.ARRAY), self._binder.constraints(self._name))


class FormBinder:
    """Validates the fields of one <form>, one message per field.

    Design principles:
        - Discovery runs once, in the constructor; values are re-read on every call
        - Rules run in registration order and stop at the first failure
        - Unregistered fields are inert: validating them reports success
    """

    def __init__(self, form_tag: Tag, settings: Optional[Settings] = None):
        self.form = form_tag
        self.settings = settings or get_settings()
        self.engine = RuleEngine()
        self._metadata: dict[str, FieldMetadata] = discover_fields(form_tag, self.settings)
        self._mirrored: dict[str, tuple[str, list[str]]] = {}

    # ── Registration ──

    def input(self, name: str) -> InputBuilder:
        """Start configuring a field: binder.input("age").number().min()."""
        return InputBuilder(self, name)

    def register_field(self, name: str, *rules: RuleLike, kind: Optional[ValueKind] = None) -> FieldConfig:
        return self.engine.register_field(name, *rules, kind=kind)

    def export_rule_names(self) -> dict[str, list[str]]:
        return self.engine.export_rule_names()

    # ── Structure ──

    def metadata(self, name: str) -> Optional[FieldMetadata]:
        return self._metadata.get(name)

    @property
    def discovered_fields(self) -> list[str]:
        return list(self._metadata.keys())

    def constraints(self, name: str) -> DeclaredConstraints:
        """Declared constraints of a field, looked up on its element at call time."""
        def element():
            metadata = self._metadata.get(name)
            return metadata.element if metadata else None

        return DeclaredConstraints(element)

    def label_text(self, name: str) -> Optional[str]:
        metadata = self._metadata.get(name)
        return metadata.label_text if metadata else None

    # ── Values ──

    def _live_value(self, name: str, metadata: FieldMetadata) -> FieldValue:
        config = self.engine.get_config(name)
        if config is not None and config.value_kind == ValueKind.ARRAY:
            return read_selection(self.form, name)
        return read_value(self.form, metadata.element)

    def _snapshot(self, name: str, metadata: FieldMetadata) -> tuple[str, list[str]]:
        return read_value(self.form, metadata.element), read_selection(self.form, name)

    def set_value(self, name: str, value: FieldValue) -> "FormBinder":
        """Store a value and mirror it into the field's element, if there is one."""
        self.engine.set_value(name, value)

        metadata = self._metadata.get(name)
        if metadata is not None:
            if isinstance(value, (list, tuple)):
                write_selection(self.form, name, list(value))
            else:
                write_value(self.form, metadata.element, value)
            self._mirrored[name] = self._snapshot(name, metadata)
        return self

    def read_value(self, name: str) -> FieldValue:
        """Current value of a field.

        The stored value is used until the document is edited after the last
        set_value; from then on the element's live value (or live selection,
        for arrays) is read. Fields without an element use the stored value
        ("" if none).
        """
        metadata = self._metadata.get(name)
        if metadata is None:
            return self.engine.get_value(name)

        if self.engine.has_value(name) and self._mirrored.get(name) == self._snapshot(name, metadata):
            return self.engine.get_value(name)
        return self._live_value(name, metadata)

    # ── Evaluation ──

    def evaluate_field(self, name: str) -> list[RuleOutcome]:
        """Exhaustive evaluation against the current value; nothing is written back."""
        config = self.engine.get_config(name)
        if config is None:
            return self.engine.evaluate_field(name)
        return config.evaluate_all(self.read_value(name))

    def _is_inert(self, name: str) -> bool:
        return name not in self._metadata and not self.engine.has_value(name)

    def _message_for(self, name: str, rule: FieldRule, outcome: RuleOutcome) -> str:
        metadata = self._metadata.get(name)
        override = metadata.element.get(override_attribute(rule.name)) if metadata else None
        return resolve_message(
            rule.name,
            override=override,
            literal=rule.message,
            outcome_message=outcome.message,
            generic=self.settings.GENERIC_ERROR_MESSAGE,
        )

    def _check(self, name: str, config: FieldConfig) -> Optional[str]:
        """Message of the first failing rule, or None when every rule passes."""
        failure = config.evaluate_first_failure(self.read_value(name))
        if failure is None:
            return None
        rule, outcome = failure
        return self._message_for(name, rule, outcome)

    def validate_field(self, name: str, render: bool = True) -> FieldResult:
        """Validate one field and (by default) render the result into its error region."""
        config = self.engine.get_config(name)
        if config is None or self._is_inert(name):
            return FieldResult(is_valid=True)

        message = self._check(name, config)

        metadata = self._metadata.get(name)
        if render and metadata is not None:
            show_error(metadata, message, self.settings.INVALID_CLASS)

        logger.debug("field_validated", field=name, valid=message is None, message=message)
        return FieldResult(is_valid=message is None, message=message)

    def validate_form(self, names: Optional[list[str]] = None, render: bool = True) -> FormResult:
        """Validate all registered fields, or only the registered ones among `names`."""
        start_time = time.perf_counter()

        if names is None:
            targets = self.engine.field_names
        else:
            targets = [name for name in names if self.engine.get_config(name) is not None]

        errors: dict[str, Optional[str]] = {}
        is_valid = True
        for name in targets:
            result = self.validate_field(name, render=render)
            errors[name] = result.message
            is_valid = is_valid and result.is_valid

        report = FormResult(is_valid=is_valid, errors=errors)
        logger.info(
            "form_validation_complete",
            passed=report.is_valid,
            fields=len(targets),
            failed_fields=report.failed_fields,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return report

    def is_form_valid(self) -> bool:
        """Aggregate verdict over all registered fields, without touching the document."""
        return self.validate_form(render=False).is_valid


def form(source: Union[str, Tag], settings: Optional[Settings] = None) -> FormBinder:
    """Create a binder from a <form> tag, a parsed document, or raw HTML.

    For documents and markup the first <form> is used.
    """
    if isinstance(source, str):
        source = BeautifulSoup(source, "html.parser")

    form_tag = source if source.name == "form" else source.find("form")
    if form_tag is None:
        raise ValueError("No <form> element found")
    return FormBinder(form_tag, settings)
