"""Rule Engine: registers rule chains per field, stores values, evaluates exhaustively.

This layer has no knowledge of the page. Every rule of a field runs on every
evaluation, so a caller can show all violated constraints at once.

Usage:
    engine = RuleEngine()
    engine.register_field("name", required(), min_length(2))
    engine.set_value("name", "A")
    outcomes = engine.evaluate_field("name")
"""

import time
from typing import Any, Callable, Optional, Union

import structlog

from formguard.validators.models import FieldConfig, FieldRule, FieldValue, RuleOutcome, ValueKind

logger = structlog.get_logger()

RuleLike = Union[FieldRule, Callable[[Any], Union[RuleOutcome, bool]]]


def as_rule(rule: RuleLike) -> FieldRule:
    """Wrap a bare predicate into a FieldRule named after the callable."""
    if isinstance(rule, FieldRule):
        return rule
    if not callable(rule):
        raise ValueError(f"Rule must be a FieldRule or a callable, got {type(rule).__name__}")

    name = getattr(rule, "__name__", "") or "anonymous"
    if name == "<lambda>":
        name = "anonymous"
    return FieldRule(name=name, predicate=rule)


class RuleEngine:
    """Holds field configs and values; evaluates every rule of every field.

    Design principles:
        - Deterministic: same rules + same values → same outcomes
        - Last registration of a name replaces its rule chain, never merges
        - An unregistered field is reported as a failure, not ignored
    """

    def __init__(self):
        self._configs: dict[str, FieldConfig] = {}
        self._values: dict[str, FieldValue] = {}

    # ── Registration ──

    def register_field(self, name: str, *rules: RuleLike, kind: Optional[ValueKind] = None) -> FieldConfig:
        """Register (or replace) the rule chain for a field.

        Args:
            name: Field name
            rules: FieldRule objects or bare predicates, in evaluation order
            kind: Optional value kind, recorded for introspection

        Returns:
            The new FieldConfig; appending to its rules extends the chain.
        """
        if not name:
            raise ValueError("Field name must be a non-empty string")

        config = FieldConfig(field_name=name, value_kind=kind, rules=[as_rule(r) for r in rules])
        replaced = name in self._configs
        self._configs[name] = config

        logger.debug(
            "field_registered",
            field=name,
            kind=kind.value if kind else None,
            rules=config.rule_names(),
            replaced=replaced,
        )
        return config

    def get_config(self, name: str) -> Optional[FieldConfig]:
        return self._configs.get(name)

    @property
    def field_names(self) -> list[str]:
        return list(self._configs.keys())

    # ── Values ──

    def set_value(self, name: str, value: FieldValue) -> "RuleEngine":
        """Store the current value of a field, overwriting any previous one."""
        self._values[name] = value
        return self

    def get_value(self, name: str) -> FieldValue:
        """Current value, or "" for a field that has none."""
        return self._values.get(name, "")

    def has_value(self, name: str) -> bool:
        return name in self._values

    # ── Evaluation ──

    def evaluate_field(self, name: str) -> list[RuleOutcome]:
        """Run every rule of a field against its current value.

        Returns:
            One outcome per rule in registration order, or a single failing
            outcome if the field was never registered.
        """
        config = self._configs.get(name)
        if config is None:
            return [RuleOutcome.fail(f'Field "{name}" is not registered')]
        return config.evaluate_all(self.get_value(name))

    def evaluate_form(self) -> dict[str, list[RuleOutcome]]:
        """Evaluate every registered field."""
        start_time = time.perf_counter()
        results = {name: self.evaluate_field(name) for name in self._configs}

        failed = [name for name, outcomes in results.items() if not all(o.valid for o in outcomes)]
        logger.info(
            "form_evaluation_complete",
            fields=len(results),
            failed_fields=failed,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return results

    def is_form_valid(self) -> bool:
        """True if every outcome of every registered field is valid."""
        return all(
            outcome.valid
            for outcomes in self.evaluate_form().values()
            for outcome in outcomes
        )

    # ── Introspection ──

    def export_rule_names(self) -> dict[str, list[str]]:
        """Rule identifiers per field, in registration order (diagnostics only)."""
        return {name: config.rule_names() for name, config in self._configs.items()}
