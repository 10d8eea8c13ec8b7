import pytest

from formguard.validators import RuleEngine, predicates as v
from formguard.validators.models import FieldRule, RuleOutcome, ValueKind


def _has_error(results, field, message):
    return any(not r.valid and r.message == message for r in results.get(field, []))


class TestRegistration:
    def test_export_round_trip(self):
        engine = RuleEngine()
        engine.register_field("name", v.required(), v.min_length(2), v.max_length(20))
        assert engine.export_rule_names() == {"name": ["required", "min_length", "max_length"]}

    def test_last_registration_replaces(self):
        engine = RuleEngine()
        engine.register_field("x", v.required())
        engine.register_field("x", v.email())
        assert engine.export_rule_names() == {"x": ["email"]}

    def test_bare_callables_named_after_function(self):
        def is_even(value):
            return int(value) % 2 == 0

        engine = RuleEngine()
        engine.register_field("n", is_even, lambda value: True)
        assert engine.export_rule_names() == {"n": ["is_even", "anonymous"]}

    def test_kind_is_recorded(self):
        engine = RuleEngine()
        config = engine.register_field("age", v.integer(), kind=ValueKind.NUMBER)
        assert config.value_kind == ValueKind.NUMBER

    def test_rejects_non_callable_rule(self):
        with pytest.raises(ValueError):
            RuleEngine().register_field("x", "required")

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError):
            RuleEngine().register_field("", v.required())


class TestEvaluation:
    def test_happy_path(self):
        engine = RuleEngine()
        engine.register_field("name", v.required(), v.min_length(2))
        engine.register_field("email", v.email())
        engine.register_field("password", v.required(), v.min_length(6))
        engine.set_value("name", "Artem").set_value("email", "a@b.c").set_value("password", "123456")

        results = engine.evaluate_form()
        assert engine.is_form_valid()
        assert not _has_error(results, "name", "minimum 2 characters")
        assert not _has_error(results, "password", "minimum 6 characters")

    def test_empty_required(self):
        engine = RuleEngine()
        engine.register_field("name", v.required())
        engine.set_value("name", "")
        assert _has_error(engine.evaluate_form(), "name", "required field")
        assert not engine.is_form_valid()

    def test_bad_email(self):
        engine = RuleEngine()
        engine.register_field("email", v.email())
        engine.set_value("email", "bad")
        assert _has_error(engine.evaluate_form(), "email", "invalid email")

    def test_min_length_branches(self):
        engine = RuleEngine()
        engine.register_field("test", v.min_length(3))
        engine.set_value("test", "ab")
        assert _has_error(engine.evaluate_form(), "test", "minimum 3 characters")
        engine.set_value("test", "abc")
        assert not _has_error(engine.evaluate_form(), "test", "minimum 3 characters")

    def test_type_mismatch_is_a_failure(self):
        engine = RuleEngine()
        engine.register_field("x", v.is_string())
        engine.set_value("x", 123)
        assert _has_error(engine.evaluate_form(), "x", "must be a string")

    def test_every_rule_runs(self):
        """No short-circuit: one outcome per rule, all failing here."""
        engine = RuleEngine()
        engine.register_field("password", v.required(), v.min_length(6), v.pattern(r"\d"))
        engine.set_value("password", "")

        outcomes = engine.evaluate_field("password")
        assert len(outcomes) == 3
        assert [o.valid for o in outcomes] == [False, False, False]
        assert outcomes[1].message == "minimum 6 characters"

    def test_missing_value_is_empty_string(self):
        engine = RuleEngine()
        engine.register_field("age", v.is_number(), v.min_items(1))
        outcomes = engine.evaluate_field("age")
        assert outcomes[0] == RuleOutcome(valid=False, message="must be a number")
        assert outcomes[1].valid is False

    def test_unregistered_field(self):
        outcomes = RuleEngine().evaluate_field("ghost")
        assert len(outcomes) == 1
        assert outcomes[0].valid is False
        assert "not registered" in outcomes[0].message

    def test_value_without_rules_is_ignored(self):
        engine = RuleEngine()
        engine.set_value("free", "anything")
        assert engine.evaluate_form() == {}
        assert engine.is_form_valid()

    def test_field_without_rules_is_valid(self):
        engine = RuleEngine()
        engine.register_field("free")
        engine.set_value("free", 42)
        assert engine.evaluate_field("free") == []
        assert engine.is_form_valid()

    def test_crashing_predicate_becomes_failure(self):
        def explode(value):
            raise RuntimeError("kaboom")

        engine = RuleEngine()
        engine.register_field("x", explode, v.required())
        engine.set_value("x", "ok")

        outcomes = engine.evaluate_field("x")
        assert outcomes[0].valid is False
        assert outcomes[0].message is None
        assert outcomes[1].valid is True

    def test_boolean_predicate_uses_rule_message(self):
        engine = RuleEngine()
        engine.register_field("n", FieldRule(name="even", predicate=lambda value: int(value) % 2 == 0, message="must be even"))
        engine.set_value("n", "3")
        assert engine.evaluate_field("n") == [RuleOutcome(valid=False, message="must be even")]


class TestPredicates:
    @pytest.mark.parametrize(
        "rule, value, valid",
        [
            (v.required(), "  ", False),
            (v.required(), ["a"], True),
            (v.required(), [], False),
            (v.required(), 0, True),
            (v.is_number(), "4.5", True),
            (v.is_number(), "four", False),
            (v.min_value(18), "17", False),
            (v.min_value(18), 18, True),
            (v.max_value(10), "10.5", False),
            (v.integer(), "3.0", True),
            (v.integer(), "3.5", False),
            (v.max_items(2), ["a", "b", "c"], False),
            (v.pattern(r"^\d{5}$"), "12345", True),
            (v.pattern(r"^\d{5}$"), 12345, False),
            (v.email(), "a b@c.d", False),
        ],
    )
    def test_rules(self, rule, value, valid):
        assert rule.run(value).valid is valid

    def test_custom_message(self):
        outcome = v.min_length(3, "Too short!").run("a")
        assert outcome.message == "Too short!"

    def test_default_message_mentions_bound(self):
        assert v.min_value(18).run("1").message == "must be at least 18"
