"""Tests for chainable validators and declarative rules."""

import re

import pytest

from promptkit.validation import (
    NumberValidator,
    StringValidator,
    ValidationResult,
    Validator,
    as_validator,
    compile_rules,
    to_result,
    v,
)


class TestValidationResult:
    """Tests for ValidationResult and outcome normalisation."""

    def test_truthiness(self) -> None:
        """A result should be truthy exactly when valid."""
        assert ValidationResult.valid()
        assert not ValidationResult.invalid("nope")

    def test_to_result_outcomes(self) -> None:
        """True/None pass, strings carry the message, False uses a default."""
        assert to_result(True).ok
        assert to_result(None).ok
        assert to_result("Too short").message == "Too short"
        assert to_result(False).message == "Invalid value"

    def test_override_message_wins(self) -> None:
        """An explicit message replaces the outcome's own."""
        assert to_result("Too short", "Name required").message == "Name required"
        assert to_result(False, "Bad").message == "Bad"
        assert to_result(True, "Bad").ok


class TestNumberValidator:
    """Tests for numeric rule chains."""

    def test_port_range(self) -> None:
        """The classic port validator accepts 8080 and rejects the rest."""
        port = v.number().integer().min(1).max(65535)

        assert port.validate(8080).ok
        assert port.validate(70000).message == "Must be at most 65535"
        assert port.validate(3.14).message == "Must be an integer"
        assert port.validate(0).message == "Must be at least 1"

    def test_first_failure_wins(self) -> None:
        """When several rules fail, the earliest chained one reports."""
        validator = v.number().max(10).integer()

        assert validator.validate(12.5).message == "Must be at most 10"

    def test_non_numbers_rejected(self) -> None:
        """Strings and booleans are not numbers."""
        validator = v.number().min(0)

        assert validator.validate("5").message == "Must be a number"  # type: ignore[arg-type]
        assert validator.validate(True).message == "Must be a number"

    def test_no_rules_accepts_anything(self) -> None:
        """Without rules there is nothing to fail, not even the type gate."""
        validator = v.number()

        assert validator.validate("5").ok  # type: ignore[arg-type]
        assert validator.validate(True).ok
        assert validator.validate(3).ok

    def test_sign_rules(self) -> None:
        """positive and negative exclude zero."""
        assert v.number().positive().validate(0).message == "Must be positive"
        assert v.number().negative().validate(0).message == "Must be negative"
        assert v.number().negative().validate(-2).ok

    def test_integer_accepts_integral_floats(self) -> None:
        """2.0 counts as an integer, infinity does not."""
        assert v.number().integer().validate(2.0).ok
        assert not v.number().integer().validate(float("inf")).ok

    def test_one_of(self) -> None:
        """one_of lists the allowed values in its message."""
        validator = v.number().one_of([1, 2, 3])

        assert validator.validate(2).ok
        assert validator.validate(5).message == "Must be one of: 1, 2, 3"


class TestStringValidator:
    """Tests for text rule chains."""

    def test_email(self) -> None:
        """email accepts addresses and rejects other text."""
        validator = v.string().email()

        assert validator.validate("ada@example.com").ok
        assert validator.validate("ada@example").message == "Must be a valid email address"

    def test_url(self) -> None:
        """url requires a scheme and, for web schemes, a host."""
        validator = v.string().url()

        assert validator.validate("https://example.com/path").ok
        assert validator.validate("mailto:ada@example.com").ok
        assert not validator.validate("https://").ok
        assert validator.validate("example.com").message == "Must be a valid URL"

    def test_regex_searches(self) -> None:
        """regex matches anywhere unless the pattern is anchored."""
        assert v.string().regex(r"\d").validate("abc1").ok
        assert v.string().regex(re.compile(r"^\d+$")).validate("12a").message == (
            r"Must match pattern ^\d+$"
        )

    def test_length_bounds(self) -> None:
        """min_length and max_length report their bound."""
        validator = v.string().min_length(2).max_length(4)

        assert validator.validate("a").message == "Must be at least 2 characters"
        assert validator.validate("abcde").message == "Must be at most 4 characters"
        assert validator.validate("abc").ok

    def test_custom_messages(self) -> None:
        """Every rule accepts an override message."""
        validator = v.string().min_length(3, message="Name too short")

        assert validator.validate("x").message == "Name too short"


class TestChaining:
    """Validators are immutable and chaining is non-destructive."""

    def test_chaining_leaves_original_untouched(self) -> None:
        """Extending a shared validator should not affect it."""
        base = v.number().min(1)
        strict = base.max(10)

        assert base.validate(50).ok
        assert not strict.validate(50).ok
        assert len(base.rules) == 1
        assert len(strict.rules) == 2

    def test_branches_are_independent(self) -> None:
        """Two extensions of one validator do not see each other's rules."""
        base = v.string()
        short = base.max_length(3)
        long = base.min_length(10)

        assert short.validate("abcd").message == "Must be at most 3 characters"
        assert long.validate("abcd").message == "Must be at least 10 characters"

    def test_chaining_keeps_type(self) -> None:
        """Chained validators keep their specialised class."""
        assert isinstance(v.string().email(), StringValidator)
        assert isinstance(v.number().min(0).refine(lambda n: True), NumberValidator)

    def test_empty_validator_accepts_everything(self) -> None:
        """A validator without rules is valid for any value."""
        assert Validator().validate(object()).ok

    def test_refine_outcomes(self) -> None:
        """refine supports True, message strings and False."""
        even = v.number().refine(lambda n: n % 2 == 0 or "Must be even")

        assert even.validate(4).ok
        assert even.validate(3).message == "Must be even"
        assert v.custom(lambda x: False).validate(1).message == "Invalid value"
        assert v.custom(lambda x: False, "Nope").validate(1).message == "Nope"

    def test_rule_predicate(self) -> None:
        """rule() pairs a predicate with a fixed message."""
        validator = v.string().rule(str.isupper, "Must be upper case")

        assert validator.validate("ABC").ok
        assert validator.validate("abc").message == "Must be upper case"

    def test_validator_is_callable(self) -> None:
        """Calling a validator is the same as validate()."""
        validator = v.boolean().refine(lambda b: b or "Must accept")

        assert validator(True).ok
        assert validator(False).message == "Must accept"


class TestAsValidator:
    """Tests for as_validator."""

    def test_passthrough_and_none(self) -> None:
        """Validators pass through and None stays None."""
        validator = v.string()

        assert as_validator(validator) is validator
        assert as_validator(None) is None

    def test_wraps_callable(self) -> None:
        """A bare callable becomes a one-rule validator."""
        validator = as_validator(lambda s: s == "ok" or "Say ok")

        assert validator is not None
        assert validator.validate("ok").ok
        assert validator.validate("no").message == "Say ok"

    def test_rejects_other_objects(self) -> None:
        """Non-callables are a usage error."""
        with pytest.raises(TypeError):
            as_validator(42)  # type: ignore[arg-type]


class TestCompileRules:
    """Tests for declarative rule compilation."""

    def test_number_rules(self) -> None:
        """A number mapping builds the equivalent chain."""
        validator = compile_rules("number", {"integer": True, "min": 1, "max": 65535})

        assert validator.validate(8080).ok
        assert validator.validate(70000).message == "Must be at most 65535"
        assert validator.validate(3.14).message == "Must be an integer"

    def test_fixed_order_ignores_mapping_order(self) -> None:
        """integer is checked before max regardless of declaration order."""
        validator = compile_rules("number", {"max": 10, "integer": True})

        assert validator.validate(12.5).message == "Must be an integer"

    def test_override_message_form(self) -> None:
        """{value, message} mappings override the canonical message."""
        validator = compile_rules(
            "string", {"min_length": {"value": 3, "message": "Too short"}}
        )

        assert validator.validate("ab").message == "Too short"

    def test_disabled_flag(self) -> None:
        """A flag rule set to false is skipped."""
        validator = compile_rules("number", {"integer": False})

        assert validator.validate(1.5).ok

    def test_refine_entry(self) -> None:
        """refine takes a callable and runs last."""
        validator = compile_rules(
            "string", {"refine": lambda s: s != "admin" or "Reserved", "min_length": 2}
        )

        assert validator.validate("a").message == "Must be at least 2 characters"
        assert validator.validate("admin").message == "Reserved"

    def test_boolean_kind(self) -> None:
        """boolean only supports refine."""
        validator = compile_rules("boolean", {"refine": lambda b: b or "Must agree"})

        assert validator.validate(False).message == "Must agree"
        with pytest.raises(ValueError, match="Unsupported boolean"):
            compile_rules("boolean", {"min": 1})

    def test_unknown_rule_and_kind(self) -> None:
        """Unknown rules and kinds are rejected."""
        with pytest.raises(ValueError, match="Unsupported string rule"):
            compile_rules("string", {"min": 1})
        with pytest.raises(ValueError, match="Unknown validation kind"):
            compile_rules("date", {})  # type: ignore[arg-type]

    def test_refine_must_be_callable(self) -> None:
        """A non-callable refine is an error."""
        with pytest.raises(ValueError, match="callable"):
            compile_rules("number", {"refine": 3})
