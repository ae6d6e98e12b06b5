"""
Chainable validation for prompt answers.

Usage::

    from promptkit.validation import v

    port = v.number().integer().min(1).max(65535)
    port.validate(8080)          # ValidationResult(ok=True)
    port.validate(70000).message # "Must be at most 65535"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from promptkit.validation.builder import (
    BooleanValidator,
    NumberValidator,
    RuleOutcome,
    StringValidator,
    ValidationResult,
    Validator,
    ValidatorLike,
    as_validator,
    to_result,
)
from promptkit.validation.compile import compile_rules


class _ValidatorFactory:
    """Entry points for building validators (exposed as ``v``)."""

    @staticmethod
    def string() -> StringValidator:
        return StringValidator()

    @staticmethod
    def number() -> NumberValidator:
        return NumberValidator()

    @staticmethod
    def boolean() -> BooleanValidator:
        return BooleanValidator()

    @staticmethod
    def custom(rule: Callable[[Any], RuleOutcome], message: str | None = None) -> Validator[Any]:
        """A validator for any value type, starting with one custom rule."""
        return Validator().refine(rule, message)


v = _ValidatorFactory()

__all__ = [
    "BooleanValidator",
    "NumberValidator",
    "StringValidator",
    "ValidationResult",
    "Validator",
    "ValidatorLike",
    "as_validator",
    "compile_rules",
    "to_result",
    "v",
]
