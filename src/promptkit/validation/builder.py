"""
Immutable, chainable validators.

Every chaining call returns a *new* validator whose rule chain points at the
receiver's chain, so validators can be shared and extended freely::

    port = v.number().integer().min(1)
    http_port = port.max(65535)   # ``port`` is unchanged

Rules run in the order they were chained and validation stops at the first
failure.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from promptkit.validation.rules import NUMBER_RULES, STRING_RULES, RuleSpec, is_number

T = TypeVar("T")
_V = TypeVar("_V", bound="Validator[Any]")

# What a rule or refinement may return: ``True`` for valid, a message string
# for invalid, ``False`` for invalid with the default message, or a result.
RuleOutcome = Union[bool, str, "ValidationResult", None]


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one value.

    Attributes
    ----------
    ok:
        ``True`` when every rule passed.
    message:
        The first failing rule's message, ``None`` when valid.
    """

    ok: bool
    message: str | None = None

    @classmethod
    def valid(cls) -> ValidationResult:
        return _VALID

    @classmethod
    def invalid(cls, message: str) -> ValidationResult:
        return cls(ok=False, message=message)

    def __bool__(self) -> bool:
        return self.ok


_VALID = ValidationResult(ok=True)

Rule = Callable[[Any], ValidationResult]


def to_result(outcome: RuleOutcome, message: str | None = None) -> ValidationResult:
    """
    Normalise a rule outcome into a :class:`ValidationResult`.

    *message* overrides whatever failure message the outcome carried.
    """
    if isinstance(outcome, ValidationResult):
        if outcome.ok or message is None:
            return outcome
        return ValidationResult.invalid(message)
    if outcome is True or outcome is None:
        return _VALID
    if isinstance(outcome, str):
        return ValidationResult.invalid(message or outcome)
    return ValidationResult.invalid(message or "Invalid value")


# ---------------------------------------------------------------------------
# Persistent rule chain
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _RuleNode:
    """One link of a rule chain; ``parent`` holds every earlier rule."""

    rule: Rule
    parent: _RuleNode | None


def _unwind(node: _RuleNode | None) -> list[Rule]:
    rules: list[Rule] = []
    while node is not None:
        rules.append(node.rule)
        node = node.parent
    rules.reverse()
    return rules


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

class Validator(Generic[T]):
    """
    An ordered, immutable sequence of rules over values of type ``T``.

    A validator without rules accepts every value.
    """

    def __init__(self, _chain: _RuleNode | None = None) -> None:
        self._chain = _chain

    def _extend(self: _V, rule: Rule) -> _V:
        return type(self)(_RuleNode(rule, self._chain))

    @property
    def rules(self) -> tuple[Rule, ...]:
        """The rules in evaluation order."""
        return tuple(_unwind(self._chain))

    def validate(self, value: T) -> ValidationResult:
        for rule in _unwind(self._chain):
            result = rule(value)
            if not result.ok:
                return result
        return _VALID

    def __call__(self, value: T) -> ValidationResult:
        return self.validate(value)

    # ------------------------------------------------------------------
    # Generic rules
    # ------------------------------------------------------------------

    def rule(self: _V, check: Callable[[Any], bool], message: str) -> _V:
        """Append a predicate failing with *message*."""

        def _rule(value: Any) -> ValidationResult:
            return _VALID if check(value) else ValidationResult.invalid(message)

        return self._extend(_rule)

    def refine(
        self: _V,
        fn: Callable[[Any], RuleOutcome],
        message: str | None = None,
    ) -> _V:
        """
        Append a custom rule.

        *fn* returns ``True`` when the value is valid, or an error message
        (``False`` means invalid with *message* or ``"Invalid value"``).
        A given *message* replaces any message *fn* returns.
        """
        return self._extend(lambda value: to_result(fn(value), message))

    def _apply(self: _V, spec: RuleSpec, args: Sequence[Any], message: str | None) -> _V:
        def _rule(value: Any) -> ValidationResult:
            if spec.check(value, *args):
                return _VALID
            return ValidationResult.invalid(message or spec.message(*args))

        return self._extend(_rule)


class StringValidator(Validator[str]):
    """Validator for text values."""

    def email(self, message: str | None = None) -> StringValidator:
        return self._apply(STRING_RULES["email"], (), message)

    def url(self, message: str | None = None) -> StringValidator:
        return self._apply(STRING_RULES["url"], (), message)

    def regex(self, pattern: Any, message: str | None = None) -> StringValidator:
        return self._apply(STRING_RULES["regex"], (pattern,), message)

    def min_length(self, n: int, message: str | None = None) -> StringValidator:
        return self._apply(STRING_RULES["min_length"], (n,), message)

    def max_length(self, n: int, message: str | None = None) -> StringValidator:
        return self._apply(STRING_RULES["max_length"], (n,), message)

    def one_of(self, values: Sequence[str], message: str | None = None) -> StringValidator:
        return self._apply(STRING_RULES["one_of"], (tuple(values),), message)


class NumberValidator(Validator[float]):
    """
    Validator for numeric values.

    Comparisons use ordinary numeric ordering.  Once a rule is chained,
    non-numbers (including ``bool``) fail before any rule runs; with no
    rules every value is accepted.
    """

    def validate(self, value: float) -> ValidationResult:
        if self._chain is not None and not is_number(value):
            return ValidationResult.invalid("Must be a number")
        return super().validate(value)

    def min(self, n: float, message: str | None = None) -> NumberValidator:
        return self._apply(NUMBER_RULES["min"], (n,), message)

    def max(self, n: float, message: str | None = None) -> NumberValidator:
        return self._apply(NUMBER_RULES["max"], (n,), message)

    def integer(self, message: str | None = None) -> NumberValidator:
        return self._apply(NUMBER_RULES["integer"], (), message)

    def positive(self, message: str | None = None) -> NumberValidator:
        return self._apply(NUMBER_RULES["positive"], (), message)

    def negative(self, message: str | None = None) -> NumberValidator:
        return self._apply(NUMBER_RULES["negative"], (), message)

    def one_of(self, values: Sequence[float], message: str | None = None) -> NumberValidator:
        return self._apply(NUMBER_RULES["one_of"], (tuple(values),), message)


class BooleanValidator(Validator[bool]):
    """Validator for yes/no values; only :meth:`refine` applies."""


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

ValidatorLike = Union[Validator[Any], Callable[[Any], RuleOutcome]]


def as_validator(obj: ValidatorLike | None) -> Validator[Any] | None:
    """Accept a validator or a bare ``value -> True | message`` callable."""
    if obj is None or isinstance(obj, Validator):
        return obj
    if callable(obj):
        return Validator().refine(obj)
    raise TypeError(f"Expected a Validator or callable, got {type(obj).__name__}")
