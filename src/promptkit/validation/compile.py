"""
Declarative validation rules.

Lets validation live in plain data (a dict, or a YAML document)::

    compile_rules("number", {"integer": True, "min": 1,
                             "max": {"value": 65535, "message": "Port too large"}})

Each key names a built-in rule; its value is either the rule argument or a
``{"value": ..., "message": ...}`` mapping carrying an override message.
Rules are applied in a fixed order per kind, not in mapping order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from promptkit.validation.builder import (
    BooleanValidator,
    NumberValidator,
    StringValidator,
    Validator,
)

Kind = Literal["string", "number", "boolean"]

_STRING_ORDER = ("email", "url", "regex", "min_length", "max_length", "one_of", "refine")
_NUMBER_ORDER = ("integer", "positive", "negative", "min", "max", "one_of", "refine")
_BOOLEAN_ORDER = ("refine",)

# Rules whose presence is the whole argument (``email: true``)
_FLAG_RULES = {"email", "url", "integer", "positive", "negative"}


def _extract(raw: Any) -> tuple[Any, str | None]:
    """Split a rule value into ``(argument, override message)``."""
    if isinstance(raw, Mapping) and "value" in raw:
        return raw["value"], raw.get("message")
    return raw, None


def compile_rules(kind: Kind, rules: Mapping[str, Any]) -> Validator[Any]:
    """
    Build a validator for *kind* from a mapping of rule names to arguments.

    Raises
    ------
    ValueError
        For an unknown kind or a rule name the kind does not support.
    """
    if kind == "string":
        validator: Validator[Any] = StringValidator()
        order = _STRING_ORDER
    elif kind == "number":
        validator = NumberValidator()
        order = _NUMBER_ORDER
    elif kind == "boolean":
        validator = BooleanValidator()
        order = _BOOLEAN_ORDER
    else:
        raise ValueError(f"Unknown validation kind: {kind!r}")

    unknown = set(rules) - set(order)
    if unknown:
        raise ValueError(
            f"Unsupported {kind} rule(s): {', '.join(sorted(unknown))}"
        )

    for name in order:
        if name not in rules:
            continue
        arg, message = _extract(rules[name])

        if name == "refine":
            if not callable(arg):
                raise ValueError("refine must be callable")
            validator = validator.refine(arg, message)
            continue

        if name in _FLAG_RULES:
            if not arg:
                continue  # ``integer: false`` disables the rule
            validator = getattr(validator, name)(message=message)
        else:
            validator = getattr(validator, name)(arg, message=message)

    return validator

