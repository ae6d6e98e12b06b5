"""
Built-in rule specifications.

Each :class:`RuleSpec` pairs a predicate with the canonical message used when
no override is given.  Validators and the declarative compiler both build
their rules from these tables, so messages stay identical across the two.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any
from urllib.parse import urlparse

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


@dataclass(frozen=True)
class RuleSpec:
    """A predicate plus the generator of its default failure message."""

    check: Callable[..., bool]
    message: Callable[..., str]


def is_number(value: Any) -> bool:
    """``True`` for real numbers, excluding ``bool``."""
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    if not parsed.scheme or not _SCHEME_RE.match(parsed.scheme):
        return False
    if parsed.scheme in ("http", "https", "ftp", "ws", "wss"):
        return bool(parsed.netloc)
    return bool(parsed.netloc or parsed.path)


def _is_integer(value: Any) -> bool:
    if isinstance(value, int):
        return True
    try:
        return math.isfinite(value) and float(value).is_integer()
    except (TypeError, ValueError):
        return False


def _pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def _join(values: Sequence[Any]) -> str:
    return ", ".join(str(v) for v in values)


# ---------------------------------------------------------------------------
# String rules
# ---------------------------------------------------------------------------

STRING_RULES: dict[str, RuleSpec] = {
    "email": RuleSpec(
        check=lambda value: bool(_EMAIL_RE.match(value)),
        message=lambda: "Must be a valid email address",
    ),
    "url": RuleSpec(
        check=_is_url,
        message=lambda: "Must be a valid URL",
    ),
    "regex": RuleSpec(
        check=lambda value, pattern: _pattern(pattern).search(value) is not None,
        message=lambda pattern: f"Must match pattern {_pattern(pattern).pattern}",
    ),
    "min_length": RuleSpec(
        check=lambda value, n: len(value) >= n,
        message=lambda n: f"Must be at least {n} characters",
    ),
    "max_length": RuleSpec(
        check=lambda value, n: len(value) <= n,
        message=lambda n: f"Must be at most {n} characters",
    ),
    "one_of": RuleSpec(
        check=lambda value, values: value in values,
        message=lambda values: f"Must be one of: {_join(values)}",
    ),
}


# ---------------------------------------------------------------------------
# Number rules
# ---------------------------------------------------------------------------

NUMBER_RULES: dict[str, RuleSpec] = {
    "min": RuleSpec(
        check=lambda value, n: value >= n,
        message=lambda n: f"Must be at least {n}",
    ),
    "max": RuleSpec(
        check=lambda value, n: value <= n,
        message=lambda n: f"Must be at most {n}",
    ),
    "integer": RuleSpec(
        check=_is_integer,
        message=lambda: "Must be an integer",
    ),
    "positive": RuleSpec(
        check=lambda value: value > 0,
        message=lambda: "Must be positive",
    ),
    "negative": RuleSpec(
        check=lambda value: value < 0,
        message=lambda: "Must be negative",
    ),
    "one_of": RuleSpec(
        check=lambda value, values: value in values,
        message=lambda values: f"Must be one of: {_join(values)}",
    ),
}
