"""
Numeric prompt.

Keystrokes that would take the buffer outside the number grammar are ignored,
so the buffer is always a prefix of ``-?digits(.digits)?``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from promptkit.config import PromptSettings
from promptkit.prompts.text import InputPrompt
from promptkit.validation import ValidatorLike

Number = Union[int, float]

_DECIMAL_PREFIX = re.compile(r"^-?\d*(\.\d*)?$")
_INTEGER_PREFIX = re.compile(r"^-?\d*$")


@dataclass(frozen=True)
class NumberConfig:
    """
    Configuration for a number prompt.

    Attributes
    ----------
    min, max:
        Inclusive bounds.
    integer:
        Only accept whole numbers (the decimal point cannot be typed).
    step:
        Answers are rounded to the nearest ``min + k * step`` (``0 + k * step``
        without a minimum).
    """

    message: str
    default: Number | None = None
    min: Number | None = None
    max: Number | None = None
    integer: bool = False
    step: Number | None = None
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        if self.step is not None and self.step <= 0:
            raise ValueError("step must be positive")


def snap_to_step(value: Number, step: Number, base: Number = 0) -> Number:
    """Round *value* to the nearest ``base + k * step``, halves rounding up."""
    d_value, d_step, d_base = Decimal(str(value)), Decimal(str(step)), Decimal(str(base))
    k = ((d_value - d_base) / d_step).to_integral_value(rounding=ROUND_HALF_UP)
    snapped = d_base + k * d_step
    if all(isinstance(n, int) for n in (value, step, base)):
        return int(snapped)
    return float(snapped)


class NumberPrompt(InputPrompt[Number]):
    """Prompt returning an ``int`` (no decimal point typed) or a ``float``."""

    config: NumberConfig

    def __init__(self, config: NumberConfig, settings: PromptSettings | None = None) -> None:
        grammar = _INTEGER_PREFIX if config.integer else _DECIMAL_PREFIX
        super().__init__(config, settings, accept=lambda text: bool(grammar.match(text)))

    def hint(self) -> str:
        cfg = self.config
        parts: list[str] = []
        if cfg.min is not None and cfg.max is not None:
            parts.append(f"{cfg.min}-{cfg.max}")
        elif cfg.min is not None:
            parts.append(f"≥{cfg.min}")
        elif cfg.max is not None:
            parts.append(f"≤{cfg.max}")
        if cfg.integer:
            parts.append("integer")
        if cfg.step is not None:
            parts.append(f"step {cfg.step}")

        hint = f"[{', '.join(parts)}]" if parts else ""
        default = super().hint()
        return " ".join(p for p in (hint, default) if p)

    def parse(self, raw: str) -> Number:
        text = raw.strip()
        try:
            value: Number = float(text) if "." in text else int(text)
        except ValueError:
            raise ValueError("Please enter a valid number") from None

        cfg = self.config
        if cfg.step is not None:
            base = cfg.min if cfg.min is not None else 0
            value = snap_to_step(value, cfg.step, base)
        if cfg.integer and isinstance(value, float):
            if not value.is_integer():
                raise ValueError("Please enter an integer")
            value = int(value)

        if cfg.min is not None and value < cfg.min:
            raise ValueError(f"Value must be at least {cfg.min}")
        if cfg.max is not None and value > cfg.max:
            raise ValueError(f"Value must be at most {cfg.max}")
        return value
