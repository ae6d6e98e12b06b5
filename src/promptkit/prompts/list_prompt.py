"""Delimited list prompt."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from promptkit.config import PromptSettings
from promptkit.prompts.text import InputPrompt
from promptkit.validation import ValidatorLike, as_validator


@dataclass(frozen=True)
class ListConfig:
    """
    Configuration for a list prompt.

    The submitted line is split on ``separator``, each item trimmed and empty
    items dropped.  ``min`` / ``max`` bound the item count and
    ``validate_item`` checks every item before ``validate`` sees the list.
    """

    message: str
    default: Sequence[str] | None = None
    separator: str = ","
    min: int | None = None
    max: int | None = None
    validate_item: ValidatorLike | None = None
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must not be empty")
        if self.min is not None and self.min < 0:
            raise ValueError("min must not be negative")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        if self.default is not None:
            object.__setattr__(self, "default", list(self.default))


def split_items(raw: str, separator: str = ",") -> list[str]:
    """Split *raw* on *separator*, trimming items and dropping empty ones."""
    return [item.strip() for item in raw.split(separator) if item.strip()]


class ListPrompt(InputPrompt[list[str]]):
    config: ListConfig

    def __init__(self, config: ListConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self._item_validator = as_validator(config.validate_item)

    def hint(self) -> str:
        cfg = self.config
        parts = ["comma-separated" if cfg.separator == "," else f'separated by "{cfg.separator}"']
        if cfg.min is not None and cfg.max is not None:
            parts.append(f"{cfg.min}-{cfg.max} items")
        elif cfg.min is not None:
            parts.append(f"min {cfg.min}")
        elif cfg.max is not None:
            parts.append(f"max {cfg.max}")
        hint = f"({', '.join(parts)})"
        if cfg.default:
            hint += f" [{self.format_value(list(cfg.default))}]"
        return hint

    def format_value(self, value: list[str]) -> str:
        return ", ".join(value)

    def parse(self, raw: str) -> list[str]:
        cfg = self.config
        items = split_items(raw, cfg.separator)

        if cfg.min is not None and len(items) < cfg.min:
            raise ValueError(f"Please enter at least {cfg.min} item(s)")
        if cfg.max is not None and len(items) > cfg.max:
            raise ValueError(f"Please enter at most {cfg.max} item(s)")

        if self._item_validator is not None:
            for item in items:
                result = self._item_validator.validate(item)
                if not result.ok:
                    raise ValueError(f'"{item}": {result.message}')
        return items
