"""Masked text prompt."""

from __future__ import annotations

from dataclasses import dataclass

from promptkit.config import PromptSettings
from promptkit.prompts.text import InputPrompt
from promptkit.validation import ValidatorLike


@dataclass(frozen=True)
class PasswordConfig:
    """
    Configuration for a password prompt.

    ``mask`` overrides the settings' mask glyph; every typed character is
    displayed as one mask glyph, including in the confirmation line.
    """

    message: str
    mask: str | None = None
    required: bool = False
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        if self.mask is not None and len(self.mask) != 1:
            raise ValueError("mask must be a single character")


class PasswordPrompt(InputPrompt[str]):
    """Text input whose content is never echoed."""

    config: PasswordConfig

    def __init__(self, config: PasswordConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.glyph = config.mask or self.settings.symbols.mask

    def mask(self, text: str) -> str:
        return self.glyph * len(text)

    def format_value(self, value: str) -> str:
        return self.mask(value)

    def parse(self, raw: str) -> str:
        if not raw and self.config.required:
            raise ValueError("Required")
        return raw
