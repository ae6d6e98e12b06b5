"""
Multi-field forms.

A form runs one prompt per field, in declaration order, while holding raw
mode for the whole sequence.  The answers come back as a dict only when every
field has been accepted; cancelling any field cancels the form.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from promptkit.config import PromptSettings, get_settings
from promptkit.logging import get_logger
from promptkit.prompts.base import Prompt, default_terminal, run_in_thread
from promptkit.prompts.factory import TEXT_FAMILY, PromptConfig, make_prompt
from promptkit.prompts.list_prompt import ListConfig
from promptkit.prompts.text import TextConfig
from promptkit.tui.renderer import LiveRegion
from promptkit.tui.terminal import Terminal
from promptkit.tui.theme import Theme
from promptkit.validation import ValidatorLike

logger = get_logger("prompts.form")


@dataclass(frozen=True)
class FormField:
    """
    One field of a form.

    Attributes
    ----------
    name:
        Key of the answer in the result dict.
    label:
        Question shown for the field; overrides the config's ``message``.
    config:
        Any prompt config; a plain text prompt when omitted.
    required:
        Reject empty answers for text, password, number and list fields.
    validator:
        Extra validation run after the config's own.
    """

    name: str
    label: str | None = None
    config: PromptConfig | None = None
    required: bool = False
    validator: ValidatorLike | None = None

    def resolved_config(self) -> Any:
        """The config actually run for this field."""
        message = self.label or self.name
        if self.config is None:
            return TextConfig(message=message, required=self.required)

        config = self.config
        if self.label:
            config = dataclasses.replace(config, message=self.label)
        if self.required and isinstance(config, TEXT_FAMILY):
            if isinstance(config, ListConfig):
                config = dataclasses.replace(config, min=max(config.min or 0, 1))
            elif hasattr(config, "required"):
                config = dataclasses.replace(config, required=True)
        return config


@dataclass(frozen=True)
class FormConfig:
    message: str
    fields: Sequence[FormField] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        fields = tuple(self.fields)
        if not fields:
            raise ValueError("form requires at least one field")
        names = [f.name for f in fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate form field name(s): {', '.join(duplicates)}")
        object.__setattr__(self, "fields", fields)


class FormPrompt:
    """Runs the prompts of a :class:`FormConfig` one after another."""

    def __init__(self, config: FormConfig, settings: PromptSettings | None = None) -> None:
        self.config = config
        self.settings = settings or get_settings()

    def build(self, form_field: FormField) -> Prompt[Any] | FormPrompt:
        prompt = make_prompt(form_field.resolved_config(), self.settings)
        if form_field.validator is not None and isinstance(prompt, Prompt):
            prompt.add_validator(form_field.validator)
        return prompt

    def run(self, terminal: Terminal | None = None) -> dict[str, Any]:
        terminal = terminal or default_terminal(self.settings)
        theme = Theme(enabled=self.settings.use_color(terminal.output))
        answers: dict[str, Any] = {}

        with terminal.raw():
            LiveRegion(terminal.output, width=terminal.width).commit(
                [f"{theme.primary(self.settings.symbols.prefix)} {theme.title(self.config.message)}"]
            )
            for form_field in self.config.fields:
                logger.debug("Form field: %s", form_field.name)
                answers[form_field.name] = self.build(form_field).run(terminal)
        return answers

    async def ask(self, terminal: Terminal | None = None) -> dict[str, Any]:
        return await run_in_thread(self.run, terminal or default_terminal(self.settings))
