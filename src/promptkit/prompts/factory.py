"""Map configuration records to the prompt that runs them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

from promptkit.config import PromptSettings
from promptkit.prompts.autocomplete import AutocompleteConfig, AutocompletePrompt
from promptkit.prompts.base import Prompt
from promptkit.prompts.confirm import ConfirmConfig, ConfirmPrompt, ToggleConfig, TogglePrompt
from promptkit.prompts.date import DateConfig, DatePrompt
from promptkit.prompts.editor import EditorConfig, EditorPrompt
from promptkit.prompts.filepath import FilepathConfig, FilepathPrompt
from promptkit.prompts.list_prompt import ListConfig, ListPrompt
from promptkit.prompts.number import NumberConfig, NumberPrompt
from promptkit.prompts.password import PasswordConfig, PasswordPrompt
from promptkit.prompts.select import (
    MultiselectConfig,
    MultiselectPrompt,
    SelectConfig,
    SelectPrompt,
)
from promptkit.prompts.text import TextConfig, TextPrompt

if TYPE_CHECKING:
    from promptkit.prompts.form import FormConfig, FormPrompt

PromptConfig = Union[
    TextConfig,
    PasswordConfig,
    NumberConfig,
    ListConfig,
    ConfirmConfig,
    ToggleConfig,
    SelectConfig,
    MultiselectConfig,
    AutocompleteConfig,
    FilepathConfig,
    EditorConfig,
    DateConfig,
    "FormConfig",
]

_PROMPTS: tuple[tuple[type, type[Prompt[Any]]], ...] = (
    (TextConfig, TextPrompt),
    (PasswordConfig, PasswordPrompt),
    (NumberConfig, NumberPrompt),
    (ListConfig, ListPrompt),
    (ConfirmConfig, ConfirmPrompt),
    (ToggleConfig, TogglePrompt),
    (SelectConfig, SelectPrompt),
    (MultiselectConfig, MultiselectPrompt),
    (AutocompleteConfig, AutocompletePrompt),
    (FilepathConfig, FilepathPrompt),
    (EditorConfig, EditorPrompt),
    (DateConfig, DatePrompt),
)

#: Configs whose prompts edit a single line of text
TEXT_FAMILY = (TextConfig, PasswordConfig, NumberConfig, ListConfig)


def make_prompt(
    config: PromptConfig,
    settings: PromptSettings | None = None,
) -> Prompt[Any] | FormPrompt:
    """
    Build the prompt for *config*.

    Raises
    ------
    TypeError
        If *config* is not one of the known configuration types.
    """
    from promptkit.prompts.form import FormConfig, FormPrompt

    if isinstance(config, FormConfig):
        return FormPrompt(config, settings)
    for config_type, prompt_type in _PROMPTS:
        if isinstance(config, config_type):
            return prompt_type(config, settings)
    raise TypeError(f"Unsupported prompt config: {type(config).__name__}")
