"""
Async entry points, one per prompt kind.

Each function accepts either a ready-made config or the question text plus
keyword options for that config, runs the prompt in a worker thread and
returns the answer::

    name = await text("Project name", default="demo")
    port = await number(NumberConfig("Port", min=1, max=65535, integer=True))

Every function raises :class:`~promptkit.errors.PromptCancelledError` when
the user cancels.
"""

from __future__ import annotations

from datetime import date as _date
from typing import Any, TextIO, TypeVar

from promptkit.config import PromptSettings
from promptkit.output.draft import Draft
from promptkit.output.progress import ProgressBar
from promptkit.output.spinner import Spinner
from promptkit.prompts.autocomplete import AutocompleteConfig, AutocompletePrompt, fuzzy_match
from promptkit.prompts.base import Prompt, PromptSession, Submit
from promptkit.prompts.confirm import ConfirmConfig, ToggleConfig
from promptkit.prompts.date import DateConfig
from promptkit.prompts.editor import EditorConfig, EditorPrompt, Launcher, run_editor
from promptkit.prompts.factory import PromptConfig, make_prompt
from promptkit.prompts.filepath import FilepathConfig
from promptkit.prompts.form import FormConfig, FormField, FormPrompt
from promptkit.prompts.list_prompt import ListConfig
from promptkit.prompts.number import NumberConfig
from promptkit.prompts.password import PasswordConfig
from promptkit.prompts.select import MultiselectConfig, Option, SelectConfig
from promptkit.prompts.text import TextConfig
from promptkit.tui.terminal import Terminal

C = TypeVar("C")


def _build(config_type: type[C], config: C | str, options: dict[str, Any]) -> C:
    if isinstance(config, config_type):
        if options:
            raise TypeError("Pass either a config object or keyword options, not both")
        return config
    if isinstance(config, str):
        return config_type(message=config, **options)
    raise TypeError(f"Expected {config_type.__name__} or a message string, got {type(config).__name__}")


async def prompt(
    config: PromptConfig,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
) -> Any:
    """
    Run the prompt matching *config*'s type.

    Raises
    ------
    TypeError
        If *config* is not a known prompt config.
    """
    return await make_prompt(config, settings).ask(terminal)


async def text(
    config: TextConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> str:
    return await prompt(_build(TextConfig, config, options), terminal, settings)


async def password(
    config: PasswordConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> str:
    return await prompt(_build(PasswordConfig, config, options), terminal, settings)


async def number(
    config: NumberConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> int | float:
    return await prompt(_build(NumberConfig, config, options), terminal, settings)


async def confirm(
    config: ConfirmConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> bool:
    return await prompt(_build(ConfirmConfig, config, options), terminal, settings)


async def toggle(
    config: ToggleConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> bool:
    return await prompt(_build(ToggleConfig, config, options), terminal, settings)


async def select(
    config: SelectConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> Any:
    return await prompt(_build(SelectConfig, config, options), terminal, settings)


async def multiselect(
    config: MultiselectConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> list[Any]:
    return await prompt(_build(MultiselectConfig, config, options), terminal, settings)


async def autocomplete(
    config: AutocompleteConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> Any:
    return await prompt(_build(AutocompleteConfig, config, options), terminal, settings)


async def filepath(
    config: FilepathConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> str:
    return await prompt(_build(FilepathConfig, config, options), terminal, settings)


async def editor(
    config: EditorConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    launcher: Launcher = run_editor,
    **options: Any,
) -> str:
    """Open an external editor; *launcher* replaces the subprocess call."""
    widget = EditorPrompt(_build(EditorConfig, config, options), settings, launcher=launcher)
    return await widget.ask(terminal)


async def list_(
    config: ListConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> list[str]:
    return await prompt(_build(ListConfig, config, options), terminal, settings)


async def date(
    config: DateConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> _date:
    return await prompt(_build(DateConfig, config, options), terminal, settings)


async def form(
    config: FormConfig | str,
    *,
    terminal: Terminal | None = None,
    settings: PromptSettings | None = None,
    **options: Any,
) -> dict[str, Any]:
    return await prompt(_build(FormConfig, config, options), terminal, settings)


# ---------------------------------------------------------------------------
# Live output
# ---------------------------------------------------------------------------

def spinner(
    message: str = "",
    output: TextIO | None = None,
    settings: PromptSettings | None = None,
) -> Spinner:
    """Start a spinner; also usable as ``with spinner("..."):``."""
    return Spinner(message, output=output, settings=settings).start()


def draft(output: TextIO | None = None, settings: PromptSettings | None = None) -> Draft:
    return Draft(output=output, settings=settings)


def progress(
    total: int | float = 100,
    message: str = "",
    output: TextIO | None = None,
    settings: PromptSettings | None = None,
) -> ProgressBar:
    return ProgressBar(total, message, output=output, settings=settings)


__all__ = [
    "AutocompleteConfig",
    "AutocompletePrompt",
    "ConfirmConfig",
    "DateConfig",
    "EditorConfig",
    "FilepathConfig",
    "FormConfig",
    "FormField",
    "FormPrompt",
    "ListConfig",
    "MultiselectConfig",
    "NumberConfig",
    "Option",
    "PasswordConfig",
    "Prompt",
    "PromptConfig",
    "PromptSession",
    "SelectConfig",
    "Submit",
    "TextConfig",
    "ToggleConfig",
    "autocomplete",
    "confirm",
    "date",
    "draft",
    "editor",
    "filepath",
    "form",
    "fuzzy_match",
    "list_",
    "make_prompt",
    "multiselect",
    "number",
    "password",
    "progress",
    "prompt",
    "select",
    "spinner",
    "text",
    "toggle",
]
