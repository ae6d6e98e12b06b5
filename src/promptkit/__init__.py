"""
promptkit - interactive terminal prompts and live output.

Ask questions with keyboard-driven widgets (text, password, number, confirm,
toggle, select, multiselect, autocomplete, file path, external editor, list,
date and multi-field forms) and report progress with spinners, draft lines
and progress bars.

Example:
    import asyncio
    from promptkit import text, select, v

    async def main():
        name = await text("Project name", validate=v.string().min_length(2))
        kind = await select("Template", options=["app", "library"])
        print(name, kind)

    asyncio.run(main())
"""

from promptkit.config import PromptSettings, PromptSymbols, get_settings, set_settings
from promptkit.errors import (
    EditorLaunchError,
    PromptCancelledError,
    PromptError,
    TerminalUnavailableError,
)
from promptkit.logging import get_logger, setup_logging
from promptkit.output import Draft, DraftLine, ProgressBar, Spinner
from promptkit.prompts import (
    AutocompleteConfig,
    ConfirmConfig,
    DateConfig,
    EditorConfig,
    FilepathConfig,
    FormConfig,
    FormField,
    ListConfig,
    MultiselectConfig,
    NumberConfig,
    Option,
    PasswordConfig,
    SelectConfig,
    TextConfig,
    ToggleConfig,
    autocomplete,
    confirm,
    date,
    draft,
    editor,
    filepath,
    form,
    list_,
    multiselect,
    number,
    password,
    progress,
    prompt,
    select,
    spinner,
    text,
    toggle,
)
from promptkit.tui.terminal import ScriptedTerminal, Terminal
from promptkit.validation import ValidationResult, Validator, v

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "PromptSettings",
    "PromptSymbols",
    "get_settings",
    "set_settings",
    # Errors
    "EditorLaunchError",
    "PromptCancelledError",
    "PromptError",
    "TerminalUnavailableError",
    # Logging
    "get_logger",
    "setup_logging",
    # Prompt configs
    "AutocompleteConfig",
    "ConfirmConfig",
    "DateConfig",
    "EditorConfig",
    "FilepathConfig",
    "FormConfig",
    "FormField",
    "ListConfig",
    "MultiselectConfig",
    "NumberConfig",
    "Option",
    "PasswordConfig",
    "SelectConfig",
    "TextConfig",
    "ToggleConfig",
    # Prompts
    "autocomplete",
    "confirm",
    "date",
    "editor",
    "filepath",
    "form",
    "list_",
    "multiselect",
    "number",
    "password",
    "prompt",
    "select",
    "text",
    "toggle",
    # Live output
    "Draft",
    "DraftLine",
    "ProgressBar",
    "Spinner",
    "draft",
    "progress",
    "spinner",
    # Terminal
    "ScriptedTerminal",
    "Terminal",
    # Validation
    "ValidationResult",
    "Validator",
    "v",
]
