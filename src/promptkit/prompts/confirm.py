"""Yes/no confirmation and on/off toggle prompts."""

from __future__ import annotations

from dataclasses import dataclass

from promptkit.config import PromptSettings
from promptkit.prompts.base import Prompt, Submit
from promptkit.tui.keys import Key
from promptkit.validation import ValidatorLike

_TOGGLE_KEYS = frozenset({"left", "right", "h", "l", "space", "tab"})


@dataclass(frozen=True)
class ConfirmConfig:
    """Configuration for a yes/no question; ``default`` is the initial answer."""

    message: str
    default: bool = False
    validate: ValidatorLike | None = None


class ConfirmPrompt(Prompt[bool]):
    """
    Yes/No question.

    ``y`` / ``n`` answer immediately, Left/Right flip the current answer and
    Enter accepts it.
    """

    config: ConfirmConfig
    cancel_keys = frozenset({"ctrl+c", "escape"})

    def __init__(self, config: ConfirmConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.value = config.default

    def render(self) -> list[str]:
        hint = "(Y/n)" if self.config.default else "(y/N)"
        answer = "Yes" if self.value else "No"
        return [f"{self.header(hint)} {self.theme.muted('›')} {self.theme.primary(answer)}"]

    def handle_key(self, key: Key) -> Submit[bool] | None:
        if key.name in ("y", "Y"):
            self.value = True
            return Submit(True)
        if key.name in ("n", "N"):
            self.value = False
            return Submit(False)
        if key.name in ("left", "right", "tab"):
            self.value = not self.value
            return None
        if key.name == "enter":
            return Submit(self.value)
        return None

    def format_value(self, value: bool) -> str:
        return "Yes" if value else "No"


@dataclass(frozen=True)
class ToggleConfig:
    """Configuration for an on/off switch with custom labels."""

    message: str
    default: bool = False
    active: str = "Yes"
    inactive: str = "No"
    validate: ValidatorLike | None = None


class TogglePrompt(Prompt[bool]):
    """
    Inline switch between ``inactive`` and ``active`` labels.

    ``y`` / ``n`` pick active or inactive and answer immediately, as in
    :class:`ConfirmPrompt`.
    """

    config: ToggleConfig
    cancel_keys = frozenset({"ctrl+c", "escape"})

    def __init__(self, config: ToggleConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.value = config.default

    def render(self) -> list[str]:
        cfg = self.config
        on = self.theme.primary(self.theme.title(cfg.active))
        off = self.theme.primary(self.theme.title(cfg.inactive))
        if self.value:
            switch = f"{self.theme.muted(cfg.inactive)} / {on}"
        else:
            switch = f"{off} / {self.theme.muted(cfg.active)}"
        hint = self.theme.muted("(←/→ or h/l to toggle, enter to confirm)")
        return [f"{self.header()} {switch} {hint}"]

    def handle_key(self, key: Key) -> Submit[bool] | None:
        if key.name in ("y", "Y", "n", "N"):
            self.value = key.name in ("y", "Y")
            return Submit(self.value)
        if key.name in _TOGGLE_KEYS:
            self.value = not self.value
            return None
        if key.name == "enter":
            return Submit(self.value)
        return None

    def format_value(self, value: bool) -> str:
        return self.config.active if value else self.config.inactive
