"""
Free-text prompt and the shared single-line input machinery.

:class:`InputPrompt` is the base for every prompt that edits one line of
text (text, password, number, list): it owns a
:class:`~promptkit.tui.line_buffer.LineBuffer`, renders it with a fake
cursor and turns Enter into a parsed, validated submission.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from promptkit.config import PromptSettings
from promptkit.prompts.base import Prompt, Submit
from promptkit.tui.keys import Key
from promptkit.tui.line_buffer import LineBuffer
from promptkit.validation import ValidatorLike

T = TypeVar("T")


class InputPrompt(Prompt[T]):
    """
    Base class for single-line input prompts.

    Subclasses implement :meth:`parse`, raising ``ValueError`` with a
    user-facing message when the raw text is not acceptable.  The message is
    shown inline and editing continues.
    """

    def __init__(
        self,
        config: Any,
        settings: PromptSettings | None = None,
        accept: Callable[[str], bool] | None = None,
    ) -> None:
        super().__init__(config, settings)
        self.buffer = LineBuffer(accept=accept)

    @abstractmethod
    def parse(self, raw: str) -> T:
        """Convert the submitted text into the answer."""

    def hint(self) -> str:
        default = getattr(self.config, "default", None)
        if default is None:
            return ""
        return f"({self.format_value(default)})"

    def mask(self, text: str) -> str:
        """Transform buffer text for display."""
        return text

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def render(self) -> list[str]:
        placeholder = getattr(self.config, "placeholder", None)
        if not len(self.buffer) and placeholder:
            shown = self.theme.cursor(placeholder[0]) + self.theme.muted(placeholder[1:])
            if not self.theme.enabled:
                shown = self.theme.muted(placeholder)
        else:
            before, at, after = self.buffer.split()
            shown = self.mask(before) + self.theme.cursor(self.mask(at)) + self.mask(after)
        return [f"{self.header(self.hint())} {self.theme.muted('›')} {shown}"]

    def handle_key(self, key: Key) -> Submit[T] | None:
        if key.name == "enter":
            return self.submit()
        self.buffer.handle_key(key)
        return None

    def submit(self) -> Submit[T] | None:
        raw = self.buffer.text
        default = getattr(self.config, "default", None)
        if not raw.strip() and default is not None:
            return Submit(default)
        try:
            return Submit(self.parse(raw))
        except ValueError as exc:
            self.error = str(exc)
            return None


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextConfig:
    """
    Configuration for a free-text prompt.

    Attributes
    ----------
    message:
        The question shown to the user.
    default:
        Returned when the input is left empty.
    placeholder:
        Dimmed example text shown while the input is empty.
    required:
        Reject empty input (when there is no default).
    validate:
        Validator or ``value -> True | message`` callable.
    """

    message: str
    default: str | None = None
    placeholder: str | None = None
    required: bool = False
    validate: ValidatorLike | None = None


class TextPrompt(InputPrompt[str]):
    """Free-text input; surrounding whitespace is trimmed."""

    config: TextConfig

    def __init__(self, config: TextConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)

    def parse(self, raw: str) -> str:
        value = raw.strip()
        if not value and self.config.required:
            raise ValueError("Required")
        return value
