"""
Type-to-filter selection prompt.

Every keystroke edits the query and re-filters the options; the highlight
returns to the top match whenever the filtered set changes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from promptkit.config import PromptSettings
from promptkit.prompts.base import Prompt, Submit
from promptkit.prompts.select import Option, OptionLike, coerce_options
from promptkit.tui.keys import Key
from promptkit.tui.line_buffer import LineBuffer
from promptkit.tui.theme import Theme
from promptkit.validation import ValidatorLike

FilterFn = Callable[[str, Option], bool]


def fuzzy_match(query: str, text: str) -> bool:
    """
    Case-insensitive subsequence match.

    Every character of *query* must appear in *text* in order, though not
    necessarily contiguously, so any substring also matches.  An empty query
    matches everything.

    >>> fuzzy_match("ja", "JavaScript")
    True
    >>> fuzzy_match("ja", "TypeScript")
    False
    """
    it = iter(text.casefold())
    return all(ch in it for ch in query.casefold())


def default_filter(query: str, option: Option) -> bool:
    return fuzzy_match(query, option.label)


def highlight_match(label: str, query: str, theme: Theme) -> str:
    """Style the characters of *label* consumed by the subsequence match."""
    if not query:
        return label
    wanted = query.casefold()
    out: list[str] = []
    pos = 0
    for ch in label:
        if pos < len(wanted) and ch.casefold() == wanted[pos]:
            out.append(theme.match(ch))
            pos += 1
        else:
            out.append(ch)
    return "".join(out)


@dataclass(frozen=True)
class AutocompleteConfig:
    """
    Configuration for an autocomplete prompt.

    Attributes
    ----------
    limit:
        Maximum number of matches shown at once.
    allow_custom:
        Accept the typed text when nothing matches.
    initial:
        Initial query.
    filter:
        ``(query, option) -> bool``; defaults to :func:`default_filter`.
    """

    message: str
    options: Sequence[OptionLike] = field(default_factory=tuple)
    limit: int = 10
    allow_custom: bool = False
    initial: str = ""
    placeholder: str | None = None
    filter: FilterFn | None = None
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        options = coerce_options(self.options)
        if not options and not self.allow_custom:
            raise ValueError("autocomplete requires options unless allow_custom is set")
        if self.limit < 1:
            raise ValueError("limit must be at least 1")
        object.__setattr__(self, "options", options)


class AutocompletePrompt(Prompt[Any]):
    """Filter options by typing; Enter picks the highlighted match."""

    config: AutocompleteConfig
    cancel_keys = frozenset({"ctrl+c", "escape"})

    def __init__(self, config: AutocompleteConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.options: tuple[Option, ...] = config.options  # type: ignore[assignment]
        self.filter = config.filter or default_filter
        self.buffer = LineBuffer(config.initial)
        self.cursor = 0
        self.matches = self._filter()
        self._chosen_label: str | None = None

    def _filter(self) -> list[Option]:
        query = self.buffer.text
        return [option for option in self.options if self.filter(query, option)]

    @property
    def visible(self) -> list[Option]:
        return self.matches[:self.config.limit]

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def render(self) -> list[str]:
        query = self.buffer.text
        before, at, after = self.buffer.split()
        if not query and self.config.placeholder:
            shown = self.theme.muted(self.config.placeholder)
        else:
            shown = before + self.theme.cursor(at) + after
        lines = [
            self.header("(type to filter, ↑↓ to navigate, enter to select)"),
            f"  {self.theme.muted('›')} {shown}",
        ]

        if not self.matches:
            lines.append(self.theme.muted("    No matches"))
            return lines

        for i, option in enumerate(self.visible):
            if i == self.cursor:
                pointer = self.theme.primary(self.symbols.pointer)
                lines.append(f"  {pointer} {self.theme.primary(option.label)}")
            else:
                lines.append(f"    {highlight_match(option.label, query, self.theme)}")
        hidden = len(self.matches) - len(self.visible)
        if hidden > 0:
            lines.append(self.theme.muted(f"    ... and {hidden} more"))
        return lines

    def handle_key(self, key: Key) -> Submit[Any] | None:
        if key.name == "enter":
            return self.submit()

        if key.name in ("up", "down"):
            count = len(self.visible)
            if count:
                step = -1 if key.name == "up" else 1
                self.cursor = (self.cursor + step) % count
            return None

        before = self.buffer.text
        self.buffer.handle_key(key)
        if self.buffer.text != before:
            matches = self._filter()
            if matches != self.matches:
                self.cursor = 0
            self.matches = matches
        return None

    def submit(self) -> Submit[Any] | None:
        if self.visible:
            option = self.visible[self.cursor]
            self._chosen_label = option.label
            return Submit(option.value)
        query = self.buffer.text.strip()
        if self.config.allow_custom and query:
            self._chosen_label = query
            return Submit(query)
        self.error = "No matching option"
        return None

    def format_value(self, value: Any) -> str:
        return self._chosen_label if self._chosen_label is not None else str(value)
