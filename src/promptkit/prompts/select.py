"""
Single and multiple selection prompts.

Both render the option list below the question with a pointer on the
highlighted row.  Up/Down (or k/j) move the highlight and wrap around at the
ends; long lists scroll inside a window of ``page_size`` rows.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from promptkit.config import PromptSettings
from promptkit.prompts.base import Prompt, Submit
from promptkit.tui.keys import Key
from promptkit.validation import ValidatorLike

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Option:
    """
    One selectable entry.

    Attributes
    ----------
    label:
        Text shown in the list.
    value:
        Returned when the option is chosen; compared with ``==``.
    hint:
        Optional dimmed text shown after the label.
    """

    label: str
    value: Any = None
    hint: str = ""


OptionLike = Union[Option, str, tuple]


def coerce_options(items: Iterable[OptionLike]) -> tuple[Option, ...]:
    """
    Normalise option declarations.

    Accepts :class:`Option` objects, plain strings (label and value) and
    ``(label, value)`` or ``(label, value, hint)`` tuples.
    """
    options: list[Option] = []
    for item in items:
        if isinstance(item, Option):
            options.append(item)
        elif isinstance(item, str):
            options.append(Option(label=item, value=item))
        elif isinstance(item, tuple) and 2 <= len(item) <= 3:
            options.append(Option(*item))
        else:
            raise TypeError(f"Cannot build an option from {item!r}")
    return tuple(options)


def index_of(options: Sequence[Option], value: Any) -> int:
    """Index of the first option whose value equals *value*, or ``-1``."""
    for i, option in enumerate(options):
        if option.value == value:
            return i
    return -1


class ScrollWindow:
    """Keeps a highlighted row visible inside a fixed number of rows."""

    def __init__(self, size: int) -> None:
        self.size = max(1, size)
        self.offset = 0

    def visible(self, count: int, cursor: int) -> range:
        display = min(self.size, count)
        if cursor < self.offset:
            self.offset = cursor
        elif cursor >= self.offset + display:
            self.offset = cursor - display + 1
        self.offset = max(0, min(self.offset, count - display))
        return range(self.offset, self.offset + display)


# ---------------------------------------------------------------------------
# Select
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectConfig:
    """Configuration for a single-choice prompt."""

    message: str
    options: Sequence[OptionLike] = field(default_factory=tuple)
    default: Any = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        options = coerce_options(self.options)
        if not options:
            raise ValueError("select requires at least one option")
        object.__setattr__(self, "options", options)


class _ChoicePrompt(Prompt[Any]):
    """Shared navigation for list-style prompts."""

    cancel_keys = frozenset({"ctrl+c", "escape"})

    def __init__(self, config: Any, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.options: tuple[Option, ...] = config.options
        self.cursor = 0
        self.window = ScrollWindow(config.page_size or self.settings.page_size)

    def move(self, key: Key) -> bool:
        """Apply a navigation key; returns ``True`` if *key* was one."""
        count = len(self.options)
        if key.name in ("up", "k"):
            self.cursor = (self.cursor - 1) % count
            return True
        if key.name in ("down", "j"):
            self.cursor = (self.cursor + 1) % count
            return True
        if key.name == "home":
            self.cursor = 0
            return True
        if key.name == "end":
            self.cursor = count - 1
            return True
        return False

    def option_lines(self, marker: Callable[[int], str] | None = None) -> list[str]:
        lines: list[str] = []
        rows = self.window.visible(len(self.options), self.cursor)
        for i in rows:
            option = self.options[i]
            active = i == self.cursor
            pointer = self.theme.primary(self.symbols.pointer) if active else " "
            label = self.theme.primary(option.label) if active else option.label
            box = f"{marker(i)} " if marker else ""
            hint = self.theme.muted(f" - {option.hint}") if option.hint else ""
            lines.append(f"  {pointer} {box}{label}{hint}")
        if len(rows) < len(self.options):
            lines.append(self.theme.muted(f"  ({self.cursor + 1}/{len(self.options)})"))
        return lines

    def label_for(self, value: Any) -> str:
        i = index_of(self.options, value)
        return self.options[i].label if i >= 0 else str(value)


class SelectPrompt(_ChoicePrompt):
    """Pick exactly one option."""

    config: SelectConfig

    def __init__(self, config: SelectConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        if config.default is not None:
            self.cursor = max(0, index_of(self.options, config.default))

    def render(self) -> list[str]:
        return [self.header("(use ↑↓ or j/k, enter to select)")] + self.option_lines()

    def handle_key(self, key: Key) -> Submit[Any] | None:
        if self.move(key):
            return None
        if key.name == "enter":
            return Submit(self.options[self.cursor].value)
        return None

    def format_value(self, value: Any) -> str:
        return self.label_for(value)


# ---------------------------------------------------------------------------
# Multiselect
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MultiselectConfig:
    """
    Configuration for a multiple-choice prompt.

    Attributes
    ----------
    default:
        Values checked initially.
    min, max:
        Bounds on the number of checked options.
    required:
        Shorthand for ``min=1``.
    """

    message: str
    options: Sequence[OptionLike] = field(default_factory=tuple)
    default: Sequence[Any] = ()
    min: int = 0
    max: int | None = None
    required: bool = False
    page_size: int | None = None
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        options = coerce_options(self.options)
        object.__setattr__(self, "options", options)
        object.__setattr__(self, "default", tuple(self.default))
        if self.min < 0:
            raise ValueError("min must not be negative")
        if self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        if self.min_required > len(options):
            raise ValueError(
                f"multiselect requires at least {self.min_required} option(s) "
                f"but only {len(options)} are available"
            )
        if not options:
            raise ValueError("multiselect requires at least one option")

    @property
    def min_required(self) -> int:
        return max(self.min, 1 if self.required else 0)


class MultiselectPrompt(_ChoicePrompt):
    """Check any number of options; answers keep declaration order."""

    config: MultiselectConfig

    def __init__(self, config: MultiselectConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.checked: set[int] = {
            i for i, option in enumerate(self.options) if option.value in config.default
        }

    @property
    def limit(self) -> int:
        return self.config.max if self.config.max is not None else len(self.options)

    def render(self) -> list[str]:
        header = self.header("(space to toggle, a for all, enter to confirm)")
        return [header] + self.option_lines(marker=self._box)

    def _box(self, i: int) -> str:
        if i in self.checked:
            return self.theme.success(self.symbols.checked)
        return self.theme.muted(self.symbols.unchecked)

    def handle_key(self, key: Key) -> Submit[Any] | None:
        self.notice = None
        if self.move(key):
            return None

        if key.name in ("space", "tab"):
            self.toggle(self.cursor)
            return None

        if key.name == "a":
            if len(self.checked) == min(self.limit, len(self.options)):
                self.checked.clear()
            else:
                self.checked = set(range(min(self.limit, len(self.options))))
            return None

        if key.name == "enter":
            needed = self.config.min_required
            if len(self.checked) < needed:
                self.error = f"Please select at least {needed} option(s)"
                return None
            return Submit([self.options[i].value for i in sorted(self.checked)])

        return None

    def toggle(self, index: int) -> None:
        if index in self.checked:
            self.checked.discard(index)
        elif len(self.checked) >= self.limit:
            self.notice = f"You can select at most {self.limit} option(s)"
        else:
            self.checked.add(index)

    def format_value(self, value: list[Any]) -> str:
        return ", ".join(self.label_for(item) for item in value)
