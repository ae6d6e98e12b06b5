"""
File-path prompt with Tab completion.

Completion lists the directory part of the buffer and keeps the entries whose
names start with the last path segment.  Repeated Tab (or Down) cycles
through the candidates, Shift+Tab (or Up) cycles backwards, and any edit
starts over.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from promptkit.config import PromptSettings
from promptkit.logging import get_logger
from promptkit.prompts.base import Prompt, Submit
from promptkit.tui.keys import Key
from promptkit.tui.line_buffer import LineBuffer
from promptkit.validation import ValidatorLike

logger = get_logger("prompts.filepath")


@dataclass(frozen=True)
class FilepathConfig:
    """
    Configuration for a file-path prompt.

    Attributes
    ----------
    base_path:
        Directory relative paths are resolved against (default: cwd).
    extensions:
        Only offer and accept files with these suffixes (e.g. ``(".py",)``).
    directory_only / file_only:
        Restrict candidates and answers to one kind of entry.
    must_exist:
        Reject paths that do not exist.
    show_hidden:
        Offer dot-entries even when the typed segment does not start with ``.``.
    """

    message: str
    base_path: str | None = None
    default: str | None = None
    extensions: Sequence[str] = ()
    directory_only: bool = False
    file_only: bool = False
    must_exist: bool = True
    show_hidden: bool = False
    limit: int = 10
    validate: ValidatorLike | None = None

    def __post_init__(self) -> None:
        if self.directory_only and self.file_only:
            raise ValueError("directory_only and file_only are mutually exclusive")
        if self.limit < 1:
            raise ValueError("limit must be at least 1")
        normalized = tuple(
            (ext if ext.startswith(".") else f".{ext}").lower() for ext in self.extensions
        )
        object.__setattr__(self, "extensions", normalized)


@dataclass(frozen=True)
class PathEntry:
    name: str
    is_dir: bool


def resolve_path(text: str, base: Path) -> Path:
    """Expand ``~`` and anchor relative paths at *base*."""
    path = Path(os.path.expanduser(text)) if text else Path(".")
    return path if path.is_absolute() else base / path


def list_entries(directory: Path, config: FilepathConfig, include_hidden: bool) -> list[PathEntry]:
    """Directory entries allowed by *config*, directories first, then by name."""
    try:
        scanner = os.scandir(directory)
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
        return []

    entries: list[PathEntry] = []
    with scanner:
        for item in scanner:
            if item.name.startswith(".") and not include_hidden:
                continue
            try:
                is_dir = item.is_dir()
            except OSError:
                is_dir = False
            if is_dir and config.file_only:
                continue
            if not is_dir:
                if config.directory_only:
                    continue
                if config.extensions and Path(item.name).suffix.lower() not in config.extensions:
                    continue
            entries.append(PathEntry(item.name, is_dir))

    entries.sort(key=lambda e: (not e.is_dir, e.name.casefold()))
    return entries


def completions(text: str, base: Path, config: FilepathConfig) -> list[str]:
    """Every buffer value Tab can complete *text* to."""
    head, sep, prefix = text.rpartition(os.sep)
    dir_part = head + sep
    directory = resolve_path(dir_part, base)
    include_hidden = config.show_hidden or prefix.startswith(".")
    return [
        dir_part + entry.name + (os.sep if entry.is_dir else "")
        for entry in list_entries(directory, config, include_hidden)
        if entry.name.startswith(prefix)
    ]


class FilepathPrompt(Prompt[str]):
    """Prompt for a path, with completion against the filesystem."""

    config: FilepathConfig

    def __init__(self, config: FilepathConfig, settings: PromptSettings | None = None) -> None:
        super().__init__(config, settings)
        self.base = Path(config.base_path) if config.base_path else Path.cwd()
        self.buffer = LineBuffer()
        self.candidates: list[str] | None = None
        self.index = 0

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def render(self) -> list[str]:
        hint = f"({self.config.default})" if self.config.default else "(tab to complete)"
        before, at, after = self.buffer.split()
        lines = [
            self.header(hint),
            f"  {self.theme.muted('›')} {before}{self.theme.cursor(at)}{after}",
        ]
        if self.candidates:
            limit = self.config.limit
            start = max(0, min(self.index - limit // 2, len(self.candidates) - limit))
            for i in range(start, min(start + limit, len(self.candidates))):
                name = self.candidates[i]
                if i == self.index:
                    pointer = self.theme.primary(self.symbols.pointer)
                    lines.append(f"  {pointer} {self.theme.primary(name)}")
                else:
                    lines.append(f"    {name}")
            if len(self.candidates) > limit:
                lines.append(self.theme.muted(f"    ({self.index + 1}/{len(self.candidates)})"))
        return lines

    def handle_key(self, key: Key) -> Submit[str] | None:
        self.notice = None

        if key.name == "tab":
            self.cycle(-1 if key.shift else 1)
            return None
        if key.name == "down":
            self.cycle(1)
            return None
        if key.name == "up":
            if self.candidates is not None:
                self.cycle(-1)
            return None
        if key.name == "enter":
            return self.submit()

        if self.buffer.handle_key(key):
            self.candidates = None
        return None

    def cycle(self, step: int) -> None:
        if self.candidates is None:
            self.candidates = completions(self.buffer.text, self.base, self.config)
            self.index = 0 if step > 0 else len(self.candidates) - 1
        else:
            self.index = (self.index + step) % max(1, len(self.candidates))

        if not self.candidates:
            self.candidates = None
            self.notice = "No matches"
            return
        self.buffer.text = self.candidates[self.index]

    def submit(self) -> Submit[str] | None:
        text = self.buffer.text.strip() or (self.config.default or "")
        if not text:
            self.error = "Please enter a path"
            return None

        path = resolve_path(text, self.base)
        cfg = self.config
        if path.exists():
            if cfg.directory_only and not path.is_dir():
                self.error = "Must be a directory"
                return None
            if cfg.file_only and path.is_dir():
                self.error = "Must be a file"
                return None
        elif cfg.must_exist:
            self.error = "Path does not exist"
            return None

        if cfg.extensions and not path.is_dir() and path.suffix.lower() not in cfg.extensions:
            self.error = f"Must have extension: {', '.join(cfg.extensions)}"
            return None

        self.candidates = None
        return Submit(text.rstrip(os.sep) or text)
