"""Shared pytest fixtures for promptkit tests."""

from __future__ import annotations

import re
from collections.abc import Callable
from io import StringIO

import pytest

from promptkit.config import PromptSettings, set_settings
from promptkit.tui.terminal import ScriptedTerminal

_SEQ_RE = re.compile(r"\x1b\[(\??)([0-9;]*)([A-Za-z])")


def render_screen(output: str) -> list[str]:
    """
    Replay *output* on a tiny VT100 model and return the visible rows.

    Understands carriage return, newline, cursor up/down, erase line and
    ignores SGR and cursor visibility.  Trailing blank rows are dropped.
    """
    rows: list[list[str]] = [[]]
    row = col = 0
    pos = 0
    while pos < len(output):
        match = _SEQ_RE.match(output, pos)
        if match:
            private, params, command = match.groups()
            pos = match.end()
            if private:
                continue
            count = int(params) if params.isdigit() else 1
            if command == "A":
                row = max(0, row - count)
            elif command == "B":
                row += count
            elif command == "K":
                while len(rows) <= row:
                    rows.append([])
                rows[row] = []
            continue

        ch = output[pos]
        pos += 1
        if ch == "\r":
            col = 0
        elif ch == "\n":
            row += 1
            col = 0
        else:
            while len(rows) <= row:
                rows.append([])
            line = rows[row]
            while len(line) < col:
                line.append(" ")
            if col < len(line):
                line[col] = ch
            else:
                line.append(ch)
            col += 1
        while len(rows) <= row:
            rows.append([])

    screen = ["".join(line).rstrip() for line in rows]
    while screen and not screen[-1]:
        screen.pop()
    return screen


@pytest.fixture
def settings() -> PromptSettings:
    """Plain-text settings with no environment influence."""
    return PromptSettings(color="never", editor=None)


@pytest.fixture(autouse=True)
def _default_settings(settings: PromptSettings):
    """Make the process default settings deterministic for every test."""
    set_settings(settings)
    yield
    set_settings(None)


@pytest.fixture
def make_terminal() -> Callable[..., ScriptedTerminal]:
    """Factory for scripted terminals writing to a fresh buffer."""

    def factory(*keys: str) -> ScriptedTerminal:
        return ScriptedTerminal(keys, stdout=StringIO(), width=80)

    return factory


@pytest.fixture
def screen() -> Callable[[ScriptedTerminal], list[str]]:
    """Render what a scripted terminal's output looks like on screen."""

    def snapshot(terminal: ScriptedTerminal) -> list[str]:
        return render_screen(terminal.output.getvalue())  # type: ignore[attr-defined]

    return snapshot

