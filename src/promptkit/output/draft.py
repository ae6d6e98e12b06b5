"""
Draft: a block of independently updatable status lines.

Each :class:`DraftLine` owns one row.  Updating a line rewrites only that row,
so several worker threads can report progress side by side::

    draft = Draft()
    a = draft.add_line("Fetching index...")
    b = draft.add_line("Building wheels...")
    a.done("Fetched index")
    b.fail("Build failed")

Once every line is frozen (done, failed or warned), or :meth:`Draft.stop` is
called, the block becomes permanent output and no more lines can be added.
"""

from __future__ import annotations

import sys
import threading
from typing import Literal, TextIO

from promptkit.config import PromptSettings, get_settings
from promptkit.logging import get_logger
from promptkit.tui.renderer import LiveRegion
from promptkit.tui.theme import Theme

logger = get_logger("output.draft")

LineState = Literal["pending", "done", "failed", "warned"]


class DraftLine:
    """Handle for one row of a :class:`Draft`."""

    def __init__(self, draft: Draft, index: int, text: str) -> None:
        self._draft = draft
        self._index = index
        self._text = text
        self._state: LineState = "pending"
        self._lock = threading.Lock()

    @property
    def text(self) -> str:
        return self._text

    @property
    def state(self) -> LineState:
        return self._state

    @property
    def frozen(self) -> bool:
        return self._state != "pending"

    def update(self, text: str) -> None:
        """Replace the text of a pending line; frozen lines ignore updates."""
        with self._lock:
            if self.frozen:
                return
            self._text = text
            # Painting under the line lock keeps screen order equal to state order
            self._draft._repaint(self._index, self.render())

    def done(self, text: str | None = None) -> None:
        self._freeze("done", text)

    def fail(self, text: str | None = None) -> None:
        self._freeze("failed", text)

    def warn(self, text: str | None = None) -> None:
        self._freeze("warned", text)

    def _freeze(self, state: LineState, text: str | None) -> None:
        with self._lock:
            if self.frozen:
                return
            self._state = state
            if text is not None:
                self._text = text
            self._draft._repaint(self._index, self.render())
        self._draft._line_frozen()

    def render(self) -> str:
        theme = self._draft.theme
        symbols = self._draft.settings.symbols
        if self._state == "done":
            return f"{theme.success(symbols.success)} {self._text}"
        if self._state == "failed":
            return f"{theme.error(symbols.failure)} {self._text}"
        if self._state == "warned":
            return f"{theme.warning(symbols.warning)} {self._text}"
        return f"  {self._text}"


class Draft:
    """
    A growing block of live status lines.

    Parameters
    ----------
    output:
        Stream to draw on (default ``sys.stdout``).
    settings:
        Symbols and colour mode.
    """

    def __init__(self, output: TextIO | None = None, settings: PromptSettings | None = None) -> None:
        self.settings = settings or get_settings()
        self.output = output or sys.stdout
        self.theme = Theme(enabled=self.settings.use_color(self.output))
        self.region = LiveRegion(self.output)
        self._lines: list[DraftLine] = []
        self._finished = False

    @property
    def lines(self) -> list[DraftLine]:
        return list(self._lines)

    @property
    def finished(self) -> bool:
        return self._finished

    def add_line(self, text: str) -> DraftLine:
        """
        Append a pending line below the existing ones.

        Raises
        ------
        RuntimeError
            If the draft has already been committed.
        """
        with self.region.lock:
            if self._finished:
                raise RuntimeError("Cannot add lines to a finished draft")
            line = DraftLine(self, len(self._lines), text)
            self._lines.append(line)
            self.region.paint([item.render() for item in self._lines])
        return line

    def stop(self) -> None:
        """Commit the block as it stands, pending lines included."""
        with self.region.lock:
            if self._finished:
                return
            self._finished = True
            self.region.commit([item.render() for item in self._lines])
        logger.debug("Draft stopped with %d line(s)", len(self._lines))

    def clear(self) -> None:
        """Erase the block and finish the draft without leaving output."""
        with self.region.lock:
            if self._finished:
                return
            self._finished = True
            self.region.clear()

    def _repaint(self, index: int, text: str) -> None:
        with self.region.lock:
            if not self._finished:
                self.region.repaint_line(index, text)

    def _line_frozen(self) -> None:
        with self.region.lock:
            if self._finished or not all(line.frozen for line in self._lines):
                return
            self._finished = True
            self.region.commit([item.render() for item in self._lines])
        logger.debug("Draft complete with %d line(s)", len(self._lines))
