"""
Live-region rendering.

A :class:`LiveRegion` owns the block of lines a prompt (or spinner, or draft)
last wrote below the cursor.  Repainting moves the cursor up over that block
and overwrites it line by line instead of clearing the screen, so everything
printed before the prompt stays where it is.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Sequence
from io import StringIO
from typing import TextIO

from rich.cells import cell_len, get_character_cell_size

from promptkit.tui.ansi import RESET, clear_line, cursor_down, cursor_up, hide_cursor, show_cursor, strip_ansi


def fit_width(line: str, width: int) -> str:
    """
    Truncate *line* to *width* terminal cells, keeping escape sequences intact.

    Wide characters count as two cells; a truncated styled line is closed with
    ``RESET``.
    """
    if width <= 0 or cell_len(strip_ansi(line)) <= width:
        return line

    out: list[str] = []
    used = 0
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\x1b" and line[i + 1:i + 2] == "[":
            j = i + 2
            while j < len(line) and not line[j].isalpha():
                j += 1
            out.append(line[i:j + 1])
            i = j + 1
            continue
        size = get_character_cell_size(ch)
        if used + size > width:
            break
        out.append(ch)
        used += size
        i += 1
    return "".join(out) + RESET


class LiveRegion:
    """
    A repaintable block of terminal lines.

    After every operation the cursor rests at column 0 of the line directly
    below the region.  All operations are serialised by an internal lock, so
    background threads (spinner frames, draft updates) may paint while the
    caller keeps working.

    Parameters
    ----------
    output:
        Writable text stream, defaults to ``sys.stdout``.
    width:
        Terminal width used to truncate lines; ``0`` disables truncation.
        Lines wider than the terminal would wrap and break the line count.
    """

    def __init__(self, output: TextIO | None = None, width: int = 0) -> None:
        self._output: TextIO = output or sys.stdout
        self._width = width
        self._lock = threading.RLock()
        self._lines: list[str] = []
        self._cursor_hidden = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        """The lock serialising writes; hold it to batch several operations."""
        return self._lock

    @property
    def height(self) -> int:
        """Number of live (repaintable) lines currently on screen."""
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        """The live lines as last painted."""
        return list(self._lines)

    def paint(self, lines: Sequence[str]) -> None:
        """
        Replace the live region with *lines*.

        Parameters
        ----------
        lines:
            New content, one string per terminal row, without newlines.
        """
        new_lines = [fit_width(line, self._width) for line in lines]
        with self._lock:
            buf = StringIO()
            self._rewind(buf)
            for line in new_lines:
                buf.write(clear_line())
                buf.write(line)
                buf.write("\n")

            # Blank out rows the previous frame used but this one does not
            leftover = len(self._lines) - len(new_lines)
            if leftover > 0:
                for _ in range(leftover):
                    buf.write(clear_line())
                    buf.write("\n")
                buf.write(cursor_up(leftover))

            self._lines = new_lines
            self._write(buf.getvalue())

    def commit(self, lines: Sequence[str]) -> None:
        """Paint *lines* and make them permanent; the live region becomes empty."""
        with self._lock:
            self.paint(lines)
            self._lines = []

    def clear(self) -> None:
        """Erase the live region and leave the cursor where it started."""
        with self._lock:
            height = len(self._lines)
            if height == 0:
                return
            buf = StringIO()
            self._rewind(buf)
            for _ in range(height):
                buf.write(clear_line())
                buf.write("\n")
            buf.write(cursor_up(height))
            self._lines = []
            self._write(buf.getvalue())

    def repaint_line(self, index: int, text: str) -> None:
        """
        Rewrite one row of the live region without touching its siblings.

        Indexes outside the live region are ignored.
        """
        text = fit_width(text, self._width)
        with self._lock:
            height = len(self._lines)
            if not 0 <= index < height:
                return
            if self._lines[index] == text:
                return
            offset = height - index
            self._lines[index] = text
            self._write(
                f"{cursor_up(offset)}\r{clear_line()}{text}\r{cursor_down(offset)}"
            )

    def hide_cursor(self) -> None:
        with self._lock:
            if not self._cursor_hidden:
                self._cursor_hidden = True
                self._write(hide_cursor())

    def show_cursor(self) -> None:
        with self._lock:
            if self._cursor_hidden:
                self._cursor_hidden = False
                self._write(show_cursor())

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _rewind(self, buf: StringIO) -> None:
        """Move the cursor to column 0 of the first live line."""
        buf.write("\r")
        buf.write(cursor_up(len(self._lines)))

    def _write(self, data: str) -> None:
        """Write data to the output stream and flush."""
        self._output.write(data)
        self._output.flush()
