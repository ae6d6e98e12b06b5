"""
Single-line edit buffer.

The editing core shared by every text-style prompt: cursor movement,
insertion, deletion and the readline kill commands.  Rendering is left to the
prompt, which decides whether to show, mask or highlight the text.
"""

from __future__ import annotations

from collections.abc import Callable

from promptkit.tui.keys import Key


class LineBuffer:
    """
    Editable text with a cursor.

    Key bindings
    ------------
    * Left/Right, Home/End, Ctrl+A/Ctrl+E move the cursor
    * Backspace / Delete (and Ctrl+D) remove a character
    * Ctrl+U kills to the start, Ctrl+K to the end, Ctrl+W the previous word

    Parameters
    ----------
    text:
        Initial content; the cursor starts at its end.
    accept:
        Optional predicate deciding whether a candidate buffer produced by an
        insertion is allowed.  Rejected insertions leave the buffer unchanged.
    """

    def __init__(
        self,
        text: str = "",
        accept: Callable[[str], bool] | None = None,
    ) -> None:
        self._chars: list[str] = list(text)
        self._cursor: int = len(self._chars)
        self._accept = accept

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @text.setter
    def text(self, value: str) -> None:
        self._chars = list(value)
        self._cursor = len(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._chars)

    def split(self) -> tuple[str, str, str]:
        """Return ``(before, at_cursor, after)`` for rendering a fake cursor."""
        before = "".join(self._chars[:self._cursor])
        at = self._chars[self._cursor] if self._cursor < len(self._chars) else ""
        after = "".join(self._chars[self._cursor + 1:])
        return before, at, after

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert(self, text: str) -> bool:
        """Insert *text* at the cursor; returns ``False`` if it was rejected."""
        candidate = self._chars[:self._cursor] + list(text) + self._chars[self._cursor:]
        if self._accept is not None and not self._accept("".join(candidate)):
            return False
        self._chars = candidate
        self._cursor += len(text)
        return True

    def handle_key(self, key: Key) -> bool:  # noqa: C901 (complex but cohesive)
        """
        Apply an editing key.

        Returns
        -------
        bool
            ``True`` if the key is an editing key (even when it had no
            effect, e.g. Backspace at the start), ``False`` otherwise.
        """
        name = key.name

        if name == "left" and not key.ctrl:
            self._cursor = max(0, self._cursor - 1)
            return True

        if name == "right" and not key.ctrl:
            self._cursor = min(len(self._chars), self._cursor + 1)
            return True

        if name in ("home", "ctrl+a"):
            self._cursor = 0
            return True

        if name in ("end", "ctrl+e"):
            self._cursor = len(self._chars)
            return True

        # Word movement (Ctrl+Left / Ctrl+Right)
        if name == "left" and key.ctrl:
            self._cursor = self._word_boundary_left()
            return True

        if name == "right" and key.ctrl:
            self._cursor = self._word_boundary_right()
            return True

        if name == "backspace":
            if key.alt:
                return self.handle_key(Key(name="ctrl+w", char="w", ctrl=True))
            if self._cursor > 0:
                self._cursor -= 1
                del self._chars[self._cursor]
            return True

        if name in ("delete", "ctrl+d"):
            if self._cursor < len(self._chars):
                del self._chars[self._cursor]
            return True

        if name == "ctrl+k":
            self._chars = self._chars[:self._cursor]
            return True

        if name == "ctrl+u":
            self._chars = self._chars[self._cursor:]
            self._cursor = 0
            return True

        if name == "ctrl+w":
            boundary = self._word_boundary_left()
            self._chars = self._chars[:boundary] + self._chars[self._cursor:]
            self._cursor = boundary
            return True

        if key.is_printable:
            self.insert(key.char)
            return True

        return False

    # ------------------------------------------------------------------
    # Word boundary helpers
    # ------------------------------------------------------------------

    def _word_boundary_left(self) -> int:
        """Find the start of the word to the left of the cursor."""
        pos = self._cursor - 1
        while pos >= 0 and not self._chars[pos].isalnum():
            pos -= 1
        while pos >= 0 and self._chars[pos].isalnum():
            pos -= 1
        return pos + 1

    def _word_boundary_right(self) -> int:
        """Find the end of the word to the right of the cursor."""
        pos = self._cursor
        length = len(self._chars)
        while pos < length and not self._chars[pos].isalnum():
            pos += 1
        while pos < length and self._chars[pos].isalnum():
            pos += 1
        return pos
