"""Determinate progress bar."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

from promptkit.config import PromptSettings, get_settings
from promptkit.tui.renderer import LiveRegion
from promptkit.tui.theme import Theme


class ProgressBar:
    """
    A single-line progress bar: ``[████░░░░]  50% 5/10 message``.

    Safe to update from several threads.  After :meth:`complete`,
    :meth:`fail` or :meth:`stop` the bar is frozen and further calls do
    nothing.
    """

    def __init__(
        self,
        total: int | float = 100,
        message: str = "",
        width: int = 40,
        fill: str = "█",
        empty: str = "░",
        output: TextIO | None = None,
        settings: PromptSettings | None = None,
    ) -> None:
        if total <= 0:
            raise ValueError("total must be positive")
        if width < 1:
            raise ValueError("width must be at least 1")
        self.total = total
        self.width = width
        self.fill = fill
        self.empty = empty
        self.settings = settings or get_settings()
        self.output = output or sys.stdout
        self.theme = Theme(enabled=self.settings.use_color(self.output))
        self.region = LiveRegion(self.output)

        self._current: int | float = 0
        self._message = message
        self._frozen = False
        self._lock = threading.Lock()
        self.region.paint([self.render()])

    @property
    def current(self) -> int | float:
        return self._current

    @property
    def fraction(self) -> float:
        return min(1.0, max(0.0, self._current / self.total))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def render(self) -> str:
        filled = int(self.fraction * self.width)
        bar = self.theme.primary(self.fill * filled) + self.theme.muted(self.empty * (self.width - filled))
        percent = f"{int(self.fraction * 100):>3}%"
        text = f"[{bar}] {percent} {self._current}/{self.total}"
        return f"{text} {self._message}" if self._message else text

    def update(self, current: int | float, message: str | None = None) -> None:
        with self._lock:
            self._set(current, message)

    def increment(self, amount: int | float = 1) -> None:
        with self._lock:
            self._set(self._current + amount, None)

    def complete(self, message: str | None = None) -> None:
        with self._lock:
            if self._frozen:
                return
            self._current = self.total
            self._finish(self.theme.success(self.settings.symbols.success), message)

    def fail(self, message: str | None = None) -> None:
        with self._lock:
            if self._frozen:
                return
            self._finish(self.theme.error(self.settings.symbols.failure), message)

    def stop(self) -> None:
        """Freeze the bar where it is."""
        with self._lock:
            if self._frozen:
                return
            self._frozen = True
            self.region.commit([self.render()])

    def _set(self, current: int | float, message: str | None) -> None:
        if self._frozen:
            return
        self._current = min(max(current, 0), self.total)
        if message is not None:
            self._message = message
        self.region.paint([self.render()])

    def _finish(self, glyph: str, message: str | None) -> None:
        if message is not None:
            self._message = message
        self._frozen = True
        self.region.commit([f"{glyph} {self.render()}"])
