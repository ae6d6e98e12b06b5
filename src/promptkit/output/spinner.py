"""
Animated spinner for long-running work.

The animation runs on a daemon thread; the caller's code keeps running and
may update the message at any time.  A spinner ends exactly once, via
:meth:`Spinner.succeed`, :meth:`Spinner.fail` or :meth:`Spinner.stop`, which
replaces the animation with a permanent status line.

Example::

    with Spinner("Installing") as sp:
        install()
        sp.update("Linking")
"""

from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import Literal, TextIO

from promptkit.config import PromptSettings, get_settings
from promptkit.logging import get_logger
from promptkit.tui.renderer import LiveRegion
from promptkit.tui.theme import Theme

logger = get_logger("output.spinner")

SpinnerPhase = Literal["idle", "running", "succeeded", "failed", "stopped"]


class Spinner:
    """
    A single-line spinner.

    Parameters
    ----------
    message:
        Text shown after the animated frame.
    output:
        Stream to draw on (default ``sys.stdout``).
    settings:
        Frames and interval come from here.
    """

    def __init__(
        self,
        message: str = "",
        output: TextIO | None = None,
        settings: PromptSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.output = output or sys.stdout
        self.theme = Theme(enabled=self.settings.use_color(self.output))
        self.region = LiveRegion(self.output)

        self._message = message
        self._frame = 0
        self._phase: SpinnerPhase = "idle"
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def phase(self) -> SpinnerPhase:
        return self._phase

    @property
    def message(self) -> str:
        return self._message

    @property
    def running(self) -> bool:
        return self._phase == "running"

    def start(self) -> Spinner:
        with self._lock:
            if self._phase != "idle":
                return self
            self._phase = "running"
            self.region.hide_cursor()
            self._draw()
            self._thread = threading.Thread(target=self._spin, name="promptkit-spinner", daemon=True)
            self._thread.start()
        logger.debug("Spinner started: %s", self._message)
        return self

    def update(self, message: str) -> None:
        """Change the message; ignored once the spinner has ended."""
        with self._lock:
            if self._phase not in ("idle", "running"):
                return
            self._message = message
            if self._phase == "running":
                self._draw()

    def succeed(self, message: str | None = None) -> None:
        self._finish("succeeded", self.theme.success(self.settings.symbols.success), message)

    def fail(self, message: str | None = None) -> None:
        self._finish("failed", self.theme.error(self.settings.symbols.failure), message)

    def stop(self, message: str | None = None) -> None:
        """End without a verdict; with no *message* the line is removed."""
        self._finish("stopped", "", message)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _spin(self) -> None:
        interval = self.settings.spinner_interval
        frames = len(self.settings.spinner_frames)
        while not self._stop_event.wait(interval):
            with self._lock:
                if self._phase != "running":
                    return
                self._frame = (self._frame + 1) % frames
                self._draw()

    def _draw(self) -> None:
        frame = self.settings.spinner_frames[self._frame]
        self.region.paint([f"{self.theme.primary(frame)} {self._message}"])

    def _finish(self, phase: SpinnerPhase, glyph: str, message: str | None) -> None:
        with self._lock:
            if self._phase in ("succeeded", "failed", "stopped"):
                return
            self._phase = phase
            self._stop_event.set()
            text = self._message if message is None else message
            if phase == "stopped" and message is None:
                self.region.clear()
            else:
                self.region.commit([f"{glyph} {text}" if glyph else text])
            self.region.show_cursor()
            thread, self._thread = self._thread, None

        if thread is not None and thread is not threading.current_thread():
            thread.join()
        logger.debug("Spinner %s: %s", phase, text)

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.succeed()
        else:
            self.fail()
