"""
Prompt base class and the session that drives it.

A :class:`Prompt` is a small state machine: it renders its current state as a
list of lines and reacts to one key at a time, eventually returning
:class:`Submit`.  A :class:`PromptSession` owns everything around that loop:
raw mode, the live region, cancellation and validation of submitted values.
"""

from __future__ import annotations

import asyncio
import signal
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, Literal, NoReturn, TypeVar

from promptkit.config import PromptSettings, get_settings
from promptkit.errors import PromptCancelledError
from promptkit.logging import get_logger
from promptkit.tui.keys import Key
from promptkit.tui.renderer import LiveRegion
from promptkit.tui.terminal import Terminal
from promptkit.tui.theme import Theme
from promptkit.validation import ValidationResult, Validator, ValidatorLike, as_validator

T = TypeVar("T")
R = TypeVar("R")

logger = get_logger("prompts")

SessionStatus = Literal["running", "finished", "cancelled"]


class Submit(Generic[T]):
    """Returned by :meth:`Prompt.handle_key` to propose *value* as the answer."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Submit({self.value!r})"


class Prompt(ABC, Generic[T]):
    """
    Base class for interactive prompts.

    Subclasses implement :meth:`render` and :meth:`handle_key`; everything
    else (raw mode, painting, cancellation, validation) is handled by
    :class:`PromptSession`.

    Parameters
    ----------
    config:
        The prompt's configuration record.  Must expose ``message`` and may
        expose ``validate``.
    settings:
        Shared settings; defaults to :func:`~promptkit.config.get_settings`.
    """

    #: Key names that abort the prompt
    cancel_keys: frozenset[str] = frozenset({"ctrl+c"})

    def __init__(self, config: Any, settings: PromptSettings | None = None) -> None:
        self.config = config
        self.settings = settings or get_settings()
        self.theme = Theme(enabled=False)
        self.session: PromptSession[T] | None = None

        self.error: str | None = None
        self.notice: str | None = None

        self._validators: list[Validator[Any]] = []
        own = as_validator(getattr(config, "validate", None))
        if own is not None:
            self._validators.append(own)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    @abstractmethod
    def render(self) -> list[str]:
        """Return the live lines for the current state."""

    @abstractmethod
    def handle_key(self, key: Key) -> Submit[T] | None:
        """React to *key*; return :class:`Submit` to propose an answer."""

    def start(self, session: PromptSession[T]) -> None:
        """Called once before the first render."""
        self.session = session

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def add_validator(self, validator: ValidatorLike) -> None:
        """Chain an extra validator after the configured one."""
        coerced = as_validator(validator)
        if coerced is not None:
            self._validators.append(coerced)

    def check(self, value: T) -> ValidationResult:
        """Run every validator; the first failure wins."""
        for validator in self._validators:
            result = validator.validate(value)
            if not result.ok:
                return result
        return ValidationResult.valid()

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    @property
    def symbols(self):
        return self.settings.symbols

    def header(self, hint: str = "") -> str:
        """The question line prefix: glyph, message and an optional hint."""
        parts = [self.theme.primary(self.symbols.prefix), self.theme.title(self.config.message)]
        if hint:
            parts.append(self.theme.muted(hint))
        return " ".join(parts)

    def status_lines(self) -> list[str]:
        """Inline error and notice lines shown under the prompt."""
        lines: list[str] = []
        if self.error:
            lines.append(f"  {self.theme.error(self.symbols.failure + ' ' + self.error)}")
        if self.notice:
            lines.append(f"  {self.theme.warning(self.notice)}")
        return lines

    def format_value(self, value: T) -> str:
        """Text shown for the accepted answer."""
        return str(value)

    def render_done(self, value: T) -> list[str]:
        """Permanent lines written once the answer is accepted."""
        return [
            f"{self.theme.success(self.symbols.success)} "
            f"{self.theme.title(self.config.message)} "
            f"{self.theme.primary(self.format_value(value))}"
        ]

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def run(self, terminal: Terminal | None = None) -> T:
        """Run the prompt to completion, blocking the calling thread."""
        return PromptSession(self, terminal).run()

    async def ask(self, terminal: Terminal | None = None) -> T:
        """Run the prompt in a worker thread without blocking the event loop."""
        return await run_in_thread(self.run, terminal or default_terminal(self.settings))


def default_terminal(settings: PromptSettings) -> Terminal:
    return Terminal(escape_timeout=settings.escape_timeout)


async def run_in_thread(run: Callable[[Terminal], R], terminal: Terminal) -> R:
    """
    Await ``run(terminal)`` executed in a worker thread.

    While it runs, SIGINT is routed to :meth:`Terminal.interrupt` so the
    blocked key read wakes up and the prompt is cancelled cleanly.  If the
    awaiting task is itself cancelled, the worker is interrupted the same
    way and awaited, so raw mode is released before the cancellation
    propagates.
    """
    loop = asyncio.get_running_loop()
    installed = False
    try:
        loop.add_signal_handler(signal.SIGINT, terminal.interrupt)
        installed = True
    except (NotImplementedError, RuntimeError, ValueError):
        logger.debug("SIGINT handler not installed; relying on Ctrl-C key")
    worker = asyncio.ensure_future(asyncio.to_thread(run, terminal))
    try:
        return await asyncio.shield(worker)
    except asyncio.CancelledError:
        logger.debug("Awaiting task cancelled; interrupting prompt worker")
        terminal.interrupt()
        try:
            await worker
        except PromptCancelledError:
            pass
        raise
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


class PromptSession(Generic[T]):
    """
    Drives one prompt: read a key, update state, repaint, until done.

    Raw mode is held for the whole session and released on every exit path.
    Submitted values that fail validation are not errors: the message is
    painted under the prompt and input continues.
    """

    def __init__(self, prompt: Prompt[T], terminal: Terminal | None = None) -> None:
        self.prompt = prompt
        self.terminal = terminal or default_terminal(prompt.settings)
        self.region = LiveRegion(self.terminal.output, width=self.terminal.width)
        self.status: SessionStatus = "running"

    def run(self) -> T:
        prompt = self.prompt
        prompt.theme = Theme(enabled=prompt.settings.use_color(self.terminal.output))

        with self.terminal.raw():
            logger.debug("Session started: %s", type(prompt).__name__)
            self.region.hide_cursor()
            try:
                prompt.start(self)
                self.paint()
                while True:
                    try:
                        key = self.terminal.read_key()
                    except EOFError:
                        self.cancel("end of input")

                    if key.name in prompt.cancel_keys:
                        self.cancel(key.name)

                    prompt.error = None
                    outcome = prompt.handle_key(key)
                    if isinstance(outcome, Submit):
                        result = prompt.check(outcome.value)
                        if result.ok:
                            self.region.commit(prompt.render_done(outcome.value))
                            self.status = "finished"
                            logger.debug("Session finished: %s", type(prompt).__name__)
                            return outcome.value
                        prompt.error = result.message
                    self.paint()
            finally:
                if self.status != "finished":
                    self.region.clear()
                self.region.show_cursor()

    def paint(self) -> None:
        self.region.paint(self.prompt.render() + self.prompt.status_lines())

    def cancel(self, reason: str) -> NoReturn:
        """Abort the session, raising :class:`PromptCancelledError`."""
        self.status = "cancelled"
        logger.debug("Session cancelled (%s): %s", reason, type(self.prompt).__name__)
        raise PromptCancelledError()
