"""
Raw-mode terminal access.

:class:`Terminal` owns the tty: it switches stdin into raw, non-canonical,
no-echo mode for the lifetime of a prompt, decodes keystrokes into
:class:`~promptkit.tui.keys.Key` objects and always puts the original mode
back.  :class:`ScriptedTerminal` is an in-memory stand-in fed from a list of
keys, used to drive prompts without a tty.
"""

from __future__ import annotations

import os
import shutil
import sys
import threading
from collections import deque
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from io import StringIO
from typing import Any, TextIO

from promptkit.errors import TerminalUnavailableError
from promptkit.logging import get_logger
from promptkit.tui.keys import KEY_CTRL_C, KEY_ESCAPE, Key, key_for, parse_key, split_sequences

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import select
    import termios

logger = get_logger("terminal")

# How long a blocked read sleeps before re-checking for an interrupt
_POLL_INTERVAL = 0.1


class Terminal:
    """
    Keyboard input and raw-mode ownership for one interactive stream.

    Parameters
    ----------
    stdin:
        Input stream backed by a tty; defaults to ``sys.stdin``.
    stdout:
        Output stream prompts render to; defaults to ``sys.stdout``.
    escape_timeout:
        Seconds to wait after a lone ESC byte for the rest of an escape
        sequence before reporting the Escape key.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        escape_timeout: float = 0.05,
    ) -> None:
        self.input: TextIO = stdin or sys.stdin
        self.output: TextIO = stdout or sys.stdout
        self.escape_timeout = escape_timeout

        self._lock = threading.RLock()
        self._depth = 0
        self._saved_mode: list[Any] | None = None
        self._interrupted = threading.Event()

        self._pending: deque[Key] = deque()
        self._buffer = b""

    # ------------------------------------------------------------------
    # Raw mode
    # ------------------------------------------------------------------

    @property
    def is_raw(self) -> bool:
        """``True`` while at least one raw-mode acquisition is open."""
        return self._depth > 0

    @property
    def width(self) -> int:
        return shutil.get_terminal_size().columns

    def open(self) -> None:
        """
        Acquire raw mode.

        Acquisitions nest: only the outermost one touches the tty, and the
        original mode is restored when the matching :meth:`close` runs.

        Raises
        ------
        TerminalUnavailableError
            If stdin is not an interactive terminal.
        """
        with self._lock:
            if self._depth == 0:
                fd = self._fileno()
                self._saved_mode = termios.tcgetattr(fd)
                self._set_raw(fd)
                logger.debug("Raw mode acquired on fd %d", fd)
            self._depth += 1

    def close(self) -> None:
        """Release one raw-mode acquisition."""
        with self._lock:
            if self._depth == 0:
                return
            self._depth -= 1
            if self._depth == 0:
                self._restore()
                self._pending.clear()
                self._buffer = b""
                logger.debug("Raw mode released")

    @contextmanager
    def raw(self) -> Iterator[Terminal]:
        """Hold raw mode for the duration of a ``with`` block."""
        self.open()
        try:
            yield self
        finally:
            self.close()

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Hand the tty back in its original mode, e.g. to a child process."""
        with self._lock:
            active = self._depth > 0
            if active:
                self._restore()
        try:
            yield
        finally:
            if active:
                with self._lock:
                    self._set_raw(self._fileno())
                    logger.debug("Raw mode re-acquired after suspend")

    def _fileno(self) -> int:
        if _IS_WINDOWS:
            raise TerminalUnavailableError("Raw terminal mode is not supported on Windows")
        try:
            fd = self.input.fileno()
        except (AttributeError, OSError, ValueError) as exc:
            raise TerminalUnavailableError("Input stream has no file descriptor") from exc
        if not os.isatty(fd):
            raise TerminalUnavailableError("Input is not an interactive terminal")
        return fd

    @staticmethod
    def _set_raw(fd: int) -> None:
        """Apply raw settings: no echo, no canonical mode, no signal keys."""
        mode = termios.tcgetattr(fd)
        # LFLAG: clear ICANON, ECHO, IEXTEN and ISIG so Ctrl-C arrives as a byte
        mode[3] &= ~(termios.ICANON | termios.ECHO | termios.IEXTEN | termios.ISIG)
        # IFLAG: clear IXON, IXOFF, ICRNL, INLCR, IGNCR
        mode[1] &= ~(
            termios.IXON | termios.IXOFF | termios.ICRNL | termios.INLCR | termios.IGNCR
        )
        mode[6][termios.VMIN] = 1
        mode[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, mode)

    def _restore(self) -> None:
        if self._saved_mode is None:
            return
        termios.tcsetattr(self.input.fileno(), termios.TCSANOW, self._saved_mode)

    # ------------------------------------------------------------------
    # Interrupts
    # ------------------------------------------------------------------

    def interrupt(self) -> None:
        """
        Make the current (or next) :meth:`read_key` return Ctrl-C.

        Safe to call from a signal handler or another thread.
        """
        self._interrupted.set()

    # ------------------------------------------------------------------
    # Key input
    # ------------------------------------------------------------------

    def read_key(self) -> Key:
        """
        Block until one key is available.

        Raises
        ------
        EOFError
            When the input stream is exhausted.
        """
        fd = self._fileno()
        while True:
            if self._interrupted.is_set():
                self._interrupted.clear()
                self._pending.clear()
                return KEY_CTRL_C
            if self._pending:
                return self._pending.popleft()

            try:
                if self._buffer.startswith(b"\x1b"):
                    data = self._read_chunk(fd, self.escape_timeout)
                    if data is None:
                        self._flush_escape()
                        continue
                else:
                    data = self._read_chunk(fd, _POLL_INTERVAL)
                    if data is None:
                        continue
            except KeyboardInterrupt:
                return KEY_CTRL_C

            if not data:
                raise EOFError("Terminal input closed")
            self._feed(data)

    def keys(self) -> Iterator[Key]:
        """Lazily yield keys until the input is exhausted."""
        while True:
            try:
                yield self.read_key()
            except EOFError:
                return

    @staticmethod
    def _read_chunk(fd: int, timeout: float) -> bytes | None:
        """Read whatever is available, or ``None`` if *timeout* elapsed first."""
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None
        return os.read(fd, 1024)

    def _feed(self, data: bytes) -> None:
        seqs, self._buffer = split_sequences(self._buffer + data)
        for seq in seqs:
            key = parse_key(seq)
            if key.name == "unknown":
                logger.debug("Dropping unrecognised input sequence %r", seq)
                continue
            self._pending.append(key)

    def _flush_escape(self) -> None:
        """The escape window elapsed: a lone ESC is the Escape key."""
        if self._buffer == b"\x1b":
            self._pending.append(KEY_ESCAPE)
        else:
            logger.debug("Dropping incomplete escape sequence %r", self._buffer)
        self._buffer = b""


class ScriptedTerminal(Terminal):
    """
    A terminal that replays a fixed sequence of keys.

    Raw-mode acquisitions are counted but never touch a real tty, so the
    balance of :meth:`open`/:meth:`close` can be asserted on.  Once the
    script is exhausted :meth:`read_key` raises ``EOFError``.

    Parameters
    ----------
    keys:
        Keys to deliver, either ``Key`` objects or short names accepted by
        :func:`~promptkit.tui.keys.key_for` (``"a"``, ``"enter"``,
        ``"ctrl+c"``).
    stdout:
        Output stream; defaults to a fresh ``StringIO``.
    width:
        Reported terminal width.
    """

    def __init__(
        self,
        keys: Iterable[str | Key] = (),
        stdout: TextIO | None = None,
        width: int = 80,
    ) -> None:
        super().__init__(stdin=StringIO(), stdout=stdout or StringIO())
        self._script: deque[Key] = deque(key_for(k) for k in keys)
        self._width = width
        self.acquisitions = 0
        self.suspensions = 0

    @property
    def width(self) -> int:
        return self._width

    def feed(self, *keys: str | Key) -> None:
        """Append more keys to the script."""
        self._script.extend(key_for(k) for k in keys)

    @property
    def remaining(self) -> int:
        return len(self._script)

    def open(self) -> None:
        with self._lock:
            if self._depth == 0:
                self.acquisitions += 1
            self._depth += 1

    def close(self) -> None:
        with self._lock:
            if self._depth > 0:
                self._depth -= 1

    @contextmanager
    def suspended(self) -> Iterator[None]:
        self.suspensions += 1
        yield

    def read_key(self) -> Key:
        if self._interrupted.is_set():
            self._interrupted.clear()
            return KEY_CTRL_C
        if not self._script:
            raise EOFError("Key script exhausted")
        return self._script.popleft()
