"""
Exception hierarchy for promptkit.

Validation failures are not exceptions: prompts render them inline and ask
again.
"""

from __future__ import annotations


class PromptError(Exception):
    """Base class for every error raised by promptkit."""


class PromptCancelledError(PromptError):
    """The user cancelled the prompt (Ctrl-C, Escape, SIGINT or end of input)."""

    def __init__(self, message: str = "Prompt was cancelled") -> None:
        super().__init__(message)


class TerminalUnavailableError(PromptError):
    """Raw mode cannot be acquired, e.g. stdin is not an interactive terminal."""


class EditorLaunchError(PromptError):
    """The external editor could not be started or exited unsuccessfully."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
