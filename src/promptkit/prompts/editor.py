"""
External-editor prompt.

Enter hands the terminal to ``$VISUAL`` / ``$EDITOR`` (falling back to
``vi``) on a temporary file seeded with the default text; whatever the file
holds when the editor exits successfully becomes the answer.  A missing
editor or a non-zero exit offers to retry or cancel.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from promptkit.config import PromptSettings
from promptkit.errors import EditorLaunchError
from promptkit.logging import get_logger
from promptkit.prompts.base import Prompt, PromptSession, Submit
from promptkit.tui.keys import Key
from promptkit.validation import ValidatorLike

logger = get_logger("prompts.editor")

#: ``(command, path) -> exit status``; raises EditorLaunchError if it cannot start
Launcher = Callable[[list[str], Path], int]


@dataclass(frozen=True)
class EditorConfig:
    """
    Configuration for an editor prompt.

    Attributes
    ----------
    default:
        Initial file content.
    extension:
        Temp-file extension, which lets editors pick a syntax mode.
    editor:
        Command overriding settings and environment (may include arguments).
    wait_message:
        Shown while the editor runs.
    """

    message: str
    default: str = ""
    extension: str = "txt"
    editor: str | None = None
    required: bool = False
    wait_message: str = "Waiting for editor..."
    validate: ValidatorLike | None = None


def resolve_editor(config: EditorConfig, settings: PromptSettings) -> list[str]:
    """The editor command line, without the file argument."""
    command = (
        config.editor
        or settings.editor
        or os.environ.get("VISUAL")
        or os.environ.get("EDITOR")
        or "vi"
    )
    return shlex.split(command)


def run_editor(command: list[str], path: Path) -> int:
    """Run *command* on *path* in the foreground and return its exit status."""
    try:
        completed = subprocess.run([*command, str(path)], check=False)
    except OSError as exc:
        raise EditorLaunchError(f"Cannot start {command[0]}: {exc.strerror or exc}") from exc
    return completed.returncode


def edit_text(
    initial: str,
    command: list[str],
    extension: str = "txt",
    launcher: Launcher = run_editor,
) -> str:
    """
    Let the user edit *initial* in an external editor.

    Returns
    -------
    str
        The edited content with trailing whitespace removed.

    Raises
    ------
    EditorLaunchError
        If the editor cannot start or exits with a non-zero status.
    """
    fd, name = tempfile.mkstemp(prefix="promptkit-", suffix=f".{extension.lstrip('.')}")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(initial)
        logger.debug("Launching editor %s on %s", command, path)
        code = launcher(command, path)
        if code != 0:
            raise EditorLaunchError(f"Editor exited with code {code}", returncode=code)
        return path.read_text(encoding="utf-8").rstrip()
    finally:
        path.unlink(missing_ok=True)


class EditorPrompt(Prompt[str]):
    """Collect multi-line text through the user's editor."""

    config: EditorConfig
    cancel_keys = frozenset({"ctrl+c", "escape"})

    def __init__(
        self,
        config: EditorConfig,
        settings: PromptSettings | None = None,
        launcher: Launcher = run_editor,
    ) -> None:
        super().__init__(config, settings)
        self.launcher = launcher
        self.content = config.default
        self.phase: Literal["idle", "failed"] = "idle"
        self.failure = ""

    def render(self) -> list[str]:
        if self.phase == "failed":
            return [
                self.header(),
                f"  {self.theme.error(f'Editor failed: {self.failure}.')} "
                f"{self.theme.muted('Retry? (Y/n)')}",
            ]
        return [self.header("(press enter to open editor)")]

    def handle_key(self, key: Key) -> Submit[str] | None:
        if self.phase == "failed":
            if key.name in ("y", "Y", "enter"):
                return self.launch()
            if key.name in ("n", "N"):
                self.active_session().cancel("editor retry declined")
            return None

        if key.name == "enter":
            return self.launch()
        return None

    def active_session(self) -> PromptSession[str]:
        if self.session is None:
            raise RuntimeError("EditorPrompt must be driven by a PromptSession")
        return self.session

    def launch(self) -> Submit[str] | None:
        session = self.active_session()
        command = resolve_editor(self.config, self.settings)

        session.region.paint([self.theme.muted(f"  {self.config.wait_message}")])
        try:
            with session.terminal.suspended():
                session.region.show_cursor()
                try:
                    content = edit_text(self.content, command, self.config.extension, self.launcher)
                finally:
                    session.region.hide_cursor()
        except EditorLaunchError as exc:
            logger.warning("Editor failed: %s", exc)
            self.phase = "failed"
            self.failure = str(exc)
            return None

        self.phase = "idle"
        self.content = content
        if not content and self.config.required:
            self.error = "Required"
            return None
        return Submit(content)

    def format_value(self, value: str) -> str:
        lines = value.splitlines()
        if not lines:
            return "(empty)"
        if len(lines) == 1:
            return lines[0]
        return f"{lines[0]} … (+{len(lines) - 1} lines)"
