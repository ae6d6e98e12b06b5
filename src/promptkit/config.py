"""
Settings for promptkit.

``PromptSettings`` collects the knobs shared by every prompt and live output
primitive: colour handling, escape-key timing, glyphs and the editor
override.  Settings can be built programmatically or loaded from YAML.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, TextIO

import yaml

ColorMode = Literal["auto", "always", "never"]

DEFAULT_SPINNER_FRAMES: tuple[str, ...] = (
    "⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏",
)


def get_color_mode() -> ColorMode:
    """Resolve the colour mode from ``NO_COLOR`` / ``FORCE_COLOR``."""
    if os.environ.get("NO_COLOR"):
        return "never"
    force = os.environ.get("FORCE_COLOR")
    if force is not None and force not in ("0", "false"):
        return "always"
    return "auto"


@dataclass(frozen=True)
class PromptSymbols:
    """Glyphs used when rendering prompts and live output."""

    prefix: str = "?"
    pointer: str = "❯"
    checked: str = "◉"
    unchecked: str = "○"
    success: str = "✓"
    failure: str = "✗"
    warning: str = "⚠"
    mask: str = "*"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromptSymbols:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown symbol(s): {', '.join(sorted(unknown))}")
        return cls(**{k: str(v) for k, v in data.items()})

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class PromptSettings:
    """
    Shared configuration for prompts and live output.

    Example YAML:
        color: auto
        escape_timeout_ms: 50
        page_size: 8
        spinner_interval_ms: 80
        symbols:
          pointer: ">"
          mask: "•"
        editor: nano
    """

    color: ColorMode = field(default_factory=get_color_mode)
    escape_timeout_ms: int = 50  # Window for assembling ESC sequences
    page_size: int = 10  # Visible rows in select-style lists
    spinner_interval_ms: int = 80
    spinner_frames: tuple[str, ...] = DEFAULT_SPINNER_FRAMES
    symbols: PromptSymbols = field(default_factory=PromptSymbols)
    editor: str | None = field(
        default_factory=lambda: os.environ.get("PROMPTKIT_EDITOR") or None
    )

    def __post_init__(self) -> None:
        if self.color not in ("auto", "always", "never"):
            raise ValueError(f"Invalid color mode: {self.color!r}")
        if self.escape_timeout_ms < 0:
            raise ValueError("escape_timeout_ms must not be negative")
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")
        if self.spinner_interval_ms <= 0:
            raise ValueError("spinner_interval_ms must be positive")
        if not self.spinner_frames:
            raise ValueError("spinner_frames must not be empty")

    @property
    def escape_timeout(self) -> float:
        """Escape window in seconds."""
        return self.escape_timeout_ms / 1000

    @property
    def spinner_interval(self) -> float:
        """Spinner frame interval in seconds."""
        return self.spinner_interval_ms / 1000

    def use_color(self, stream: TextIO) -> bool:
        """Decide whether SGR colour codes should be written to *stream*."""
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromptSettings:
        """Create settings from a dictionary."""
        kwargs: dict[str, Any] = {}
        for name in ("color", "escape_timeout_ms", "page_size", "spinner_interval_ms", "editor"):
            if name in data:
                kwargs[name] = data[name]
        if "spinner_frames" in data:
            kwargs["spinner_frames"] = tuple(data["spinner_frames"])
        if "symbols" in data:
            kwargs["symbols"] = PromptSymbols.from_dict(data["symbols"] or {})
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path) -> PromptSettings:
        """Load settings from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> PromptSettings:
        """Load settings from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a dictionary."""
        return {
            "color": self.color,
            "escape_timeout_ms": self.escape_timeout_ms,
            "page_size": self.page_size,
            "spinner_interval_ms": self.spinner_interval_ms,
            "spinner_frames": list(self.spinner_frames),
            "symbols": self.symbols.to_dict(),
            "editor": self.editor,
        }


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_settings: PromptSettings | None = None


def get_settings() -> PromptSettings:
    """Return the process default settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = PromptSettings()
    return _settings


def set_settings(settings: PromptSettings | None) -> None:
    """Replace the process default settings (``None`` resets to defaults)."""
    global _settings
    _settings = settings
