"""
Escape sequences written by the live region and the theme.

Only what the prompts draw with is here: one combined SGR sequence per
styled span, relative cursor movement, line erase and cursor visibility.
"""

from __future__ import annotations

import re

CSI = "\033["
RESET = f"{CSI}0m"

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

COLORS: dict[str, int] = {
    "red": 31,
    "green": 32,
    "yellow": 33,
    "cyan": 36,
}

_ATTRIBUTES = (("bold", 1), ("dim", 2), ("italic", 3), ("underline", 4), ("inverse", 7))


def sgr(*params: int) -> str:
    """Build a single Select Graphic Rendition sequence."""
    return f"{CSI}{';'.join(str(p) for p in params)}m"


def style(
    text: str,
    *,
    fg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    italic: bool = False,
    underline: bool = False,
    inverse: bool = False,
) -> str:
    """
    Wrap *text* in one SGR sequence and a trailing reset.

    Parameters
    ----------
    text:
        The span to style.
    fg:
        Colour name from :data:`COLORS`.
    bold, dim, italic, underline, inverse:
        Attribute flags.

    Returns
    -------
    str
        *text* unchanged when nothing was requested.

    Raises
    ------
    ValueError
        If *fg* is not a known colour name.
    """
    flags = {"bold": bold, "dim": dim, "italic": italic, "underline": underline, "inverse": inverse}
    params = [code for name, code in _ATTRIBUTES if flags[name]]
    if fg is not None:
        if fg not in COLORS:
            raise ValueError(f"Unknown colour {fg!r}; expected one of {', '.join(COLORS)}")
        params.insert(0, COLORS[fg])
    if not params:
        return text
    return f"{sgr(*params)}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Drop every CSI sequence, leaving what the user sees."""
    return _ANSI_RE.sub("", text)


def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A" if n > 0 else ""


def cursor_down(n: int = 1) -> str:
    return f"{CSI}{n}B" if n > 0 else ""


def clear_line() -> str:
    return f"{CSI}2K"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"
