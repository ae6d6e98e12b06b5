"""
Terminal plumbing: raw-mode input, key decoding and live-region rendering.
"""

from promptkit.tui.keys import Key, key_for, parse_key, split_sequences
from promptkit.tui.line_buffer import LineBuffer
from promptkit.tui.renderer import LiveRegion, fit_width
from promptkit.tui.terminal import ScriptedTerminal, Terminal
from promptkit.tui.theme import Theme

__all__ = [
    "Key",
    "LineBuffer",
    "LiveRegion",
    "ScriptedTerminal",
    "Terminal",
    "Theme",
    "fit_width",
    "key_for",
    "parse_key",
    "split_sequences",
]
