"""
Key parsing for terminal input.

Translates raw bytes read from stdin into structured ``Key`` objects that
the prompts dispatch on.  A single ``read()`` may return several keys (a
paste, or keys typed faster than they are consumed), so
:func:`split_sequences` first cuts a chunk into one byte sequence per key.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'enter'``, ``'up'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_printable(self) -> bool:
        """``True`` for a plain character that may be inserted into a buffer."""
        return bool(self.char) and self.char.isprintable() and not (self.ctrl or self.alt)


# ---------------------------------------------------------------------------
# Common key constants
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_SHIFT_TAB = Key(name="tab", char="\t", shift=True)
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_INSERT = Key(name="insert")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")

KEY_SPACE = Key(name="space", char=" ")
KEY_CTRL_C = Key(name="ctrl+c", char="c", ctrl=True)

KEY_UNKNOWN = Key(name="unknown")

NAMED_KEYS: dict[str, Key] = {
    k.name: k
    for k in (
        KEY_ENTER, KEY_TAB, KEY_ESCAPE, KEY_BACKSPACE, KEY_DELETE, KEY_INSERT,
        KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_HOME, KEY_END,
        KEY_PAGE_UP, KEY_PAGE_DOWN, KEY_SPACE,
    )
}


# ---------------------------------------------------------------------------
# CSI (Control Sequence Introducer) lookup tables
# ---------------------------------------------------------------------------

_CSI_SIMPLE: dict[bytes, Key] = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
    b"C": KEY_RIGHT,
    b"D": KEY_LEFT,
    b"H": KEY_HOME,
    b"F": KEY_END,
    b"Z": KEY_SHIFT_TAB,
}

# Sequences of the form CSI <number> ~ (e.g. \x1b[3~  for delete)
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    2: KEY_INSERT,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
}

# SS3 sequences (ESC O <letter>), sent by terminals in application cursor mode
_SS3: dict[bytes, Key] = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
    b"C": KEY_RIGHT,
    b"D": KEY_LEFT,
    b"H": KEY_HOME,
    b"F": KEY_END,
}


def _modifier_flags(code: int) -> tuple[bool, bool, bool]:
    """
    Decode an xterm modifier code into ``(shift, alt, ctrl)`` booleans.

    The modifier value is 1-based: ``value = 1 + (shift) + 2*(alt) + 4*(ctrl)``.
    """
    code -= 1
    return bool(code & 1), bool(code & 2), bool(code & 4)


# ---------------------------------------------------------------------------
# Chunk splitting
# ---------------------------------------------------------------------------

def _utf8_width(lead: int) -> int:
    if 0xC0 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF7:
        return 4
    return 1


def split_sequences(data: bytes) -> tuple[list[bytes], bytes]:
    """
    Cut *data* into one byte sequence per key press.

    Returns
    -------
    tuple[list[bytes], bytes]
        The complete sequences, and a trailing remainder that may still grow
        into a key (a lone ESC, an unterminated CSI sequence or a truncated
        UTF-8 character).  Callers prepend the remainder to the next read.
    """
    seqs: list[bytes] = []
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]

        if byte == 0x1B:
            if i + 1 >= n:
                return seqs, data[i:]
            nxt = data[i + 1]
            if nxt == ord("["):
                # CSI: parameter bytes until a final byte in 0x40-0x7e
                j = i + 2
                while j < n and not 0x40 <= data[j] <= 0x7E:
                    j += 1
                if j >= n:
                    return seqs, data[i:]
                seqs.append(data[i:j + 1])
                i = j + 1
                continue
            if nxt == ord("O"):
                if i + 2 >= n:
                    return seqs, data[i:]
                seqs.append(data[i:i + 3])
                i += 3
                continue
            if nxt == 0x1B:
                seqs.append(data[i:i + 1])
                i += 1
                continue
            # ESC <char> is Alt+char
            width = _utf8_width(nxt)
            if i + 1 + width > n:
                return seqs, data[i:]
            seqs.append(data[i:i + 1 + width])
            i += 1 + width
            continue

        width = _utf8_width(byte)
        if i + width > n:
            return seqs, data[i:]
        seqs.append(data[i:i + width])
        i += width

    return seqs, b""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse one key's worth of raw terminal bytes into a ``Key`` object.

    Handles printable ASCII and UTF-8 characters, Ctrl+letter combinations
    (bytes 0x01-0x1a), Alt+character, CSI and SS3 sequences including
    xterm-style modifier suffixes (e.g. ``CSI 1;5C`` for Ctrl+Right).
    Anything else yields a key named ``'unknown'``.

    Parameters
    ----------
    data:
        Raw bytes for a single key, as produced by :func:`split_sequences`.
    """
    if not data:
        return KEY_UNKNOWN

    if data[0:1] == b"\x1b":
        if len(data) == 1:
            return KEY_ESCAPE

        second = data[1:2]
        if second == b"[":
            return _parse_csi(data[2:])
        if second == b"O":
            return _SS3.get(data[2:3], KEY_UNKNOWN)

        try:
            ch = data[1:].decode("utf-8")
        except UnicodeDecodeError:
            return KEY_UNKNOWN
        if len(ch) == 1 and ch.isprintable():
            return Key(name=f"alt+{ch}", char=ch, alt=True)
        if len(data) == 2 and data[1] in (0x7F, 0x08):
            return Key(name="backspace", alt=True)
        return KEY_UNKNOWN

    byte = data[0]

    if byte == 0x0D or byte == 0x0A:  # CR or LF
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte == 0x7F or byte == 0x08:  # DEL or BS
        return KEY_BACKSPACE
    if byte == 0x00:
        return Key(name="ctrl+space", char=" ", ctrl=True)
    if 1 <= byte <= 26:
        letter = chr(byte + 96)  # 1 -> 'a', 2 -> 'b', ...
        return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)
    if byte < 0x20:
        return KEY_UNKNOWN

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if len(ch) == 1 and ch.isprintable():
        if ch == " ":
            return KEY_SPACE
        return Key(name=ch, char=ch)
    return KEY_UNKNOWN


def _parse_csi(payload: bytes) -> Key:
    """Parse the bytes *after* ``ESC [`` in a CSI sequence."""
    if not payload:
        return KEY_UNKNOWN

    if len(payload) == 1:
        return _CSI_SIMPLE.get(payload, KEY_UNKNOWN)

    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    # <num>~ or <num>;<mod>~
    if text.endswith("~"):
        parts = text[:-1].split(";")
        base = _CSI_TILDE.get(_safe_int(parts[0]) or -1)
        if base is None:
            return KEY_UNKNOWN
        if len(parts) == 2 and _safe_int(parts[1]) is not None:
            return _with_modifiers(base, _safe_int(parts[1]) or 1)
        return base

    # 1;<mod><letter>  (e.g. "1;5C" = Ctrl+Right)
    base = _CSI_SIMPLE.get(text[-1:].encode("ascii"))
    if base is not None and ";" in text:
        parts = text[:-1].split(";")
        mod = _safe_int(parts[-1])
        if mod is not None:
            return _with_modifiers(base, mod)

    return KEY_UNKNOWN


def _with_modifiers(base: Key, mod: int) -> Key:
    shift, alt, ctrl = _modifier_flags(mod)
    return Key(name=base.name, char=base.char, ctrl=ctrl, alt=alt, shift=shift)


def _safe_int(s: str) -> int | None:
    """Return ``int(s)`` or ``None`` if *s* is not a valid integer."""
    try:
        return int(s)
    except (ValueError, TypeError):
        return None


def key_for(spec: str | Key) -> Key:
    """
    Build a ``Key`` from a short description.

    ``"a"`` is the character key, ``"enter"``/``"up"``/``"space"`` are named
    keys and ``"ctrl+c"`` is a control combination.  Used to script input.
    """
    if isinstance(spec, Key):
        return spec
    if len(spec) == 1:
        return parse_key(spec.encode("utf-8"))
    if spec in NAMED_KEYS:
        return NAMED_KEYS[spec]
    if spec.startswith("ctrl+") and len(spec) == 6:
        return Key(name=spec, char=spec[-1], ctrl=True)
    raise ValueError(f"Unknown key: {spec!r}")
