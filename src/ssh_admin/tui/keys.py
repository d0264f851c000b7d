"""
Key parsing for terminal input.

Translates raw bytes read from stdin into structured ``Key`` objects that
the screen runtime dispatches on.
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


KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_SPACE = Key(name="space", char=" ")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")
KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")


def ctrl(letter: str) -> Key:
    """Build the ``Key`` produced by Ctrl+*letter*."""
    letter = letter.lower()
    return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)


def char(ch: str) -> Key:
    """Build the ``Key`` for a printable character."""
    if ch == " ":
        return KEY_SPACE
    return Key(name=ch, char=ch)


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

_CSI_SIMPLE: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": Key(name="tab", char="\t", shift=True),
}

# CSI <number> ~
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
}

# ESC O <letter>
_SS3: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
}


def _modifier_flags(code: int) -> tuple[bool, bool, bool]:
    """
    Decode an xterm modifier code into ``(shift, alt, ctrl)``.

    The value is 1-based: ``1 + shift + 2*alt + 4*ctrl``.
    """
    code -= 1
    return bool(code & 1), bool(code & 2), bool(code & 4)


def _with_modifiers(base: Key, mod: str) -> Key:
    try:
        shift, alt, ctrl_ = _modifier_flags(int(mod))
    except ValueError:
        return base
    return Key(name=base.name, char=base.char, ctrl=ctrl_, alt=alt, shift=shift)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse one key sequence into a ``Key``.

    Handles printable ASCII and UTF-8 characters, Ctrl+letter, Alt+char,
    CSI and SS3 sequences, and xterm ``;N`` modifier suffixes
    (``ESC [ 1 ; 5 A`` is Ctrl+Up).  Use :func:`split_keys` first when
    *data* may hold several key presses.
    """
    if not data:
        return Key(name="unknown")

    if data[0] == 0x1B:
        if len(data) == 1:
            return KEY_ESCAPE
        if data[1:2] == b"[":
            return _parse_csi(data[2:])
        if data[1:2] == b"O":
            return _SS3.get(data[2:3].decode("ascii", "replace"), Key(name="unknown"))
        if len(data) == 2:
            ch = chr(data[1])
            if ch.isprintable():
                return Key(name=f"alt+{ch}", char=ch, alt=True)
        return Key(name="unknown")

    byte = data[0]
    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if byte == 0x00:
        return Key(name="ctrl+space", char=" ", ctrl=True)
    if 1 <= byte <= 26:
        return ctrl(chr(byte + 96))

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return Key(name="unknown")
    if len(text) == 1 and text.isprintable():
        return char(text)
    return Key(name="unknown")


def _parse_csi(payload: bytes) -> Key:
    """Parse the bytes following ``ESC [``."""
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return Key(name="unknown")
    if not text:
        return Key(name="unknown")

    final = text[-1]
    params = text[:-1].split(";") if len(text) > 1 else []

    if final == "~":
        if not params or not params[0].isdigit():
            return Key(name="unknown")
        base = _CSI_TILDE.get(int(params[0]))
        if base is None:
            return Key(name="unknown")
        return _with_modifiers(base, params[1]) if len(params) == 2 else base

    base = _CSI_SIMPLE.get(final)
    if base is None:
        return Key(name="unknown")
    if len(params) == 2:
        return _with_modifiers(base, params[1])
    return base


def split_keys(data: bytes) -> list[bytes]:
    """
    Split a raw read buffer into individual key sequences.

    A single ``os.read`` may return several key presses at once (typing
    fast, pasting).  Escape sequences are kept whole; UTF-8 characters are
    kept whole.

    >>> split_keys(b"ab\\x1b[A\\r")
    [b'a', b'b', b'\\x1b[A', b'\\r']
    """
    keys: list[bytes] = []
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]
        if byte == 0x1B:
            if i + 1 >= n:
                keys.append(data[i:])
                break
            nxt = data[i + 1]
            if nxt == 0x5B:  # '['
                j = i + 2
                # Parameter bytes, then one final byte in 0x40-0x7e
                while j < n and not (0x40 <= data[j] <= 0x7E):
                    j += 1
                keys.append(data[i:j + 1])
                i = j + 1
                continue
            if nxt == 0x4F:  # 'O'
                keys.append(data[i:i + 3])
                i += 3
                continue
            if nxt == 0x1B:
                keys.append(data[i:i + 1])
                i += 1
                continue
            keys.append(data[i:i + 2])
            i += 2
            continue

        if byte < 0x80:
            keys.append(data[i:i + 1])
            i += 1
            continue

        # UTF-8 lead byte determines the sequence length
        if byte >= 0xF0:
            length = 4
        elif byte >= 0xE0:
            length = 3
        elif byte >= 0xC0:
            length = 2
        else:
            length = 1
        keys.append(data[i:i + length])
        i += length
    return keys
