"""
ANSI escape sequence utilities for terminal rendering.

Provides colour constants, text styling, cursor control, and screen
manipulation primitives used by the screen runtime.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

_ANSI_RE = re.compile(r"\033\[[0-9;?]*[A-Za-z]")


class FG:
    """Standard ANSI foreground colours used by the screens."""

    RED = f"{CSI}31m"
    GREEN = f"{CSI}32m"
    YELLOW = f"{CSI}33m"
    CYAN = f"{CSI}36m"
    BRIGHT_BLACK = f"{CSI}90m"


# ---------------------------------------------------------------------------
# Text styling
# ---------------------------------------------------------------------------

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "underline": 4,
    "reverse": 7,
}


def style(
    text: str,
    *,
    fg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    underline: bool = False,
    reverse: bool = False,
) -> str:
    """
    Apply ANSI styling to *text*.

    Parameters
    ----------
    text:
        The string to style.
    fg:
        Foreground colour as an already-formed sequence (e.g. ``FG.RED``).
    bold, dim, underline, reverse:
        Boolean attribute flags.

    Returns
    -------
    str
        The text wrapped in escape sequences with a trailing ``RESET``, or
        *text* unchanged when no styling was requested.
    """
    parts: list[str] = []
    if fg is not None:
        parts.append(fg)

    attrs = {"bold": bold, "dim": dim, "underline": underline, "reverse": reverse}
    for attr_name, enabled in attrs.items():
        if enabled:
            parts.append(f"{CSI}{_STYLE_CODES[attr_name]}m")

    if not parts:
        return text
    return f"{''.join(parts)}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


# ---------------------------------------------------------------------------
# Cursor and screen control
# ---------------------------------------------------------------------------

def cursor_position(row: int, col: int) -> str:
    """Move cursor to absolute *row*, *col* (1-based)."""
    return f"{CSI}{row};{col}H"


def clear_line() -> str:
    """Erase the entire current line."""
    return f"{CSI}2K"


def clear_screen() -> str:
    """Clear the entire screen and move cursor to top-left."""
    return f"{CSI}2J{CSI}H"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"


def enter_alt_screen() -> str:
    """Switch to the alternate screen buffer (xterm private mode 1049)."""
    return f"{CSI}?1049h"


def exit_alt_screen() -> str:
    return f"{CSI}?1049l"
