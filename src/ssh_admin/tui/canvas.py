"""
Character grid that regions paint into.

The screen composes a frame by letting each region write text runs with
a named attribute; :meth:`Canvas.styled_lines` turns attribute runs into
ANSI-styled rows.
"""

from __future__ import annotations

from typing import Any

from ssh_admin.tui.ansi import FG, style

ATTR_STYLES: dict[str, dict[str, Any]] = {
    "frame": {"dim": True},
    "frame_focused": {"bold": True},
    "title": {"bold": True},
    "cursor_line": {"reverse": True},
    "cursor_line_focused": {"reverse": True, "bold": True},
    "muted": {"fg": FG.BRIGHT_BLACK},
    "error": {"fg": FG.RED, "bold": True},
}


class Canvas:
    """A ``width`` x ``height`` grid of characters, each with an attribute."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._chars: list[list[str]] = [[" "] * self.width for _ in range(self.height)]
        self._attrs: list[list[str]] = [[""] * self.width for _ in range(self.height)]

    def put(self, x: int, y: int, text: str, attr: str = "") -> None:
        """Write *text* starting at column *x* of row *y*, clipped to the grid."""
        if not 0 <= y < self.height:
            return
        row_chars = self._chars[y]
        row_attrs = self._attrs[y]
        for offset, ch in enumerate(text):
            col = x + offset
            if col < 0:
                continue
            if col >= self.width:
                break
            row_chars[col] = ch
            row_attrs[col] = attr

    def lines(self) -> list[str]:
        """Plain rows, trailing spaces removed."""
        return ["".join(row).rstrip() for row in self._chars]

    def styled_lines(self) -> list[str]:
        """Rows with every attribute run wrapped in its ANSI style."""
        result: list[str] = []
        for chars, attrs in zip(self._chars, self._attrs):
            parts: list[str] = []
            start = 0
            for col in range(1, self.width + 1):
                if col == self.width or attrs[col] != attrs[start]:
                    run = "".join(chars[start:col])
                    parts.append(style(run, **ATTR_STYLES.get(attrs[start], {})))
                    start = col
            result.append("".join(parts))
        return result
