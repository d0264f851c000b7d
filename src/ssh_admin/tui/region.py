"""
Rectangular screen regions.

A :class:`Region` is a named view onto a buffer of text lines, placed on
the screen by inclusive corner coordinates.  Content starts one cell inside
the corners whether or not a frame is drawn, so frameless regions can be
laid over a framed one.  Regions keep a cursor and a scroll origin, and
editable regions accept single-line text editing.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass

from ssh_admin.tui.canvas import Canvas
from ssh_admin.tui.component import Component
from ssh_admin.tui.keys import Key


@dataclass(frozen=True)
class Rect:
    """Inclusive screen rectangle ``(x0, y0)``-``(x1, y1)``."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def inner_width(self) -> int:
        return max(0, self.x1 - self.x0 - 1)

    @property
    def inner_height(self) -> int:
        return max(0, self.y1 - self.y0 - 1)

    def contains(self, x: int, y: int) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


class Region(Component):
    """
    A named rectangle of the screen holding lines of text.

    Attributes
    ----------
    editable:
        Unbound printable keys edit the line under the cursor.
    wrap:
        Long lines wrap instead of being clipped.  Cursor movement always
        works on buffer lines, so wrapping is meant for read-only panels.
    highlight:
        The line under the cursor is drawn highlighted.
    frame:
        A border is drawn on the rectangle's edge.
    title:
        Text embedded in the top border of a framed region.
    text_attr:
        Canvas attribute applied to the content (``"error"`` for the help
        bar error state, for example).
    """

    def __init__(self, name: str, rect: Rect) -> None:
        super().__init__()
        self.name = name
        self.rect = rect
        self.editable = False
        self.wrap = False
        self.highlight = False
        self.frame = True
        self.title = ""
        self.text_attr = ""

        self._lines: list[str] = []
        self._cx = 0
        self._cy = 0
        self._ox = 0
        self._oy = 0

    def __repr__(self) -> str:
        return f"Region({self.name!r}, {self.rect!r})"

    # ------------------------------------------------------------------
    # Buffer
    # ------------------------------------------------------------------

    @property
    def lines(self) -> list[str]:
        """A copy of the buffer lines."""
        return list(self._lines)

    def write_line(self, text: str) -> None:
        """Append *text* (split on newlines) to the buffer."""
        self._lines.extend(text.split("\n"))
        self.invalidate()

    def set_lines(self, lines: list[str]) -> None:
        """Replace the buffer, keeping the cursor on an existing line."""
        self._lines = list(lines)
        self.clamp_cursor()
        self.invalidate()

    def clear(self) -> None:
        """Empty the buffer and reset cursor and origin."""
        self._lines = []
        self._cx = self._cy = self._ox = self._oy = 0
        self.invalidate()

    def line(self, y: int) -> str:
        """
        Return the buffer line shown at view row *y*.

        Raises
        ------
        IndexError
            No buffer line is shown at that row.
        """
        index = self._oy + y
        if y < 0 or index >= len(self._lines):
            raise IndexError(f"{self.name}: no line at row {y}")
        return self._lines[index]

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> tuple[int, int]:
        """Cursor position relative to the view."""
        return self._cx, self._cy

    @property
    def origin(self) -> tuple[int, int]:
        """Buffer position shown at the view's top-left cell."""
        return self._ox, self._oy

    @property
    def cursor_row(self) -> int:
        """Buffer line index under the cursor."""
        return self._oy + self._cy

    def set_cursor(self, x: int, y: int) -> None:
        """
        Place the cursor at view position (*x*, *y*).

        Raises
        ------
        ValueError
            The position lies outside the view.
        """
        if not (0 <= x < max(1, self.rect.inner_width) and 0 <= y < max(1, self.rect.inner_height)):
            raise ValueError(f"{self.name}: cursor ({x}, {y}) outside view")
        self._cx, self._cy = x, y
        self.invalidate()

    def cursor_down(self) -> bool:
        """
        Move the cursor one buffer line down, scrolling when needed.

        Returns ``False`` (and changes nothing) on the last line.
        """
        if self.cursor_row + 1 >= len(self._lines):
            return False
        if self._cy + 1 < max(1, self.rect.inner_height):
            self._cy += 1
        else:
            self._oy += 1
        self.invalidate()
        return True

    def cursor_up(self) -> bool:
        """
        Move the cursor one buffer line up, scrolling when needed.

        Returns ``False`` (and changes nothing) on the first line.
        """
        if self.cursor_row == 0:
            return False
        if self._cy > 0:
            self._cy -= 1
        else:
            self._oy -= 1
        self.invalidate()
        return True

    def clamp_cursor(self) -> None:
        """Pull the cursor back onto the buffer after it shrank or the view resized."""
        height = max(1, self.rect.inner_height)
        last = max(0, len(self._lines) - 1)
        row = min(self.cursor_row, last)
        if row < self._oy:
            self._oy = row
        elif row >= self._oy + height:
            self._oy = row - height + 1
        self._oy = max(0, min(self._oy, max(0, len(self._lines) - height)))
        self._cy = row - self._oy

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def handle_input(self, key: Key) -> bool:
        if not self.editable:
            return False
        return self.edit(key)

    def edit(self, key: Key) -> bool:
        """Apply an editing key to the line under the cursor."""
        if not self._lines:
            self._lines.append("")
        row = self.cursor_row
        text = self._lines[row]
        col = min(self._ox + self._cx, len(text))
        name = key.name

        if key.char and key.char.isprintable() and not key.ctrl and not key.alt:
            text = text[:col] + key.char + text[col:]
            col += 1
        elif name == "backspace":
            if col == 0:
                return True
            text = text[:col - 1] + text[col:]
            col -= 1
        elif name == "delete":
            text = text[:col] + text[col + 1:]
        elif name == "left":
            col = max(0, col - 1)
        elif name == "right":
            col = min(len(text), col + 1)
        elif name in ("home", "ctrl+a"):
            col = 0
        elif name in ("end", "ctrl+e"):
            col = len(text)
        else:
            return False

        self._lines[row] = text
        self._set_column(col)
        self.invalidate()
        return True

    def _set_column(self, col: int) -> None:
        width = max(1, self.rect.inner_width)
        if col < self._ox:
            self._ox = col
        elif col - self._ox >= width:
            self._ox = col - width + 1
        self._cx = col - self._ox

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _view_lines(self, width: int) -> list[str]:
        if not self.wrap or width <= 0:
            return self._lines
        wrapped: list[str] = []
        for line in self._lines:
            wrapped.extend(textwrap.wrap(line, width) or [""])
        return wrapped

    def render(self, width: int) -> list[str]:
        """Rows of visible content, each exactly ``min(width, inner_width)`` wide."""
        width = min(width, self.rect.inner_width)
        height = self.rect.inner_height
        source = self._view_lines(width)
        rows: list[str] = []
        for i in range(height):
            index = self._oy + i
            text = source[index] if index < len(source) else ""
            rows.append(text[self._ox:self._ox + width].ljust(width))
        self._dirty = False
        return rows

    def paint(self, canvas: Canvas) -> None:
        """Draw the frame (if any) and the visible content onto *canvas*."""
        r = self.rect
        if self.frame:
            self._paint_frame(canvas)

        for i, row in enumerate(self.render(r.inner_width)):
            attr = self.text_attr
            if self.highlight and i == self._cy and self._lines:
                attr = "cursor_line_focused" if self._focused else "cursor_line"
            canvas.put(r.x0 + 1, r.y0 + 1 + i, row, attr)

    def _paint_frame(self, canvas: Canvas) -> None:
        r = self.rect
        attr = "frame_focused" if self._focused else "frame"
        horizontal = "─" * r.inner_width
        canvas.put(r.x0, r.y0, "┌" + horizontal + "┐", attr)
        canvas.put(r.x0, r.y1, "└" + horizontal + "┘", attr)
        for y in range(r.y0 + 1, r.y1):
            canvas.put(r.x0, y, "│", attr)
            canvas.put(r.x1, y, "│", attr)
        if self.title and r.inner_width > 2:
            canvas.put(r.x0 + 2, r.y0, f" {self.title} "[:r.inner_width - 1], "title")
