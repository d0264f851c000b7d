"""
Screen runtime: named regions, focus and key bindings.

``Screen`` is the host the users list runs inside.  It keeps regions in
z-order, routes each key to exactly one handler, and composes the regions
into a frame for the renderer.

Example
-------
>>> screen = Screen(80, 24)
>>> region, created = screen.set_region("list", -1, -1, 30, 22)
>>> created
True
>>> screen.bind("list", "down", lambda s, r: r.cursor_down())
"""

from __future__ import annotations

from collections.abc import Callable

from ssh_admin.logging import get_logger
from ssh_admin.tui.canvas import Canvas
from ssh_admin.tui.keybindings import key_to_descriptor, normalise_key_descriptor
from ssh_admin.tui.keys import Key
from ssh_admin.tui.region import Rect, Region

logger = get_logger("tui.screen")

Handler = Callable[["Screen", "Region | None"], None]


class Quit(Exception):
    """Raised by a handler to end the main loop."""


class RegionNotFoundError(KeyError):
    """A region that was expected to exist does not."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown region {self.name!r}"


class Screen:
    """
    Region registry, focus owner and key dispatcher.

    Parameters
    ----------
    width, height:
        Terminal size in cells.  Updated with :meth:`resize`.
    """

    def __init__(self, width: int = 80, height: int = 24) -> None:
        self._width = width
        self._height = height
        self._regions: dict[str, Region] = {}
        self._focused: str | None = None
        self._bindings: dict[tuple[str | None, str], Handler] = {}

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    def resize(self, width: int, height: int) -> None:
        self._width, self._height = width, height

    # ------------------------------------------------------------------
    # Regions
    # ------------------------------------------------------------------

    def set_region(self, name: str, x0: int, y0: int, x1: int, y1: int) -> tuple[Region, bool]:
        """
        Create region *name* or move an existing one.

        Returns the region and ``True`` when it was created by this call,
        so callers initialise a region's content exactly once.
        """
        if x0 >= x1 or y0 >= y1:
            raise ValueError(f"{name}: invalid bounds ({x0}, {y0})-({x1}, {y1})")
        rect = Rect(x0, y0, x1, y1)
        region = self._regions.get(name)
        if region is not None:
            if region.rect != rect:
                region.rect = rect
                region.clamp_cursor()
                region.invalidate()
            return region, False

        region = Region(name, rect)
        self._regions[name] = region
        logger.debug("Created region %s at %s", name, rect)
        return region, True

    def region(self, name: str) -> Region:
        """
        Return region *name*.

        Raises
        ------
        RegionNotFoundError
            No such region exists.
        """
        try:
            return self._regions[name]
        except KeyError:
            raise RegionNotFoundError(name) from None

    def has_region(self, name: str) -> bool:
        return name in self._regions

    def delete_region(self, name: str) -> None:
        """
        Remove region *name*.  Its key bindings stay registered and apply
        again if a region with the same name is created later.

        Raises
        ------
        RegionNotFoundError
            No such region exists.
        """
        if name not in self._regions:
            raise RegionNotFoundError(name)
        del self._regions[name]
        if self._focused == name:
            self._focused = None
        logger.debug("Deleted region %s", name)

    @property
    def regions(self) -> list[Region]:
        """Regions bottom to top."""
        return list(self._regions.values())

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def set_focus(self, name: str) -> Region:
        """Give region *name* input focus and raise it to the top."""
        region = self.region(name)
        if self._focused is not None and self._focused in self._regions:
            self._regions[self._focused].focused = False
        self._focused = name
        region.focused = True
        # Re-insert so the focused region is painted last
        self._regions[name] = self._regions.pop(name)
        return region

    @property
    def focused(self) -> Region | None:
        if self._focused is None:
            return None
        return self._regions.get(self._focused)

    # ------------------------------------------------------------------
    # Key bindings
    # ------------------------------------------------------------------

    def bind(self, region: str | None, key: str, handler: Handler) -> None:
        """
        Register *handler* for *key* (a descriptor such as ``"ctrl+u"``)
        while region *region* has focus.  ``None`` binds globally.

        A later binding for the same region and key replaces the earlier one.
        """
        self._bindings[(region, normalise_key_descriptor(key))] = handler

    def unbind(self, region: str | None, key: str) -> None:
        self._bindings.pop((region, normalise_key_descriptor(key)), None)

    def dispatch(self, key: Key) -> bool:
        """
        Route *key* to one handler and run it to completion.

        Lookup order: a binding on the focused region, a global binding,
        then the focused region's own input handling (text editing).
        Exceptions raised by handlers propagate to the caller.

        Returns ``True`` when something consumed the key.
        """
        descriptor = key_to_descriptor(key)
        region = self.focused

        handler = None
        if region is not None:
            handler = self._bindings.get((region.name, descriptor))
        if handler is None:
            handler = self._bindings.get((None, descriptor))
        if handler is not None:
            handler(self, region)
            return True

        if region is not None:
            return region.handle_input(key)
        return False

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def _paint(self) -> Canvas:
        canvas = Canvas(self._width, self._height)
        for region in self._regions.values():
            if region.visible:
                region.paint(canvas)
        return canvas

    def compose(self) -> list[str]:
        """Paint every region bottom to top and return styled rows."""
        return self._paint().styled_lines()

    def snapshot(self) -> str:
        """The current frame as plain text, one row per line."""
        return "\n".join(self._paint().lines())

    def cursor_position(self) -> tuple[int, int] | None:
        """
        Screen cell ``(x, y)`` of the text cursor in the focused editable
        region, or ``None`` when no such region has focus.
        """
        region = self.focused
        if region is None or not region.editable:
            return None
        cx, cy = region.cursor
        return region.rect.x0 + 1 + cx, region.rect.y0 + 1 + cy

    @property
    def dirty(self) -> bool:
        return any(r.dirty for r in self._regions.values())
