"""
Abstract base component for screen elements.

Everything the :class:`~ssh_admin.tui.screen.Screen` paints inherits from
``Component``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ssh_admin.tui.keys import Key


class Component(ABC):
    """
    Base class for screen components.

    Subclasses implement :meth:`render`, returning plain text rows.
    Components track *dirty* state so the screen can tell when a new frame
    is needed.
    """

    def __init__(self) -> None:
        self._dirty: bool = True
        self._visible: bool = True
        self._focused: bool = False

    @abstractmethod
    def render(self, width: int) -> list[str]:
        """
        Render the component into text rows at most *width* columns wide.

        Rows carry no escape sequences; styling is applied when the screen
        composes the frame.
        """
        ...

    def handle_input(self, key: Key) -> bool:
        """
        Handle a key that no binding consumed.

        Returns ``True`` if the event was consumed.
        """
        return False

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def invalidate(self) -> None:
        """Mark the component as needing a re-render."""
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    @dirty.setter
    def dirty(self, value: bool) -> None:
        self._dirty = value

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        if self._visible != value:
            self._visible = value
            self._dirty = True

    @property
    def focused(self) -> bool:
        """Whether the component currently has input focus."""
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        if self._focused != value:
            self._focused = value
            self._dirty = True
