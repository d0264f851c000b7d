"""
Modal single-field form.

An :class:`OverlayForm` is three regions (frame, label, input) that exist
together or not at all.  They are created in one :meth:`~OverlayForm.open`
call and deleted in one :meth:`~OverlayForm.close` call, so no key handler
ever sees a partly built form.
"""

from __future__ import annotations

from ssh_admin.tui.region import Rect
from ssh_admin.tui.screen import Screen


def centered_rect(
    width: int,
    height: int,
    *,
    min_half_width: int = 10,
    max_half_width: int = 30,
) -> Rect:
    """
    A three-row rectangle centred on a *width* x *height* screen.

    The half-width scales with the screen (a third of it) within
    ``[min_half_width, max_half_width]``.

    >>> centered_rect(120, 40)
    Rect(x0=30, y0=20, x1=90, y1=22)
    """
    half = max(min_half_width, min(max_half_width, width // 3))
    cx, cy = width // 2, height // 2
    return Rect(cx - half, cy, cx + half, cy + 2)


class OverlayForm:
    """
    Frame, static label and editable input shown over the screen.

    Parameters
    ----------
    screen:
        The screen the regions live on.
    name:
        Region id of the frame; the label and input use ``<name>-label``
        and ``<name>-input``.
    prompt:
        Label text shown left of the input.
    """

    def __init__(self, screen: Screen, name: str, prompt: str) -> None:
        self._screen = screen
        self.frame_id = name
        self.label_id = f"{name}-label"
        self.input_id = f"{name}-input"
        self.prompt = prompt

    @property
    def region_ids(self) -> tuple[str, str, str]:
        return self.frame_id, self.label_id, self.input_id

    @property
    def visible(self) -> bool:
        return all(self._screen.has_region(name) for name in self.region_ids)

    def open(self) -> None:
        """
        Create whichever of the three regions are missing and focus the
        input.  Opening an open form only re-centres it.
        """
        rect = centered_rect(*self._screen.size)
        label_x1 = rect.x0 + 1 + len(self.prompt) + 1
        created: list[str] = []
        try:
            frame, is_new = self._screen.set_region(self.frame_id, rect.x0, rect.y0, rect.x1, rect.y1)
            if is_new:
                created.append(self.frame_id)
                frame.frame = True

            label, is_new = self._screen.set_region(self.label_id, rect.x0 + 1, rect.y0, label_x1, rect.y1)
            if is_new:
                created.append(self.label_id)
                label.frame = False
                label.write_line(self.prompt)

            field, is_new = self._screen.set_region(self.input_id, label_x1, rect.y0, rect.x1, rect.y1)
            if is_new:
                created.append(self.input_id)
                field.frame = False
                field.editable = True
        except ValueError:
            for name in created:
                self._screen.delete_region(name)
            raise

        self._screen.set_focus(self.input_id)

    def close(self) -> None:
        """Delete all three regions."""
        for name in self.region_ids:
            if self._screen.has_region(name):
                self._screen.delete_region(name)

    @property
    def draft(self) -> str:
        """First line of the input, or ``""``.  The form must be open."""
        lines = self._screen.region(self.input_id).lines
        return lines[0] if lines else ""

    def clear(self) -> None:
        """Erase the input without closing the form."""
        self._screen.region(self.input_id).clear()
