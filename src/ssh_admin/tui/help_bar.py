"""Bottom-row help and status bar."""

from __future__ import annotations

from ssh_admin.tui.region import Region
from ssh_admin.tui.screen import Screen

HELP_REGION_ID = "help"


def _help_region(screen: Screen) -> Region:
    width, height = screen.size
    region, created = screen.set_region(HELP_REGION_ID, -1, height - 2, width, height)
    if created:
        region.frame = False
    return region


def layout(screen: Screen) -> None:
    """Keep the help row on the bottom of the screen after a resize."""
    _help_region(screen)


def set_help(screen: Screen, text: str) -> None:
    """Show *text* on the bottom row, replacing any previous message."""
    region = _help_region(screen)
    region.text_attr = "muted"
    region.set_lines([text])


def set_error(screen: Screen, text: str) -> None:
    """Show *text* on the bottom row styled as an error."""
    region = _help_region(screen)
    region.text_attr = "error"
    region.set_lines([text])


def help_text(screen: Screen) -> str:
    """The message currently shown, or ``""``."""
    if not screen.has_region(HELP_REGION_ID):
        return ""
    lines = screen.region(HELP_REGION_ID).lines
    return lines[0] if lines else ""
