"""
Terminal screen runtime for ssh-admin.

Provides named screen regions with focus and key bindings, a modal
one-field form, key parsing, keybinding configuration and a differential
renderer.
"""
from __future__ import annotations

from ssh_admin.tui.canvas import Canvas
from ssh_admin.tui.component import Component
from ssh_admin.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from ssh_admin.tui.keys import Key, parse_key, split_keys
from ssh_admin.tui.overlay import OverlayForm, centered_rect
from ssh_admin.tui.region import Rect, Region
from ssh_admin.tui.renderer import TUIRenderer
from ssh_admin.tui.screen import Quit, RegionNotFoundError, Screen

__all__ = [
    # Core
    "Component",
    "Canvas",
    "Rect",
    "Region",
    "Screen",
    "Quit",
    "RegionNotFoundError",
    "TUIRenderer",
    # Keys
    "Key",
    "parse_key",
    "split_keys",
    # Overlay
    "OverlayForm",
    "centered_rect",
    # Keybindings
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
]
