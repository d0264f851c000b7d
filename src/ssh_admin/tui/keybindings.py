"""
Keybinding management.

Stores the mapping from logical actions to key descriptors and supports
user overrides loaded from a JSON configuration file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ssh_admin.logging import get_logger
from ssh_admin.tui.keys import Key

logger = get_logger("tui.keybindings")

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "quit": ["ctrl+c"],
    "select_up": ["up"],
    "select_down": ["down"],
    "edit_user": ["enter"],
    "new_user": ["ctrl+n"],
    "refresh": ["ctrl+r"],
    "submit": ["enter"],
    "clear_line": ["ctrl+u"],
}

DEFAULT_KEYBINDINGS_PATH = Path.home() / ".ssh-admin" / "keybindings.json"

_MODIFIERS = ("alt", "ctrl", "shift")


# ---------------------------------------------------------------------------
# Descriptor normalisation
# ---------------------------------------------------------------------------

def normalise_key_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to a canonical form.

    >>> normalise_key_descriptor("Shift+Ctrl+Up")
    'ctrl+shift+up'
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    base = parts[-1] if parts else ""
    modifiers = sorted(set(p for p in parts[:-1] if p))
    return "+".join(modifiers + [base])


def key_to_descriptor(key: Key) -> str:
    """
    Convert a parsed :class:`Key` into a canonical descriptor string.

    >>> key_to_descriptor(Key(name="ctrl+u", char="u", ctrl=True))
    'ctrl+u'
    >>> key_to_descriptor(Key(name="tab", shift=True))
    'shift+tab'
    """
    # ctrl+<letter> keys already carry the modifier in their name
    base = key.name
    if len(base) > 1 and "+" in base:
        base = base.rsplit("+", 1)[-1] or base
    flags = {"alt": key.alt, "ctrl": key.ctrl, "shift": key.shift}
    modifiers = [m for m in _MODIFIERS if flags[m]]
    return "+".join(modifiers + [base.lower()])


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Manages the mapping from logical action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to descriptor lists that replace
        the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, list[str]] = {
            action: [normalise_key_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Load keybindings from a JSON file.

        When *config_path* is ``None`` ``~/.ssh-admin/keybindings.json`` is
        tried.  The file maps action names to lists of descriptors::

            {
                "new_user": ["ctrl+a"],
                "quit": ["ctrl+c", "ctrl+q"]
            }

        A missing or unreadable file leaves the defaults in place.
        """
        path = Path(config_path) if config_path is not None else DEFAULT_KEYBINDINGS_PATH

        overrides: dict[str, list[str]] | None = None
        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring keybindings file %s: %s", path, e)
                raw = None
            if isinstance(raw, dict):
                overrides = {
                    action: val
                    for action, val in raw.items()
                    if isinstance(val, list) and all(isinstance(v, str) for v in val)
                }

        return cls(user_overrides=overrides)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def matches(self, key: Key | str, action: str) -> bool:
        """Test whether *key* (a ``Key`` or descriptor) is bound to *action*."""
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False
        if isinstance(key, str):
            normalised = normalise_key_descriptor(key)
        else:
            normalised = key_to_descriptor(key)
        return normalised in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Return the descriptors bound to *action*, as configured."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        """Return all registered action names."""
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """Find the first action (in insertion order) that matches *key*."""
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None

    def describe(self, action: str) -> str:
        """
        Human-readable key list for help text.

        >>> KeybindingsManager().describe("quit")
        'ctrl-c'
        """
        return "/".join(d.replace("+", "-") for d in self.get_keys(action))
