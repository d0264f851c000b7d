"""
Configuration for ssh-admin.

Settings can be loaded from a YAML file or constructed programmatically.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path.home() / ".ssh-admin"
USERS_FILE_ENV = "SSH_ADMIN_USERS_FILE"


def default_users_file() -> Path:
    """Users file from ``$SSH_ADMIN_USERS_FILE``, else ``~/.ssh-admin/users.yaml``."""
    env = os.environ.get(USERS_FILE_ENV)
    if env:
        return Path(env).expanduser()
    return CONFIG_DIR / "users.yaml"


def config_search_paths() -> list[Path]:
    """Config files tried in order when none is given explicitly."""
    return [
        Path.cwd() / "ssh-admin.yaml",
        CONFIG_DIR / "config.yaml",
    ]


@dataclass
class AdminConfig:
    """
    Settings for the admin screen and CLI.

    Example YAML:
        users_file: ~/.ssh-admin/users.yaml
        keybindings_file: ~/.ssh-admin/keybindings.json
        list_width: 30
        log_level: INFO
        log_file: /tmp/ssh-admin.log
    """

    users_file: Path = field(default_factory=default_users_file)
    keybindings_file: Path | None = None  # None = ~/.ssh-admin/keybindings.json
    list_width: int = 30  # Right edge of the users list
    log_level: str = "WARNING"
    log_file: Path | None = None  # Logs are discarded while the screen runs unless set

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdminConfig:
        """Create config from a dictionary."""
        users_file = data.get("users_file")
        return cls(
            users_file=Path(users_file).expanduser() if users_file else default_users_file(),
            keybindings_file=_optional_path(data.get("keybindings_file")),
            list_width=int(data.get("list_width", 30)),
            log_level=str(data.get("log_level", "WARNING")),
            log_file=_optional_path(data.get("log_file")),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> AdminConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> AdminConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    @classmethod
    def load(cls, path: str | Path | None = None) -> tuple[AdminConfig, Path | None]:
        """
        Load config from *path*, or from the first existing search path.

        Returns the config and the file it came from (``None`` for defaults).
        The ``$SSH_ADMIN_USERS_FILE`` variable overrides ``users_file``.
        """
        if path is not None:
            candidates = [Path(path)]
            if not candidates[0].is_file():
                raise FileNotFoundError(f"Config file not found: {path}")
        else:
            candidates = [p for p in config_search_paths() if p.is_file()]

        config, source = cls(), None
        if candidates:
            source = candidates[0]
            config = cls.from_yaml(source)

        env = os.environ.get(USERS_FILE_ENV)
        if env:
            config.users_file = Path(env).expanduser()
        return config, source

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "users_file": str(self.users_file),
            "keybindings_file": str(self.keybindings_file) if self.keybindings_file else None,
            "list_width": self.list_width,
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else None,
        }


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None
