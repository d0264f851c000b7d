"""
Data models for ssh-admin accounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MAX_USERNAME_LENGTH = 32


@dataclass
class Account:
    """
    A single account in the directory.

    The ``username`` is the identifier; every other field is carried along
    for display only.
    """

    username: str
    email: str = ""
    public_keys: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        """Create an account from a mapping (as stored in YAML)."""
        return cls(
            username=str(data.get("username", "")),
            email=str(data.get("email") or ""),
            public_keys=[str(k) for k in data.get("public_keys") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the account to a plain mapping."""
        return {
            "username": self.username,
            "email": self.email,
            "public_keys": list(self.public_keys),
        }


def validate_username(username: str) -> str | None:
    """
    Check *username* and return a problem description, or ``None`` if valid.

    >>> validate_username("alice") is None
    True
    >>> validate_username("")
    'username must not be empty'
    """
    if not username:
        return "username must not be empty"
    if username != username.strip() or any(ch.isspace() for ch in username):
        return "username must not contain whitespace"
    if ":" in username:
        return "username must not contain ':'"
    if len(username) > MAX_USERNAME_LENGTH:
        return f"username must be at most {MAX_USERNAME_LENGTH} characters"
    return None
