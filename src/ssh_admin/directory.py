"""
Account directory stores.

The users list never persists accounts itself; it talks to an
:class:`AccountDirectory` injected at construction time.  Two stores ship
with the package: :class:`MemoryDirectory` for tests and demos, and
:class:`YamlDirectory` which keeps accounts in a YAML file.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml

from ssh_admin.logging import get_logger
from ssh_admin.models import Account, validate_username

logger = get_logger("directory")


class DirectoryError(Exception):
    """Raised when the directory rejects an operation."""


class DuplicateAccountError(DirectoryError):
    """Raised when adding a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"user {username!r} already exists")
        self.username = username


class InvalidAccountError(DirectoryError):
    """Raised when an account fails validation."""


class AccountDirectory(ABC):
    """
    Ordered collection of accounts keyed by username.

    All calls are synchronous.  Lookups that miss return ``None``; only
    :meth:`add` signals failure, by raising :class:`DirectoryError`.
    """

    @abstractmethod
    def usernames(self) -> list[str]:
        """Return every username, in directory order."""
        ...

    @abstractmethod
    def load(self, username: str) -> Account | None:
        """Return the account for *username*, or ``None`` if there is none."""
        ...

    @abstractmethod
    def add(self, account: Account) -> None:
        """
        Add *account* to the directory.

        Raises
        ------
        InvalidAccountError
            The username is not acceptable.
        DuplicateAccountError
            The username is already taken.
        """
        ...

    def accounts(self) -> list[Account]:
        """Return every account, in directory order."""
        result: list[Account] = []
        for username in self.usernames():
            account = self.load(username)
            if account is not None:
                result.append(account)
        return result

    def _check_new(self, account: Account) -> None:
        problem = validate_username(account.username)
        if problem is not None:
            raise InvalidAccountError(problem)
        if self.load(account.username) is not None:
            raise DuplicateAccountError(account.username)


class MemoryDirectory(AccountDirectory):
    """In-memory directory preserving insertion order."""

    def __init__(self, accounts: list[Account] | None = None) -> None:
        self._accounts: dict[str, Account] = {}
        for account in accounts or []:
            self.add(account)

    def usernames(self) -> list[str]:
        return list(self._accounts)

    def load(self, username: str) -> Account | None:
        return self._accounts.get(username)

    def add(self, account: Account) -> None:
        self._check_new(account)
        self._accounts[account.username] = account
        logger.debug("Added user %s", account.username)

    def remove(self, username: str) -> bool:
        """Delete *username*; returns ``False`` when it was not present."""
        return self._accounts.pop(username, None) is not None


class YamlDirectory(AccountDirectory):
    """
    Directory backed by a YAML file.

    Layout::

        users:
          - username: alice
            email: alice@example.com
            public_keys:
              - ssh-ed25519 AAAA...

    The file is re-read on every call so edits made outside the program
    are picked up.  A missing file is an empty directory.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def usernames(self) -> list[str]:
        return [account.username for account in self._read()]

    def load(self, username: str) -> Account | None:
        return next((a for a in self._read() if a.username == username), None)

    def accounts(self) -> list[Account]:
        return self._read()

    def add(self, account: Account) -> None:
        self._check_new(account)
        accounts = self._read()
        accounts.append(account)
        self._write(accounts)
        logger.info("Added user %s to %s", account.username, self._path)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _read(self) -> list[Account]:
        if not self._path.is_file():
            return []
        try:
            with open(self._path, encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DirectoryError(f"cannot parse {self._path}: {e}") from e
        except OSError as e:
            raise DirectoryError(f"cannot read {self._path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, dict) or not isinstance(data.get("users", []), list):
            raise DirectoryError(f"{self._path}: expected a mapping with a 'users' list")
        return [
            Account.from_dict(entry)
            for entry in data.get("users") or []
            if isinstance(entry, dict)
        ]

    def _write(self, accounts: list[Account]) -> None:
        payload = {"users": [a.to_dict() for a in accounts]}
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(payload, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise DirectoryError(f"cannot write {self._path}: {e}") from e
