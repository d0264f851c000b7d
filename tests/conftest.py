"""Shared pytest fixtures for ssh-admin tests."""

from __future__ import annotations

import pytest

from ssh_admin.directory import MemoryDirectory
from ssh_admin.models import Account
from ssh_admin.tui.screen import Screen
from ssh_admin.users_list import UsersList, UsersListListener


class RecordingListener(UsersListListener):
    """Listener that records every notification it receives."""

    def __init__(self) -> None:
        self.selected: list[Account | None] = []
        self.edits: list[Account | None] = []

    def on_account_selected(self, account: Account | None) -> None:
        self.selected.append(account)

    def on_edit_requested(self, account: Account | None) -> None:
        self.edits.append(account)


@pytest.fixture
def accounts() -> list[Account]:
    """Three sample accounts."""
    return [
        Account(username="alice", email="alice@example.com", public_keys=["ssh-ed25519 AAAA alice"]),
        Account(username="bob"),
        Account(username="carol", email="carol@example.com"),
    ]


@pytest.fixture
def directory(accounts: list[Account]) -> MemoryDirectory:
    """In-memory directory holding the sample accounts."""
    return MemoryDirectory(accounts)


@pytest.fixture
def empty_directory() -> MemoryDirectory:
    return MemoryDirectory()


@pytest.fixture
def screen() -> Screen:
    """An 80x24 screen."""
    return Screen(80, 24)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def users_list(screen: Screen, directory: MemoryDirectory, listener: RecordingListener) -> UsersList:
    """A laid-out users list with bindings and a recording listener."""
    controller = UsersList(screen, directory)
    controller.add_listener(listener)
    controller.setup_keybindings()
    controller.layout()
    return controller
