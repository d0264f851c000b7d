"""
ssh-admin - terminal screen for browsing and adding SSH admin users.

Example:
    from ssh_admin import AdminApp, MemoryDirectory, Screen

    app = AdminApp(Screen(80, 24), MemoryDirectory())
    app.layout()
"""

from ssh_admin.app import AdminApp
from ssh_admin.config import AdminConfig
from ssh_admin.details import AccountDetails
from ssh_admin.directory import (
    AccountDirectory,
    DirectoryError,
    DuplicateAccountError,
    InvalidAccountError,
    MemoryDirectory,
    YamlDirectory,
)
from ssh_admin.models import Account
from ssh_admin.tui.screen import Screen
from ssh_admin.users_list import (
    ControllerState,
    ControllerStateError,
    UsersList,
    UsersListListener,
)

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountDetails",
    "AccountDirectory",
    "AdminApp",
    "AdminConfig",
    "ControllerState",
    "ControllerStateError",
    "DirectoryError",
    "DuplicateAccountError",
    "InvalidAccountError",
    "MemoryDirectory",
    "Screen",
    "UsersList",
    "UsersListListener",
    "YamlDirectory",
]
