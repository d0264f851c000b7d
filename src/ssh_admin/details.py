"""
Account details panel.

Shows the account highlighted in the users list and marks it when the
operator asks to edit it.
"""

from __future__ import annotations

from ssh_admin.models import Account
from ssh_admin.tui.region import Region
from ssh_admin.tui.screen import Screen
from ssh_admin.users_list import UsersListListener

DETAILS_REGION_ID = "user-details"


class AccountDetails(UsersListListener):
    """Read-only panel to the right of the users list."""

    def __init__(self, screen: Screen, left: int = 30) -> None:
        self._screen = screen
        self._left = left
        self._account: Account | None = None
        self._editing = False

    @property
    def account(self) -> Account | None:
        return self._account

    @property
    def editing(self) -> bool:
        return self._editing

    def layout(self) -> None:
        width, height = self._screen.size
        region, created = self._screen.set_region(
            DETAILS_REGION_ID, self._left + 1, -1, width, height - 2,
        )
        if created:
            region.wrap = True
            self._draw(region)

    def on_account_selected(self, account: Account | None) -> None:
        self._account = account
        self._editing = False
        self._redraw()

    def on_edit_requested(self, account: Account | None) -> None:
        self._account = account
        self._editing = account is not None
        self._redraw()

    def _redraw(self) -> None:
        if self._screen.has_region(DETAILS_REGION_ID):
            self._draw(self._screen.region(DETAILS_REGION_ID))

    def _draw(self, region: Region) -> None:
        account = self._account
        if account is None:
            region.title = ""
            region.set_lines(["(no such user)"])
            return

        region.title = f"edit: {account.username}" if self._editing else account.username
        lines = [
            f"username:    {account.username}",
            f"email:       {account.email or '-'}",
            f"public keys: {len(account.public_keys)}",
        ]
        lines.extend(f"  {key}" for key in account.public_keys)
        region.set_lines(lines)
