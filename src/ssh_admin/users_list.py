"""
Users list screen.

``UsersList`` renders the directory's usernames in a scrollable list,
lets the operator pick one (``on_account_selected``) or ask to edit it
(``on_edit_requested``), and adds new users through a one-field overlay
form.

The controller is always in one of two states:

* ``BROWSING`` - the list has focus; up/down select, enter edits.
* ``COMPOSING`` - the add-user form has focus; enter submits it.

Submitting always closes the form and returns to ``BROWSING``, whether
or not the directory accepted the new user.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from ssh_admin.directory import AccountDirectory, DirectoryError
from ssh_admin.logging import get_logger
from ssh_admin.models import Account
from ssh_admin.tui.help_bar import set_error, set_help
from ssh_admin.tui.keybindings import KeybindingsManager
from ssh_admin.tui.overlay import OverlayForm
from ssh_admin.tui.region import Region
from ssh_admin.tui.screen import Screen

logger = get_logger("users_list")

LIST_REGION_ID = "users-list"
ADD_USER_REGION_ID = "add-user"
ADD_USER_PROMPT = "username:"


class ControllerState(Enum):
    BROWSING = "browsing"
    COMPOSING = "composing"


class ControllerStateError(RuntimeError):
    """A handler ran while the controller was in the wrong state."""


class UsersListListener(ABC):
    """Receives the users list's selection and edit events."""

    @abstractmethod
    def on_account_selected(self, account: Account | None) -> None:
        """The highlighted user changed; ``None`` if it is not in the directory."""
        ...

    @abstractmethod
    def on_edit_requested(self, account: Account | None) -> None:
        """The operator asked to edit the highlighted user."""
        ...


class UsersList:
    """
    List-and-overlay controller for the users screen.

    Parameters
    ----------
    screen:
        Screen hosting the list and form regions.
    directory:
        Account store consulted for listing, loading and adding users.
    keybindings:
        Action-to-key map; defaults to :class:`KeybindingsManager` defaults.
    list_width:
        Right edge column of the list region.
    """

    def __init__(
        self,
        screen: Screen,
        directory: AccountDirectory,
        keybindings: KeybindingsManager | None = None,
        list_width: int = 30,
    ) -> None:
        self._screen = screen
        self._directory = directory
        self._keybindings = keybindings or KeybindingsManager()
        self._list_width = list_width
        self._listeners: list[UsersListListener] = []
        self._usernames: list[str] = []
        self._state = ControllerState.BROWSING
        self._error: str | None = None
        self._form = OverlayForm(screen, ADD_USER_REGION_ID, ADD_USER_PROMPT)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def usernames(self) -> list[str]:
        """The usernames shown in the list, top to bottom."""
        return list(self._usernames)

    @property
    def error(self) -> str | None:
        """Message of the last rejected add, until the next successful one."""
        return self._error

    @property
    def form(self) -> OverlayForm:
        return self._form

    @property
    def help_text(self) -> str:
        kb = self._keybindings
        return (
            f"{kb.describe('edit_user')}: edit user"
            f" | {kb.describe('select_up')}/{kb.describe('select_down')}: select user"
            f" | {kb.describe('new_user')}: new user"
            f" | {kb.describe('quit')}: close app"
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: UsersListListener) -> None:
        """Register *listener*; listeners are notified in registration order."""
        self._listeners.append(listener)

    def _notify_selected(self, account: Account | None) -> None:
        for listener in self._listeners:
            listener.on_account_selected(account)

    def _notify_edit(self, account: Account | None) -> None:
        for listener in self._listeners:
            listener.on_edit_requested(account)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def layout(self) -> None:
        """
        Create the list region on the first pass and fill it from the
        directory.  Later passes only follow the screen height.
        """
        _, height = self._screen.size
        region, created = self._screen.set_region(
            LIST_REGION_ID, -1, -1, self._list_width, height - 2,
        )
        if created:
            region.highlight = True
            region.editable = False
            region.wrap = False
            self._usernames = self._directory.usernames()
            self._sync_view()
            logger.debug("Listed %d users", len(self._usernames))

        if self._state is ControllerState.COMPOSING:
            self._form.open()

    def setup_keybindings(self) -> None:
        """Bind the list and form keys on the screen."""
        kb = self._keybindings
        bindings = [
            (LIST_REGION_ID, "select_up", lambda s, r: self.cursor_up()),
            (LIST_REGION_ID, "select_down", lambda s, r: self.cursor_down()),
            (LIST_REGION_ID, "edit_user", lambda s, r: self.submit_edit()),
            (LIST_REGION_ID, "new_user", lambda s, r: self.show_add_user()),
            (LIST_REGION_ID, "refresh", lambda s, r: self.refresh()),
            (self._form.input_id, "submit", lambda s, r: self.submit_new_user()),
            (self._form.input_id, "clear_line", lambda s, r: self.clear_draft()),
        ]
        for region_id, action, handler in bindings:
            for descriptor in kb.get_keys(action):
                self._screen.bind(region_id, descriptor, handler)

    def _view(self) -> Region:
        return self._screen.region(LIST_REGION_ID)

    def _sync_view(self) -> None:
        self._view().set_lines(self._usernames)

    def _require(self, state: ControllerState) -> None:
        if self._state is not state:
            raise ControllerStateError(
                f"expected {state.value} state, controller is {self._state.value}"
            )

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def selected_username(self) -> str:
        """Username under the cursor, or ``""`` when the list is empty."""
        region = self._view()
        _, cy = region.cursor
        try:
            return region.line(cy)
        except IndexError:
            return ""

    def _load_selected(self) -> Account | None:
        username = self.selected_username()
        if not username:
            return None
        account = self._directory.load(username)
        if account is None:
            logger.info("User %s is no longer in the directory", username)
        return account

    def activate(self) -> None:
        """Focus the list, announce the current selection and show help."""
        self._require(ControllerState.BROWSING)
        self._screen.set_focus(LIST_REGION_ID)
        self._notify_selected(self._load_selected())
        self._error = None
        set_help(self._screen, self.help_text)

    def move_cursor(self, direction: int) -> bool:
        """
        Move the selection one line up (``direction < 0``) or down.

        Returns ``False`` when already at that end of the list; nothing is
        announced in that case.
        """
        self._require(ControllerState.BROWSING)
        region = self._view()
        moved = region.cursor_up() if direction < 0 else region.cursor_down()
        if moved:
            self._notify_selected(self._load_selected())
        return moved

    def cursor_up(self) -> bool:
        return self.move_cursor(-1)

    def cursor_down(self) -> bool:
        return self.move_cursor(1)

    def submit_edit(self) -> None:
        """Ask listeners to edit the selected user."""
        self._require(ControllerState.BROWSING)
        self._notify_edit(self._load_selected())

    def refresh(self) -> None:
        """Re-read the usernames from the directory."""
        self._require(ControllerState.BROWSING)
        self._usernames = self._directory.usernames()
        self._sync_view()
        self._notify_selected(self._load_selected())

    # ------------------------------------------------------------------
    # Composing
    # ------------------------------------------------------------------

    def show_add_user(self) -> None:
        """Open the add-user form.  A no-op while it is already open."""
        if self._state is ControllerState.COMPOSING:
            return
        self._form.open()
        self._state = ControllerState.COMPOSING
        kb = self._keybindings
        set_help(
            self._screen,
            f"{kb.describe('submit')}: add user | {kb.describe('clear_line')}: clear",
        )

    def clear_draft(self) -> None:
        self._require(ControllerState.COMPOSING)
        self._form.clear()

    def submit_new_user(self) -> bool:
        """
        Close the form and add the typed username to the directory.

        Returns ``True`` if the directory accepted it.  A rejection is kept
        in :attr:`error` and shown on the help bar.
        """
        self._require(ControllerState.COMPOSING)
        username = self._form.draft

        self._form.close()
        self._state = ControllerState.BROWSING
        self._screen.set_focus(LIST_REGION_ID)

        try:
            self._directory.add(Account(username=username))
        except DirectoryError as e:
            self._error = f"cannot add user {username!r}: {e}"
            logger.warning("Cannot add user %s: %s", username, e)
            set_error(self._screen, self._error)
            return False

        self._error = None
        self._usernames.append(username)
        self._sync_view()
        set_help(self._screen, self.help_text)
        logger.info("Added user %s", username)
        return True
