"""
The ssh-admin screen.

Wires the users list, the account details panel and the help bar onto one
:class:`~ssh_admin.tui.screen.Screen` and drives them from the terminal.
"""

from __future__ import annotations

from ssh_admin.config import AdminConfig
from ssh_admin.details import AccountDetails
from ssh_admin.directory import AccountDirectory, YamlDirectory
from ssh_admin.logging import get_logger
from ssh_admin.tui import help_bar
from ssh_admin.tui.keybindings import KeybindingsManager
from ssh_admin.tui.keys import Key
from ssh_admin.tui.region import Region
from ssh_admin.tui.renderer import TUIRenderer
from ssh_admin.tui.screen import Quit, Screen
from ssh_admin.tui.terminal import Terminal
from ssh_admin.users_list import UsersList

logger = get_logger("app")

# Seconds between checks for a terminal resize while idle
POLL_INTERVAL = 0.5


class AdminApp:
    """
    Users list on the left, details on the right, help at the bottom.

    Parameters
    ----------
    screen:
        Screen to lay the regions out on.
    directory:
        Account store shared by every part of the screen.
    keybindings:
        Action-to-key map; defaults to the built-in bindings.
    list_width:
        Right edge column of the users list.
    """

    def __init__(
        self,
        screen: Screen,
        directory: AccountDirectory,
        keybindings: KeybindingsManager | None = None,
        list_width: int = 30,
    ) -> None:
        self.screen = screen
        self.directory = directory
        self.keybindings = keybindings or KeybindingsManager()
        self.users_list = UsersList(screen, directory, self.keybindings, list_width)
        self.details = AccountDetails(screen, left=list_width)
        self.users_list.add_listener(self.details)
        self._activated = False

        for descriptor in self.keybindings.get_keys("quit"):
            screen.bind(None, descriptor, self._quit)
        self.users_list.setup_keybindings()

    @classmethod
    def from_config(cls, config: AdminConfig) -> AdminApp:
        """Build the app on a YAML directory as described by *config*."""
        return cls(
            Screen(),
            YamlDirectory(config.users_file),
            KeybindingsManager.load(config.keybindings_file),
            list_width=config.list_width,
        )

    @staticmethod
    def _quit(screen: Screen, region: Region | None) -> None:
        raise Quit()

    def layout(self) -> None:
        """One layout pass; the first one also focuses the list."""
        self.users_list.layout()
        self.details.layout()
        help_bar.layout(self.screen)
        if not self._activated:
            self._activated = True
            self.users_list.activate()

    def handle_key(self, key: Key) -> bool:
        """Dispatch one key and lay the screen out again."""
        consumed = self.screen.dispatch(key)
        self.layout()
        return consumed

    def run(self, terminal: Terminal | None = None) -> None:
        """Run until the quit key is pressed."""
        terminal = terminal or Terminal()
        with terminal:
            renderer = TUIRenderer(terminal.output)
            try:
                while True:
                    self.screen.resize(*terminal.size())
                    self.layout()
                    width, height = self.screen.size
                    renderer.render(
                        self.screen.compose(),
                        width,
                        height,
                        cursor=self.screen.cursor_position(),
                    )
                    for key in terminal.read_keys(timeout=POLL_INTERVAL):
                        self.handle_key(key)
            except Quit:
                logger.info("Quit requested")
