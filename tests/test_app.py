"""Tests for the assembled admin screen."""

from __future__ import annotations

from io import StringIO

import pytest

from ssh_admin.app import AdminApp
from ssh_admin.config import AdminConfig
from ssh_admin.details import DETAILS_REGION_ID
from ssh_admin.directory import MemoryDirectory, YamlDirectory
from ssh_admin.models import Account
from ssh_admin.tui.keys import KEY_DOWN, KEY_ENTER, Key, char, ctrl
from ssh_admin.tui.screen import Quit, Screen
from ssh_admin.users_list import LIST_REGION_ID, ControllerState


class FakeTerminal:
    """Terminal stand-in that replays scripted key batches."""

    def __init__(self, batches: list[list[Key]], size: tuple[int, int] = (80, 24)) -> None:
        self._batches = list(batches)
        self._size = size
        self.output = StringIO()
        self.entered = False
        self.exited = False

    def __enter__(self) -> FakeTerminal:
        self.entered = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.exited = True

    def size(self) -> tuple[int, int]:
        return self._size

    def read_keys(self, timeout: float | None = None) -> list[Key]:
        if not self._batches:
            return [ctrl("c")]
        return self._batches.pop(0)


@pytest.fixture
def app(directory: MemoryDirectory) -> AdminApp:
    admin = AdminApp(Screen(80, 24), directory)
    admin.layout()
    return admin


class TestAdminApp:
    """Tests for AdminApp."""

    def test_first_layout_activates_list(self, app: AdminApp) -> None:
        focused = app.screen.focused

        assert focused is not None
        assert focused.name == LIST_REGION_ID
        assert app.screen.region(DETAILS_REGION_ID).title == "alice"

    def test_details_follow_selection(self, app: AdminApp) -> None:
        app.handle_key(KEY_DOWN)

        assert app.screen.region(DETAILS_REGION_ID).title == "bob"

    def test_enter_marks_details_for_edit(self, app: AdminApp) -> None:
        app.handle_key(KEY_ENTER)

        assert app.details.editing is True
        assert app.screen.region(DETAILS_REGION_ID).title == "edit: alice"

    def test_add_user_through_keys(self, app: AdminApp, directory: MemoryDirectory) -> None:
        app.handle_key(ctrl("n"))
        assert app.users_list.state is ControllerState.COMPOSING

        for ch in "dave":
            app.handle_key(char(ch))
        app.handle_key(KEY_ENTER)

        assert app.users_list.state is ControllerState.BROWSING
        assert directory.load("dave") == Account("dave")
        assert app.screen.region(LIST_REGION_ID).lines[-1] == "dave"

    def test_quit_key_raises_quit(self, app: AdminApp) -> None:
        with pytest.raises(Quit):
            app.handle_key(ctrl("c"))

    def test_quit_works_while_composing(self, app: AdminApp) -> None:
        app.handle_key(ctrl("n"))

        with pytest.raises(Quit):
            app.handle_key(ctrl("c"))

    def test_snapshot_shows_list_and_help(self, app: AdminApp) -> None:
        rows = app.screen.snapshot().split("\n")

        assert rows[0].startswith("alice")
        assert rows[1].startswith("bob")
        assert rows[23].startswith("enter: edit user")

    def test_help_row_follows_shrinking_terminal(self, app: AdminApp) -> None:
        app.screen.resize(80, 16)

        app.layout()

        rows = app.screen.snapshot().split("\n")
        assert len(rows) == 16
        assert rows[15].startswith("enter: edit user")

    def test_add_error_stays_on_bottom_row_after_resize(self, app: AdminApp) -> None:
        app.handle_key(ctrl("n"))
        for ch in "alice":
            app.handle_key(char(ch))
        app.handle_key(KEY_ENTER)

        app.screen.resize(100, 30)
        app.layout()

        rows = app.screen.snapshot().split("\n")
        assert rows[29].startswith("cannot add user 'alice'")

    def test_from_config(self, tmp_path) -> None:
        config = AdminConfig(users_file=tmp_path / "users.yaml", list_width=20)

        admin = AdminApp.from_config(config)

        assert isinstance(admin.directory, YamlDirectory)
        assert admin.directory.path == tmp_path / "users.yaml"


class TestRun:
    """Tests for the terminal loop."""

    def test_run_until_quit(self, directory: MemoryDirectory) -> None:
        terminal = FakeTerminal([[KEY_DOWN], [], [ctrl("c")]])
        admin = AdminApp(Screen(), directory)

        admin.run(terminal)

        assert terminal.entered and terminal.exited
        assert admin.users_list.selected_username() == "bob"
        assert "bob" in terminal.output.getvalue()

    def test_run_follows_terminal_size(self, directory: MemoryDirectory) -> None:
        terminal = FakeTerminal([], size=(100, 30))
        admin = AdminApp(Screen(), directory)

        admin.run(terminal)

        assert admin.screen.size == (100, 30)
        assert admin.screen.region(LIST_REGION_ID).rect.y1 == 28

    def test_run_adds_user(self, tmp_path) -> None:
        directory = YamlDirectory(tmp_path / "users.yaml")
        typed = [char(ch) for ch in "erin"]
        terminal = FakeTerminal([[ctrl("n")], typed, [KEY_ENTER]])
        admin = AdminApp(Screen(), directory)

        admin.run(terminal)

        assert directory.usernames() == ["erin"]
