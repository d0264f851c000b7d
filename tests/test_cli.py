"""Tests for CLI commands."""

import json
import logging
from io import StringIO
from pathlib import Path
from textwrap import dedent
from unittest.mock import patch

import pytest
import yaml

from ssh_admin.cli import _create_directory, cmd_add, cmd_config, cmd_list, cmd_run, cmd_show, main
from ssh_admin.config import USERS_FILE_ENV
from ssh_admin.tui.keys import ctrl
from ssh_admin.tui.terminal import TerminalError


class MockArgs:
    """Mock argparse namespace for testing."""

    def __init__(self, **kwargs):
        self.config = kwargs.get("config")
        self.verbose = kwargs.get("verbose", False)
        self.json = kwargs.get("json", False)
        self.username = kwargs.get("username")
        self.email = kwargs.get("email", "")
        self.keys = kwargs.get("keys")
        self.config_command = kwargs.get("config_command")
        self.output = kwargs.get("output", "ssh-admin.yaml")


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch):
    """Run every command in an empty directory with logging reset afterwards."""
    monkeypatch.delenv(USERS_FILE_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    logging.getLogger("ssh_admin").handlers.clear()
    logging.getLogger("ssh_admin").setLevel(logging.NOTSET)


@pytest.fixture
def users_file(tmp_path: Path) -> Path:
    path = tmp_path / "users.yaml"
    path.write_text(dedent("""
        users:
          - username: alice
            email: alice@example.com
            public_keys:
              - ssh-ed25519 AAAA alice
          - username: bob
    """))
    return path


@pytest.fixture
def config_file(tmp_path: Path, users_file: Path) -> Path:
    path = tmp_path / "admin.yaml"
    path.write_text(f"users_file: {users_file}\n")
    return path


class TestCreateDirectory:
    """Tests for _create_directory helper."""

    def test_uses_config_users_file(self, config_file: Path, users_file: Path) -> None:
        directory = _create_directory(str(config_file))

        assert directory.path == users_file

    def test_missing_config_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            _create_directory(str(tmp_path / "missing.yaml"))


class ScriptedTerminal:
    """Terminal stand-in that presses the quit key straight away."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.output = StringIO()

    def __enter__(self):
        if self.fail:
            raise TerminalError("ssh-admin needs an interactive terminal")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def size(self) -> tuple[int, int]:
        return 80, 24

    def read_keys(self, timeout=None):
        return [ctrl("c")]


class TestCmdRun:
    """Tests for the run command."""

    def test_run_until_quit(self, config_file: Path) -> None:
        with patch("ssh_admin.app.Terminal", return_value=ScriptedTerminal()):
            cmd_run(MockArgs(config=str(config_file)))

    def test_malformed_users_file_exits(self, tmp_path: Path, capsys) -> None:
        """A broken users file is reported instead of ending in a traceback."""
        broken = tmp_path / "broken.yaml"
        broken.write_text("users: [unclosed")
        config = tmp_path / "admin.yaml"
        config.write_text(f"users_file: {broken}\n")

        with patch("ssh_admin.app.Terminal", return_value=ScriptedTerminal()):
            with pytest.raises(SystemExit) as exc_info:
                cmd_run(MockArgs(config=str(config)))

        assert exc_info.value.code == 1
        assert "cannot parse" in capsys.readouterr().out

    def test_wrongly_shaped_users_file_exits(self, tmp_path: Path, capsys) -> None:
        broken = tmp_path / "list.yaml"
        broken.write_text("- alice\n- bob\n")
        config = tmp_path / "admin.yaml"
        config.write_text(f"users_file: {broken}\n")

        with patch("ssh_admin.app.Terminal", return_value=ScriptedTerminal()):
            with pytest.raises(SystemExit):
                cmd_run(MockArgs(config=str(config)))

        assert "users" in capsys.readouterr().out

    def test_no_terminal_exits(self, config_file: Path, capsys) -> None:
        with patch("ssh_admin.app.Terminal", return_value=ScriptedTerminal(fail=True)):
            with pytest.raises(SystemExit) as exc_info:
                cmd_run(MockArgs(config=str(config_file)))

        assert exc_info.value.code == 1
        assert "interactive terminal" in capsys.readouterr().out


class TestCmdList:
    """Tests for the list command."""

    def test_list_table(self, config_file: Path, capsys) -> None:
        cmd_list(MockArgs(config=str(config_file)))

        captured = capsys.readouterr()
        assert "alice" in captured.out
        assert "bob" in captured.out
        assert "Total: 2 users" in captured.out

    def test_list_json_output(self, config_file: Path, capsys) -> None:
        """Should output JSON with --json flag."""
        cmd_list(MockArgs(config=str(config_file), json=True))

        data = json.loads(capsys.readouterr().out)
        assert [u["username"] for u in data] == ["alice", "bob"]
        assert data[0]["public_keys"] == ["ssh-ed25519 AAAA alice"]

    def test_list_broken_file_exits(self, tmp_path: Path, capsys) -> None:
        broken = tmp_path / "broken.yaml"
        broken.write_text("users: [unclosed")
        config = tmp_path / "admin.yaml"
        config.write_text(f"users_file: {broken}\n")

        with pytest.raises(SystemExit):
            cmd_list(MockArgs(config=str(config)))


class TestCmdShow:
    """Tests for the show command."""

    def test_show_user(self, config_file: Path, capsys) -> None:
        cmd_show(MockArgs(config=str(config_file), username="alice"))

        captured = capsys.readouterr()
        assert "alice@example.com" in captured.out
        assert "Public keys: 1" in captured.out

    def test_show_missing_user(self, config_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cmd_show(MockArgs(config=str(config_file), username="nobody"))

        assert exc_info.value.code == 1
        assert "User not found: nobody" in capsys.readouterr().out


class TestCmdAdd:
    """Tests for the add command."""

    def test_add_user(self, config_file: Path, users_file: Path, capsys) -> None:
        cmd_add(MockArgs(
            config=str(config_file),
            username="carol",
            email="carol@example.com",
            keys=["ssh-ed25519 BBBB carol"],
        ))

        assert "Added user carol" in capsys.readouterr().out
        data = yaml.safe_load(users_file.read_text())
        assert data["users"][-1] == {
            "username": "carol",
            "email": "carol@example.com",
            "public_keys": ["ssh-ed25519 BBBB carol"],
        }

    def test_add_duplicate_exits(self, config_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cmd_add(MockArgs(config=str(config_file), username="bob"))

        assert exc_info.value.code == 1
        assert "already exists" in capsys.readouterr().out


class TestCmdConfig:
    """Tests for the config command."""

    def test_config_show_defaults(self, capsys) -> None:
        cmd_config(MockArgs(config_command="show"))

        captured = capsys.readouterr()
        assert "No config file found" in captured.out
        assert "list_width: 30" in captured.out

    def test_config_init(self, tmp_path: Path, capsys) -> None:
        output = tmp_path / "new.yaml"

        cmd_config(MockArgs(config_command="init", output=str(output)))

        data = yaml.safe_load(output.read_text())
        assert data["list_width"] == 30
        assert "Created config file" in capsys.readouterr().out

    def test_config_init_refuses_overwrite(self, tmp_path: Path) -> None:
        output = tmp_path / "new.yaml"
        output.write_text("keep: me\n")

        with pytest.raises(SystemExit):
            cmd_config(MockArgs(config_command="init", output=str(output)))

        assert output.read_text() == "keep: me\n"

    def test_config_path(self, capsys) -> None:
        cmd_config(MockArgs(config_command="path"))

        assert "ssh-admin.yaml" in capsys.readouterr().out


class TestMain:
    """Tests for argument parsing and dispatch."""

    def test_add_then_list(self, tmp_path: Path, capsys, monkeypatch) -> None:
        monkeypatch.setenv(USERS_FILE_ENV, str(tmp_path / "env-users.yaml"))

        main(["add", "dave", "-e", "dave@example.com", "-k", "k1", "-k", "k2"])
        main(["list", "--json"])

        out = capsys.readouterr().out
        data = json.loads(out[out.index("["):])
        assert data == [{"username": "dave", "email": "dave@example.com", "public_keys": ["k1", "k2"]}]

    def test_show_with_config_flag(self, config_file: Path, capsys) -> None:
        main(["-c", str(config_file), "show", "bob"])

        assert "bob" in capsys.readouterr().out
