"""Tests for configuration models."""

from pathlib import Path
from textwrap import dedent

import pytest

from ssh_admin.config import USERS_FILE_ENV, AdminConfig, config_search_paths, default_users_file


@pytest.fixture(autouse=True)
def _no_users_env(monkeypatch) -> None:
    monkeypatch.delenv(USERS_FILE_ENV, raising=False)


class TestAdminConfig:
    """Tests for AdminConfig."""

    def test_default_values(self) -> None:
        """Should have sensible defaults."""
        config = AdminConfig()

        assert config.users_file == Path.home() / ".ssh-admin" / "users.yaml"
        assert config.keybindings_file is None
        assert config.list_width == 30
        assert config.log_level == "WARNING"
        assert config.log_file is None

    def test_from_dict(self) -> None:
        config = AdminConfig.from_dict({
            "users_file": "/srv/users.yaml",
            "list_width": 40,
            "log_level": "DEBUG",
            "log_file": "/tmp/admin.log",
        })

        assert config.users_file == Path("/srv/users.yaml")
        assert config.list_width == 40
        assert config.log_level == "DEBUG"
        assert config.log_file == Path("/tmp/admin.log")

    def test_from_dict_expands_home(self) -> None:
        config = AdminConfig.from_dict({"keybindings_file": "~/keys.json"})

        assert config.keybindings_file == Path.home() / "keys.json"

    def test_from_yaml_string(self) -> None:
        config = AdminConfig.from_yaml_string(dedent("""
            users_file: /srv/users.yaml
            list_width: 25
        """))

        assert config.users_file == Path("/srv/users.yaml")
        assert config.list_width == 25

    def test_from_empty_yaml_string(self) -> None:
        config = AdminConfig.from_yaml_string("")

        assert config.list_width == 30

    def test_to_dict_round_trip(self) -> None:
        config = AdminConfig.from_dict({"users_file": "/srv/users.yaml", "log_file": "/tmp/a.log"})

        data = config.to_dict()

        assert data["users_file"] == "/srv/users.yaml"
        assert data["keybindings_file"] is None
        assert AdminConfig.from_dict(data) == config


class TestLoad:
    """Tests for AdminConfig.load."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "admin.yaml"
        path.write_text("list_width: 50\n")

        config, source = AdminConfig.load(path)

        assert source == path
        assert config.list_width == 50

    def test_explicit_missing_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            AdminConfig.load(tmp_path / "missing.yaml")

    def test_search_path_in_cwd(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "ssh-admin.yaml").write_text("list_width: 20\n")

        config, source = AdminConfig.load()

        assert source == tmp_path / "ssh-admin.yaml"
        assert config.list_width == 20

    def test_env_overrides_users_file(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "admin.yaml"
        path.write_text("users_file: /srv/users.yaml\n")
        monkeypatch.setenv(USERS_FILE_ENV, str(tmp_path / "env-users.yaml"))

        config, _ = AdminConfig.load(path)

        assert config.users_file == tmp_path / "env-users.yaml"

    def test_default_users_file_from_env(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv(USERS_FILE_ENV, str(tmp_path / "u.yaml"))

        assert default_users_file() == tmp_path / "u.yaml"

    def test_search_paths(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        paths = config_search_paths()

        assert paths[0] == tmp_path / "ssh-admin.yaml"
        assert paths[1].name == "config.yaml"
