"""Tests for authchain.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from authchain.config import (
    _atomic_write,
    get_config_dir,
    load_config,
    resolve_config_path,
    save_config,
    user_config_path,
)
from authchain.exceptions import ConfigError
from authchain.models import AuthChainConfig, PluginsConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and the working directory at *tmp_path*."""
    monkeypatch.setattr("authchain.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("AUTHCHAIN_CONFIG", raising=False)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return tmp_path


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestConfigDir:
    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("authchain.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))

        result = get_config_dir()
        assert result == tmp_path / "custom" / "authchain"
        assert result.is_dir()

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("authchain.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".config" / "authchain"

    def test_non_xdg_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("authchain.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".authchain"

    def test_user_config_path(self, isolated: Path) -> None:
        assert user_config_path() == isolated / "xdg" / "authchain" / "config.json"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, "{}\n")
        assert target.read_text() == "{}\n"

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "one")
        _atomic_write(target, "two")
        assert target.read_text() == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_defaults_when_nothing_exists(self, isolated: Path) -> None:
        assert resolve_config_path() is None
        config = load_config()
        assert config == AuthChainConfig()
        assert config.plugins.enabled == []

    def test_user_config(self, isolated: Path) -> None:
        _write_json(user_config_path(), {"plugins": {"disabled": ["legacy"]}})
        assert load_config().plugins.disabled == ["legacy"]

    def test_project_config_beats_user(self, isolated: Path) -> None:
        _write_json(user_config_path(), {"plugins": {"disabled": ["user"]}})
        _write_json(Path.cwd() / "authchain.json", {"plugins": {"disabled": ["project"]}})

        assert load_config().plugins.disabled == ["project"]

    def test_env_beats_project(self, isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = isolated / "env.json"
        _write_json(env_file, {"plugins": {"order": ["env"]}})
        _write_json(Path.cwd() / "authchain.json", {"plugins": {"order": ["project"]}})
        monkeypatch.setenv("AUTHCHAIN_CONFIG", str(env_file))

        assert resolve_config_path() == env_file
        assert load_config().plugins.order == ["env"]

    def test_explicit_path_beats_env(self, isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = isolated / "env.json"
        explicit = isolated / "explicit.json"
        _write_json(env_file, {"plugins": {"order": ["env"]}})
        _write_json(explicit, {"plugins": {"order": ["explicit"]}})
        monkeypatch.setenv("AUTHCHAIN_CONFIG", str(env_file))

        assert load_config(explicit).plugins.order == ["explicit"]
        assert load_config(str(explicit)).plugins.order == ["explicit"]

    def test_missing_explicit_path(self, isolated: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(isolated / "absent.json")

    def test_missing_env_path(self, isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTHCHAIN_CONFIG", str(isolated / "absent.json"))
        with pytest.raises(ConfigError, match="AUTHCHAIN_CONFIG"):
            load_config()

    def test_invalid_json(self, isolated: Path) -> None:
        bad = isolated / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(bad)

    def test_invalid_shape(self, isolated: Path) -> None:
        bad = isolated / "bad.json"
        _write_json(bad, {"plugins": {"enabled": "not-a-list"}})
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(bad)

    def test_extra_keys_preserved(self, isolated: Path) -> None:
        path = isolated / "extra.json"
        _write_json(path, {"app": {"name": "demo"}})
        assert load_config(path).model_extra == {"app": {"name": "demo"}}


class TestSaveConfig:
    def test_round_trip_to_user_config(self, isolated: Path) -> None:
        config = AuthChainConfig(
            plugins=PluginsConfig(order=["session"], options={"basic": {"realm": "x"}})
        )
        written = save_config(config)

        assert written == user_config_path()
        assert load_config() == config

    def test_explicit_target(self, isolated: Path) -> None:
        target = isolated / "out" / "authchain.json"
        save_config(AuthChainConfig(), target)
        assert json.loads(target.read_text()) == {
            "plugins": {"enabled": [], "disabled": [], "order": [], "options": {}}
        }
