"""Tests for the ``authchain`` CLI via Typer's CliRunner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from authchain import __version__
from authchain.app import app
from authchain.exit_codes import EXIT_PLUGIN_ERROR
from authchain.plugins.base import ChallengePlugin, ExtractionPlugin, ResetPlugin
from authchain.plugins.manager import ENTRY_POINT_GROUP


class SessionPlugin(ExtractionPlugin, ResetPlugin):
    def extract_credentials(self, request: Any, response: Any) -> Any:
        return None

    def reset_credentials(self, request: Any) -> None:
        pass


class BasicChallenge(ChallengePlugin):
    def challenge(self, request: Any, response: Any) -> bool:
        return True


class MockEP:
    def __init__(self, name: str, cls: type) -> None:
        self.name = name
        self._cls = cls

    def load(self) -> type:
        return self._cls


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr("authchain.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("AUTHCHAIN_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def entry_points():
    eps = [MockEP("session", SessionPlugin), MockEP("basic", BasicChallenge)]

    def _entry_points(group: str) -> list[MockEP]:
        return eps if group == ENTRY_POINT_GROUP else []

    with patch(
        "authchain.plugins.manager.importlib.metadata.entry_points",
        side_effect=_entry_points,
    ):
        yield eps


class TestRoot:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"authchain {__version__}" in result.output


class TestPluginsCommands:
    def test_list_json(self, runner: CliRunner, entry_points) -> None:
        result = runner.invoke(app, ["--json", "plugins", "list"])
        assert result.exit_code == 0, result.output
        records = json.loads(result.stdout)
        assert records == [
            {
                "name": "session",
                "type": f"{__name__}.SessionPlugin",
                "capabilities": "extraction, reset",
            },
            {
                "name": "basic",
                "type": f"{__name__}.BasicChallenge",
                "capabilities": "challenge",
            },
        ]

    def test_list_honours_config_order(
        self, runner: CliRunner, entry_points, isolated: Path
    ) -> None:
        config = isolated / "cfg.json"
        config.write_text(json.dumps({"plugins": {"order": ["basic"]}}), encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config), "--plain", "plugins", "list"])
        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().splitlines()
        assert lines[0] == "name\ttype\tcapabilities"
        assert lines[1].startswith("basic\t")
        assert lines[2].startswith("session\t")

    def test_list_empty(self, runner: CliRunner) -> None:
        with patch(
            "authchain.plugins.manager.importlib.metadata.entry_points",
            return_value=[],
        ):
            result = runner.invoke(app, ["--plain", "plugins", "list"])
        assert result.exit_code == 0
        assert "No plugins discovered" in result.output

    def test_show(self, runner: CliRunner, entry_points) -> None:
        result = runner.invoke(app, ["--json", "plugins", "show", "basic"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["capabilities"] == ["challenge"]

    def test_show_unknown(self, runner: CliRunner, entry_points) -> None:
        result = runner.invoke(app, ["--no-color", "plugins", "show", "missing"])
        assert result.exit_code == EXIT_PLUGIN_ERROR
        assert "Plugin 'missing' is not loaded" in result.output


class TestConfigCommands:
    def test_show_defaults(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--json", "--quiet", "config", "show"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {
            "plugins": {"enabled": [], "disabled": [], "order": [], "options": {}}
        }

    def test_show_project_config(self, runner: CliRunner, isolated: Path) -> None:
        (isolated / "authchain.json").write_text(
            json.dumps({"plugins": {"disabled": ["legacy"]}}), encoding="utf-8"
        )
        result = runner.invoke(app, ["--json", "--quiet", "config", "show"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["plugins"]["disabled"] == ["legacy"]

    def test_path(self, runner: CliRunner, isolated: Path) -> None:
        result = runner.invoke(app, ["config", "path"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(isolated / "xdg" / "authchain" / "config.json")


class TestVerbose:
    def test_verbose_routes_log_records_to_stderr(self, runner: CliRunner, entry_points) -> None:
        result = runner.invoke(app, ["--verbose", "--no-color", "--json", "plugins", "list"])
        assert result.exit_code == 0, result.output
        assert "[debug] Discovered 2 plugin(s): session, basic" in result.output
        assert "Loaded plugin 'session'" in result.output
