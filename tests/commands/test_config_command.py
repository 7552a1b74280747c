"""Tests for configuration commands."""

import json

from typer.testing import CliRunner

from taskflow.config import get_config_manager
from taskflow.main import app

runner = CliRunner()


class TestViewConfig:
    def test_view_json(self):
        result = runner.invoke(app, ["config", "view", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["server"] == {"host": "127.0.0.1", "port": 3000}
        assert data["logging"]["level"] == "INFO"


class TestGetConfig:
    def test_get_value(self):
        result = runner.invoke(app, ["config", "get", "server.port"])

        assert result.exit_code == 0
        assert result.output.strip() == "3000"

    def test_get_unset_value(self):
        result = runner.invoke(app, ["config", "get", "logging.directory"])
        assert result.output.strip() == "-"

    def test_get_unknown_key(self):
        result = runner.invoke(app, ["config", "get", "server.colour"])

        assert result.exit_code == 2
        assert "Unknown configuration key: server.colour" in result.output


class TestSetConfig:
    def test_set_persists(self):
        result = runner.invoke(app, ["config", "set", "server.port", "8080"])

        assert result.exit_code == 0
        assert "set to '8080'" in result.output
        assert runner.invoke(app, ["config", "get", "server.port"]).output.strip() == "8080"

    def test_set_uses_selected_profile(self):
        result = runner.invoke(
            app, ["--profile", "work", "config", "set", "logging.level", "DEBUG"]
        )

        assert result.exit_code == 0
        manager = get_config_manager()
        assert manager.profile == "work"
        assert manager.config_file.name == "work.json"
        assert json.loads(manager.config_file.read_text(encoding="utf-8"))["logging"]["level"] == "DEBUG"

    def test_set_invalid_value(self):
        result = runner.invoke(app, ["config", "set", "server.port", "99999"])

        assert result.exit_code == 2
        assert "Invalid value for server.port" in result.output
