"""Tests for configuration management."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskflow.config import (
    Config,
    ConfigManager,
    ServerConfig,
    get_config_manager,
)
from taskflow.errors import ValidationError


@pytest.fixture
def config_manager():
    return ConfigManager()


def test_default_config(config_manager, tmp_path):
    config = config_manager.config

    assert isinstance(config, Config)
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 3000
    assert config.logging.level == "INFO"
    assert Path(config.store.data_dir) == tmp_path / "appdata" / "data"


def test_config_file_location(config_manager, tmp_path):
    assert config_manager.config_file == tmp_path / "config" / "default.json"


def test_save_and_reload(config_manager):
    config_manager.set("server.port", 8080)

    reloaded = ConfigManager()
    assert reloaded.config.server.port == 8080
    assert json.loads(reloaded.config_file.read_text(encoding="utf-8"))["server"]["port"] == 8080


def test_get_nested_value(config_manager):
    assert config_manager.get("server.host") == "127.0.0.1"
    assert config_manager.get("logging.directory") is None


@pytest.mark.parametrize("key", ["server.missing", "logging.level.extra", "nope", "server"])
def test_get_unknown_key(config_manager, key):
    with pytest.raises(ValidationError):
        config_manager.get(key)


def test_set_coerces_value(config_manager):
    config_manager.set("server.port", "8081")
    assert config_manager.get("server.port") == 8081


def test_set_invalid_value_rejected(config_manager):
    with pytest.raises(ValidationError, match="Invalid value for server.port"):
        config_manager.set("server.port", 0)

    assert config_manager.get("server.port") == 3000
    assert not config_manager.config_file.exists()


def test_set_unknown_key_rejected(config_manager):
    with pytest.raises(ValidationError, match="Unknown configuration key"):
        config_manager.set("server.colour", "blue")


def test_corrupt_file_falls_back_to_defaults(config_manager):
    config_manager.config_dir.mkdir(parents=True)
    config_manager.config_file.write_text("{oops", encoding="utf-8")

    assert config_manager.load_config() == Config()


def test_profiles_use_separate_files(tmp_path):
    work = ConfigManager("work")
    work.set("logging.level", "DEBUG")

    assert work.config_file.name == "work.json"
    assert ConfigManager().config.logging.level == "INFO"


def test_env_overrides(config_manager, monkeypatch, tmp_path):
    monkeypatch.setenv("TASKFLOW_DATA_DIR", str(tmp_path / "elsewhere"))
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "WARNING")

    effective = config_manager.effective_config()

    assert effective.store.data_dir == str(tmp_path / "elsewhere")
    assert effective.logging.level == "WARNING"
    # Stored configuration is untouched
    assert config_manager.config.logging.level == "INFO"


def test_server_port_bounds():
    with pytest.raises(ValueError):
        ServerConfig(port=70000)


def test_get_config_manager_keeps_profile():
    manager = get_config_manager("work")

    assert get_config_manager() is manager
    assert get_config_manager("default") is not manager
