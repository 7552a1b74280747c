"""Configuration management for taskflow."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from taskflow.errors import ValidationError

_APP_NAME = "taskflow"

ENV_DATA_DIR = "TASKFLOW_DATA_DIR"
ENV_LOG_LEVEL = "TASKFLOW_LOG_LEVEL"


def default_data_dir() -> str:
    """Directory holding the projects/tasks collections by default."""
    return str(Path(user_data_dir(_APP_NAME)) / "data")


class StoreConfig(BaseModel):
    """Collection store configuration."""

    data_dir: str = Field(default_factory=default_data_dir)


class ServerConfig(BaseModel):
    """REST server configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)


class LoggingConfig(BaseModel):
    """Logging configuration.

    ``directory`` defaults to the platform log directory when unset.
    """

    level: str = Field(default="INFO")
    directory: Optional[str] = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages taskflow configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(_APP_NAME))
        self.config_file = self.config_dir / f"{profile}.json"

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the configuration as stored on disk."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except Exception:
                # If config is corrupted, return default
                return Config()
        return Config()

    def effective_config(self) -> Config:
        """Get the configuration with environment overrides applied."""
        config = self.config.model_copy(deep=True)
        data_dir = os.environ.get(ENV_DATA_DIR)
        if data_dir:
            config.store.data_dir = data_dir
        log_level = os.environ.get(ENV_LOG_LEVEL)
        if log_level:
            config.logging.level = log_level
        return config

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key (e.g. "server.port").

        Raises:
            ValidationError: If the key does not name a setting
        """
        value: Any = self.config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise ValidationError(f"Unknown configuration key: {key}")
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            raise ValidationError(f"Not a single setting: {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save the profile.

        Raises:
            ValidationError: If the key is unknown or the value is not acceptable
        """
        self.get(key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            config = Config(**config_dict)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid value for {key}: {e.errors()[0]['msg']}"
            ) from e

        self._config = config
        self.save_config()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: Optional[str] = None) -> ConfigManager:
    """Get or create the global config manager.

    Without a profile, the current manager is returned (or one for the
    "default" profile if none exists yet).
    """
    global _config_manager
    if profile is None:
        profile = _config_manager.profile if _config_manager else "default"
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
