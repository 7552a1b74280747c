"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: the
application logger, config and data directories all point into tmp_path.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from taskflow.adapters.jsonfile import (
    JsonCollectionStore,
    JsonProjectRepository,
    JsonTaskRepository,
)
from taskflow.services.entity_service import EntityService


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


def _reset_logger() -> None:
    import taskflow.utils.logger as logger_mod

    logger_mod._logger = None
    existing = logging.getLogger("taskflow")
    for handler in list(existing.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            existing.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send application logs to a per-test directory."""
    log_dir = tmp_path / "logs"
    _reset_logger()
    with patch("taskflow.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    _reset_logger()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config and data directories at tmp_path and drop env overrides."""
    import taskflow.config as config_mod

    monkeypatch.delenv(config_mod.ENV_DATA_DIR, raising=False)
    monkeypatch.delenv(config_mod.ENV_LOG_LEVEL, raising=False)
    monkeypatch.setattr(config_mod, "_config_manager", None)
    with patch("taskflow.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("taskflow.config.user_data_dir", return_value=str(tmp_path / "appdata")):
            yield
    config_mod._config_manager = None


# ---------------------------------------------------------------------------
# Store, repositories, service
# ---------------------------------------------------------------------------


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(data_dir):
    return JsonCollectionStore(data_dir)


@pytest.fixture
def project_repo(store):
    return JsonProjectRepository(store)


@pytest.fixture
def task_repo(store):
    return JsonTaskRepository(store)


@pytest.fixture
def service(project_repo, task_repo):
    return EntityService(project_repo, task_repo)
