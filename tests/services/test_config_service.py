"""Unit tests for services/config_service.py and models/config_models.py.

Uses a real ConfigService pointed at a tmp_path directory.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from todo_tui.models.config_models import AppConfig, LoggingConfig, StorageConfig
from todo_tui.services.config_service import DB_PATH_ENV, ConfigService, get_config_service


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def svc(tmp_path, monkeypatch):
    """ConfigService backed by a temporary directory."""
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    get_config_service.cache_clear()
    with patch(
        "todo_tui.services.config_service.user_config_dir", return_value=str(tmp_path)
    ):
        yield ConfigService()
    get_config_service.cache_clear()


def _write(svc: ConfigService, data) -> None:
    svc.config_path.write_text(json.dumps(data), encoding="utf-8")


# ===========================================================================
# Loading
# ===========================================================================


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, svc):
        config = svc.load_config()
        assert config == AppConfig()
        assert config.storage.path is None
        assert config.logging.level == "INFO"
        assert not svc.config_path.exists()

    def test_reads_file(self, svc):
        _write(svc, {"storage": {"path": "/data/todo.db"}, "logging": {"level": "debug"}})
        config = svc.load_config()
        assert config.storage.path == "/data/todo.db"
        assert config.logging.level == "DEBUG"

    def test_partial_file_fills_defaults(self, svc):
        _write(svc, {"logging": {"level": "WARNING"}})
        assert svc.config.storage == StorageConfig()

    def test_corrupt_file_raises(self, svc):
        svc.config_path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RuntimeError, match="Failed to load config"):
            svc.load_config()

    def test_invalid_level_raises(self, svc):
        _write(svc, {"logging": {"level": "LOUD"}})
        with pytest.raises(RuntimeError, match="Failed to load config"):
            svc.load_config()

    def test_config_is_cached(self, svc):
        first = svc.config
        _write(svc, {"logging": {"level": "ERROR"}})
        assert svc.config is first


# ===========================================================================
# Database path
# ===========================================================================


class TestDbPath:
    def test_unset_by_default(self, svc):
        assert svc.db_path() is None

    def test_from_config(self, svc):
        _write(svc, {"storage": {"path": "  /tmp/x.db  "}})
        assert svc.db_path() == "/tmp/x.db"

    def test_environment_overrides_config(self, svc, monkeypatch):
        _write(svc, {"storage": {"path": "/tmp/x.db"}})
        monkeypatch.setenv(DB_PATH_ENV, "/tmp/env.db")
        assert svc.db_path() == "/tmp/env.db"

    def test_blank_environment_ignored(self, svc, monkeypatch):
        monkeypatch.setenv(DB_PATH_ENV, "   ")
        assert svc.db_path() is None


# ===========================================================================
# Models and factory
# ===========================================================================


def test_blank_storage_path_is_unset():
    assert StorageConfig(path="  ").path is None


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        LoggingConfig(level="chatty")


def test_get_config_service_is_singleton():
    get_config_service.cache_clear()
    try:
        assert get_config_service() is get_config_service()
    finally:
        get_config_service.cache_clear()
