"""Configuration service for todo-tui.

Reads ``config.json`` from the per-user configuration directory. A missing
file means defaults; a corrupt file is an error. The ``TODO_TUI_DB``
environment variable overrides the configured database path.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir

from todo_tui.models.config_models import AppConfig

DB_PATH_ENV = "TODO_TUI_DB"


class ConfigService:
    """Service for loading the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("todo-tui"))
        self.config_path = self.config_dir / "config.json"
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk.

        Raises:
            RuntimeError: If the file exists but cannot be parsed or validated
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = AppConfig()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def db_path(self) -> str | None:
        """Database path override from the environment or config, if any."""
        env_path = os.environ.get(DB_PATH_ENV, "").strip()
        if env_path:
            return env_path
        return self.config.storage.path


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide config service."""
    return ConfigService()
