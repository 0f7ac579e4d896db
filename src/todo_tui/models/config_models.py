"""Configuration models for todo-tui.

The config file is plain JSON validated by these models; every section has
defaults so an empty or missing file yields a usable configuration.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage configuration."""

    path: str | None = Field(
        default=None, description="Database file path (default: per-user config dir)"
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        """Treat blank paths as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a known logging level name."""
        name = v.strip().upper()
        if name not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return name


class AppConfig(BaseModel):
    """Main todo-tui configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
