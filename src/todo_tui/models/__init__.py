"""Data models for todo-tui."""

from todo_tui.models.config_models import AppConfig, LoggingConfig, StorageConfig
from todo_tui.models.task import Priority, Task, new_task_id

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "StorageConfig",
    "Priority",
    "Task",
    "new_task_id",
]
