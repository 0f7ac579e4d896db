"""Service layer for todo-tui."""

from todo_tui.services.config_service import ConfigService, get_config_service
from todo_tui.services.todo_service import TaskStore, TodoService

__all__ = [
    "ConfigService",
    "TaskStore",
    "TodoService",
    "get_config_service",
]
