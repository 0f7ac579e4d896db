"""SQLite adapter module - local database storage implementation."""

from todo_tui.adapters.sqlite.connection import connect, default_db_path
from todo_tui.adapters.sqlite.task_store import SqliteTaskStore, StoreError, open_store

__all__ = [
    "SqliteTaskStore",
    "StoreError",
    "connect",
    "default_db_path",
    "open_store",
]
