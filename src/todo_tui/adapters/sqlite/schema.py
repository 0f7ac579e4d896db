"""Database schema definitions for the local task store."""

from __future__ import annotations

# Tasks table - one row per task, keyed by the task's UUID
CREATE_TODOS_TABLE = """
CREATE TABLE IF NOT EXISTS todos (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    done BOOLEAN NOT NULL DEFAULT 0,
    priority INTEGER NOT NULL DEFAULT 1,
    has_deadline BOOLEAN NOT NULL DEFAULT 0,
    deadline DATETIME,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

CREATE_TODO_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_todos_done_priority ON todos(done, priority)",
    "CREATE INDEX IF NOT EXISTS idx_todos_deadline ON todos(deadline)",
]

# Column order used by SELECT statements in the task store
TODO_COLUMNS = (
    "id",
    "title",
    "done",
    "priority",
    "has_deadline",
    "deadline",
    "created_at",
    "updated_at",
)
