"""Migration 001: the ``todos`` table and its indexes."""

from __future__ import annotations

import sqlite3

from todo_tui.adapters.sqlite import schema
from todo_tui.adapters.sqlite.migrations.runner import Migration


class CreateTodos(Migration):
    version = 1
    description = "Create todos table"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(schema.CREATE_TODOS_TABLE)
        for statement in schema.CREATE_TODO_INDEXES:
            connection.execute(statement)


ALL_MIGRATIONS: list[Migration] = [CreateTodos()]
