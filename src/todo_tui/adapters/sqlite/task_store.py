"""SQLite task store with full-list reconciliation.

``save`` takes the complete, authoritative in-memory list and makes the
``todos`` table match it inside one transaction: rows whose IDs are absent
from the list are deleted, present ones are updated, new ones inserted.
Absence from the list is the only deletion signal, so callers must always
pass the whole list, never a delta.

The public methods report failures as human-readable status strings
(empty string on success) so the UI can show them inline; internally each
step raises ``StoreError``.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from pathlib import Path

from todo_tui.adapters.sqlite.connection import connect
from todo_tui.adapters.sqlite.schema import TODO_COLUMNS
from todo_tui.adapters.sqlite.utils import decode_datetime, encode_datetime, utc_timestamp
from todo_tui.core.ordering import sort_tasks
from todo_tui.models.task import Priority, Task
from todo_tui.utils.logger import get_logger

_SELECT_ALL = (
    f"SELECT {', '.join(TODO_COLUMNS)} FROM todos "
    "ORDER BY done ASC, priority DESC, has_deadline DESC, deadline ASC, title ASC"
)


class StoreError(RuntimeError):
    """A store operation failed; the message is suitable for the status line."""


class SqliteTaskStore:
    """Durable task list backed by a single SQLite table."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self._closed = False

    # -------------------- load --------------------

    def load(self) -> tuple[list[Task], str]:
        """Read every stored task in canonical order.

        Returns:
            Tuple of (tasks, status); on failure tasks is empty and status
            describes the error
        """
        try:
            rows = self.connection.execute(_SELECT_ALL).fetchall()
            tasks = [_row_to_task(row) for row in rows]
        except (sqlite3.Error, ValueError) as e:
            get_logger().error("load failed: %s", e)
            return [], f"Load failed: {e}"

        get_logger().debug("loaded %d task(s)", len(tasks))
        return sort_tasks(tasks), ""

    # -------------------- save --------------------

    def save(self, tasks: Iterable[Task]) -> str:
        """Reconcile the store with the complete task list.

        Returns:
            Empty string on success, otherwise a description of the failed step
        """
        ordered = sort_tasks(tasks)
        try:
            self._begin()
            existing_ids = self._existing_ids()
            saving_ids = {task.id for task in ordered}

            removed = [task_id for task_id in existing_ids if task_id not in saving_ids]
            for task_id in removed:
                self._delete(task_id)

            known = set(existing_ids)
            now = utc_timestamp()
            for task in ordered:
                if task.id in known:
                    self._update(task, now)
                else:
                    self._insert(task, now)

            self._commit()
        except StoreError as e:
            self._rollback()
            get_logger().error("save failed: %s", e)
            return str(e)

        get_logger().debug(
            "saved %d task(s), removed %d", len(ordered), len(removed)
        )
        return ""

    def _begin(self) -> None:
        try:
            self.connection.execute("BEGIN")
        except sqlite3.Error as e:
            raise StoreError(f"Failed to begin transaction: {e}") from e

    def _existing_ids(self) -> list[str]:
        try:
            cursor = self.connection.execute("SELECT id FROM todos")
            return [row[0] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(f"Failed to query existing tasks: {e}") from e

    def _delete(self, task_id: str) -> None:
        try:
            self.connection.execute("DELETE FROM todos WHERE id = ?", (task_id,))
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete task: {e}") from e

    def _update(self, task: Task, now: str) -> None:
        try:
            self.connection.execute(
                """UPDATE todos
                   SET title = ?, done = ?, priority = ?, has_deadline = ?,
                       deadline = ?, updated_at = ?
                   WHERE id = ?""",
                (
                    task.title,
                    task.done,
                    int(task.priority),
                    task.has_deadline,
                    encode_datetime(task.deadline),
                    now,
                    task.id,
                ),
            )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to update task: {e}") from e

    def _insert(self, task: Task, now: str) -> None:
        try:
            self.connection.execute(
                """INSERT INTO todos (
                    id, title, done, priority, has_deadline, deadline,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task.id,
                    task.title,
                    task.done,
                    int(task.priority),
                    task.has_deadline,
                    encode_datetime(task.deadline),
                    now,
                    now,
                ),
            )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to create task: {e}") from e

    def _commit(self) -> None:
        try:
            self.connection.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to commit transaction: {e}") from e

    def _rollback(self) -> None:
        try:
            self.connection.rollback()
        except sqlite3.Error as e:
            get_logger().warning("rollback failed: %s", e)

    # -------------------- lifecycle --------------------

    def close(self) -> Exception | None:
        """Close the connection. Safe to call more than once.

        Returns:
            The error raised while closing, or None
        """
        if self._closed:
            return None
        self._closed = True
        try:
            self.connection.close()
        except sqlite3.Error as e:
            get_logger().error("close failed: %s", e)
            return e
        get_logger().info("task store closed")
        return None


def _row_to_task(row: sqlite3.Row) -> Task:
    """Convert a ``todos`` row into a Task."""
    return Task(
        id=row["id"],
        title=row["title"],
        done=bool(row["done"]),
        priority=Priority(row["priority"]),
        has_deadline=bool(row["has_deadline"]),
        deadline=decode_datetime(row["deadline"]),
    )


def open_store(db_path: str | Path | None = None) -> tuple[SqliteTaskStore | None, str]:
    """Open the task store.

    Returns:
        Tuple of (store, status); store is None and status explains why when
        the database cannot be opened or migrated
    """
    try:
        connection = connect(db_path)
    except (sqlite3.Error, OSError, RuntimeError) as e:
        get_logger().error("storage init failed: %s", e)
        return None, f"Storage init failed: {e}"
    return SqliteTaskStore(connection), ""
