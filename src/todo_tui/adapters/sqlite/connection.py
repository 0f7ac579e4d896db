"""Database connection management for the local task store.

The store holds one connection for the lifetime of the process: it is opened
at startup, configured (row factory, foreign keys, WAL journal), migrated to
the current schema, and closed explicitly on quit.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_config_dir

from todo_tui.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from todo_tui.utils.logger import get_logger

APP_DIR_NAME = "todo-tui"
DB_FILE_NAME = "todo.db"
FALLBACK_DB_PATH = Path("todo_tui.db")


def default_db_path() -> Path:
    """Resolve the default database location.

    Uses the per-user configuration directory; if it cannot be created the
    database falls back to a file in the current working directory.
    """
    config_dir = Path(user_config_dir(APP_DIR_NAME))
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        get_logger().warning(
            "cannot create %s (%s); using %s", config_dir, e, FALLBACK_DB_PATH
        )
        return FALLBACK_DB_PATH
    return config_dir / DB_FILE_NAME


def connect(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open and configure a database connection.

    Args:
        db_path: Path to database file. If None, uses default location.

    Returns:
        sqlite3.Connection with the schema migrated to the latest version

    Raises:
        sqlite3.Error: If the file cannot be opened or configured
        RuntimeError: If a migration fails
    """
    db_path = default_db_path() if db_path is None else Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    is_new_database = not db_path.exists()

    connection = sqlite3.connect(str(db_path), timeout=30.0)
    try:
        connection.row_factory = sqlite3.Row  # Enable dict-like access
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("PRAGMA journal_mode = WAL")

        # Owner read/write only
        if is_new_database:
            os.chmod(db_path, 0o600)

        applied = MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    except Exception:
        connection.close()
        raise

    get_logger().info(
        "opened task store %s (%d migration(s) applied)", db_path, applied
    )
    return connection
