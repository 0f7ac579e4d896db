"""Forward-only schema migrations for the task database.

Each migration has a unique increasing version. Applied versions are recorded
in ``schema_version``; opening the store applies whatever is missing, each
migration in its own transaction together with its version record.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import NamedTuple

from todo_tui.utils.logger import get_logger

_CREATE_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


class Migration(ABC):
    """One schema change. Subclasses set ``version`` and ``description``."""

    version: int
    description: str

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Apply the change using ``connection``; the runner owns the transaction."""


class AppliedMigration(NamedTuple):
    version: int
    description: str
    applied_at: str


class MigrationRunner:
    """Applies pending migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute(_CREATE_VERSION_TABLE)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, or 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def run_migration(self, migration: Migration) -> None:
        """Apply ``migration`` and record it atomically.

        Raises:
            ValueError: If the version is not above the current version
            RuntimeError: If the migration fails; nothing is recorded and its
                changes are rolled back
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current}"
            )

        try:
            self.connection.execute("BEGIN")
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) "
                "VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except Exception as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        get_logger().info(
            "applied migration %d (%s)", migration.version, migration.description
        )

    def run_migrations(self, migrations: Iterable[Migration]) -> int:
        """Apply every migration newer than the current version, oldest first.

        Returns:
            Number of migrations applied
        """
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.run_migration(migration)
        return len(pending)

    def get_migration_history(self) -> list[AppliedMigration]:
        """Applied migrations in version order."""
        rows = self.connection.execute(
            "SELECT version, description, applied_at FROM schema_version ORDER BY version"
        ).fetchall()
        return [AppliedMigration(*row) for row in rows]
