"""Unit tests for the MigrationRunner in adapters/sqlite/migrations/runner.py."""

from __future__ import annotations

import sqlite3

import pytest

from todo_tui.adapters.sqlite.migrations import ALL_MIGRATIONS, Migration, MigrationRunner


# ---------------------------------------------------------------------------
# Concrete test migrations
# ---------------------------------------------------------------------------


class _CreateNotes(Migration):
    version = 2
    description = "Create notes"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)")


class _Broken(Migration):
    version = 3
    description = "Broken"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute("CREATE TABLE half_done (id INTEGER)")
        connection.execute("THIS IS NOT SQL")


@pytest.fixture()
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def _tables(connection) -> set[str]:
    return {
        row[0]
        for row in connection.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_fresh_database_is_version_zero(conn):
    assert MigrationRunner(conn).get_current_version() == 0


def test_initial_migration_creates_todos(conn):
    runner = MigrationRunner(conn)
    assert runner.run_migrations(ALL_MIGRATIONS) == 1
    assert "todos" in _tables(conn)
    assert runner.get_current_version() == 1


def test_pending_migrations_run_in_version_order(conn):
    runner = MigrationRunner(conn)
    applied = runner.run_migrations([_CreateNotes(), *ALL_MIGRATIONS])

    assert applied == 2
    history = runner.get_migration_history()
    assert [h.version for h in history] == [1, 2]
    assert history[1].description == "Create notes"


def test_applied_migrations_are_skipped(conn):
    runner = MigrationRunner(conn)
    runner.run_migrations(ALL_MIGRATIONS)
    assert runner.run_migrations(ALL_MIGRATIONS) == 0


def test_rejects_old_version(conn):
    runner = MigrationRunner(conn)
    runner.run_migrations(ALL_MIGRATIONS)
    with pytest.raises(ValueError, match="not greater than"):
        runner.run_migration(ALL_MIGRATIONS[0])


def test_failed_migration_raises_and_is_not_recorded(conn):
    runner = MigrationRunner(conn)
    runner.run_migrations(ALL_MIGRATIONS)

    with pytest.raises(RuntimeError, match="Migration 3 failed"):
        runner.run_migration(_Broken())

    assert runner.get_current_version() == 1
    assert "half_done" not in _tables(conn)
