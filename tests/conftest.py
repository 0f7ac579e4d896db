"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from todo_tui.models.task import Priority, Task


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log records to a temporary directory and reset the singleton."""
    import todo_tui.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("todo_tui").handlers.clear()

    log_dir = tmp_path / "logs"
    with patch("todo_tui.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir

    for handler in logging.getLogger("todo_tui").handlers:
        handler.close()
    logging.getLogger("todo_tui").handlers.clear()
    logger_mod._logger = None


@pytest.fixture()
def db_path(tmp_path):
    """Path for a throwaway task database."""
    return tmp_path / "todo.db"


# ---------------------------------------------------------------------------
# Task builders
# ---------------------------------------------------------------------------


NOW = datetime(2024, 6, 10, 12, 0, 0)


@pytest.fixture()
def now() -> datetime:
    """Fixed clock used for deadline defaults and overdue checks."""
    return NOW


def make_task(
    title: str,
    *,
    done: bool = False,
    priority: Priority = Priority.MEDIUM,
    deadline: datetime | None = None,
    task_id: str | None = None,
) -> Task:
    """Build a Task; a deadline implies ``has_deadline``."""
    fields = {
        "title": title,
        "done": done,
        "priority": priority,
        "has_deadline": deadline is not None,
        "deadline": deadline,
    }
    if task_id is not None:
        fields["id"] = task_id
    return Task(**fields)
