"""Canonical task ordering.

Open tasks come first, then higher priority, then tasks with a deadline,
then earlier deadlines, and finally titles in lexicographic order. Sorting
is stable, so tasks with identical keys keep their relative order.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from todo_tui.models.task import Task


def sort_key(task: Task) -> tuple:
    """Return the canonical sort key for a task."""
    has_deadline = task.has_deadline and task.deadline is not None
    deadline = task.deadline if has_deadline else datetime.min
    return (task.done, -int(task.priority), not has_deadline, deadline, task.title)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Return a new list sorted in canonical order."""
    return sorted(tasks, key=sort_key)


def is_sorted(tasks: list[Task]) -> bool:
    """Check whether ``tasks`` is already in canonical order."""
    return all(
        sort_key(a) <= sort_key(b) for a, b in zip(tasks, tasks[1:], strict=False)
    )
