"""Cursor and selection tracking.

The cursor is positional, but positions go stale as soon as the list is
re-sorted. The selected task ID is what survives a mutation: after each one
the cursor is re-derived from the remembered ID.
"""

from __future__ import annotations

from dataclasses import dataclass

from todo_tui.models.task import Task


@dataclass(frozen=True)
class Selection:
    """Cursor index plus the ID of the task under it."""

    cursor: int = 0
    selected_id: str | None = None


EMPTY_SELECTION = Selection()


def initial_selection(tasks: list[Task]) -> Selection:
    """Select the first task of a freshly loaded list."""
    if not tasks:
        return EMPTY_SELECTION
    return Selection(cursor=0, selected_id=tasks[0].id)


def current_task(tasks: list[Task], selection: Selection) -> Task | None:
    """Return the task under the cursor, if any."""
    if 0 <= selection.cursor < len(tasks):
        return tasks[selection.cursor]
    return None


def move(tasks: list[Task], selection: Selection, delta: int) -> Selection:
    """Move the cursor by ``delta``; out-of-range moves are ignored."""
    target = selection.cursor + delta
    if not 0 <= target < len(tasks):
        return selection
    return Selection(cursor=target, selected_id=tasks[target].id)


def reanchor(tasks: list[Task], task_id: str | None) -> Selection:
    """Point the cursor at ``task_id`` in the (sorted) list.

    Falls back to the first open task, then the first task, then nothing.
    """
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return Selection(cursor=index, selected_id=task.id)
    for index, task in enumerate(tasks):
        if not task.done:
            return Selection(cursor=index, selected_id=task.id)
    return initial_selection(tasks)


def delete_current(
    tasks: list[Task], selection: Selection
) -> tuple[list[Task], Selection]:
    """Remove the task under the cursor.

    Returns:
        Tuple of (remaining tasks, new selection)
    """
    if current_task(tasks, selection) is None:
        return tasks, selection

    remaining = tasks[: selection.cursor] + tasks[selection.cursor + 1 :]
    if not remaining:
        return remaining, EMPTY_SELECTION

    cursor = min(selection.cursor, len(remaining) - 1)
    return remaining, Selection(cursor=cursor, selected_id=remaining[cursor].id)
