"""Core task-list logic: ordering, selection and the interaction state machine."""

from todo_tui.core.machine import Transition, step
from todo_tui.core.ordering import sort_key, sort_tasks
from todo_tui.core.selection import Selection, reanchor
from todo_tui.core.state import AppState

__all__ = [
    "AppState",
    "Selection",
    "Transition",
    "reanchor",
    "sort_key",
    "sort_tasks",
    "step",
]
