"""Controller that drives the state machine and runs its side effects.

Events are processed one at a time: transition, then effects. A ``Persist``
effect blocks until the store has reconciled the whole list; its status
(empty on success) becomes the status line. Without a store (it failed to
open) edits stay in memory and the startup error remains visible until a
transition replaces it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from typing import Protocol

from todo_tui.core.machine import step
from todo_tui.core.selection import initial_selection
from todo_tui.core.state import AppState, Event, Persist, Quit
from todo_tui.models.task import Task
from todo_tui.utils.logger import get_logger


class TaskStore(Protocol):
    """Storage contract the controller relies on."""

    def load(self) -> tuple[list[Task], str]: ...

    def save(self, tasks: Iterable[Task]) -> str: ...

    def close(self) -> Exception | None: ...


class TodoService:
    """Owns the current AppState and the store handle."""

    def __init__(self, store: TaskStore | None, state: AppState | None = None):
        self.store = store
        self.state = state or AppState()
        self.running = True

    @classmethod
    def start(cls, store: TaskStore | None, status: str = "") -> TodoService:
        """Build the initial state from the store's contents.

        Args:
            store: Opened store, or None if opening it failed
            status: Startup status (e.g. the open failure) shown when there is
                no store
        """
        tasks: list[Task] = []
        if store is not None:
            tasks, status = store.load()
        get_logger().info("starting with %d task(s)", len(tasks))
        state = AppState(tasks=tasks, selection=initial_selection(tasks), status=status)
        return cls(store, state)

    def dispatch(self, event: Event, now: datetime | None = None) -> bool:
        """Process one event to completion.

        Returns:
            False once the application should exit
        """
        transition = step(self.state, event, now=now)
        self.state = transition.state

        for effect in transition.effects:
            if isinstance(effect, Persist):
                self._persist(effect.tasks)
            elif isinstance(effect, Quit):
                self.close()
        return self.running

    def _persist(self, tasks: list[Task]) -> None:
        if self.store is None:
            return
        status = self.store.save(tasks)
        self.state = replace(self.state, status=status)

    def close(self) -> None:
        """Release the store and stop the loop. Safe to call twice."""
        if self.running:
            get_logger().info("quitting")
        self.running = False
        if self.store is not None:
            self.store.close()
