"""Textual application shell.

The app owns no task logic. It decodes key presses, hands the events to the
controller and repaints a single ``Static`` with ``render(state)``.
"""

from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from todo_tui.core.state import Resize
from todo_tui.services.todo_service import TodoService
from todo_tui.ui.keys import decode_key
from todo_tui.ui.view import render


class TodoApp(App):
    """Full-screen task list."""

    TITLE = "todo-tui"
    CSS = """
    Screen {
        background: $background;
        padding: 0;
    }

    #view {
        width: 100%;
        height: auto;
    }
    """

    def __init__(self, service: TodoService):
        super().__init__()
        self.service = service

    def compose(self) -> ComposeResult:
        yield Static(render(self.service.state), id="view", markup=True)

    def on_mount(self) -> None:
        self.service.dispatch(Resize(self.size.width))
        self.refresh_view()

    def refresh_view(self) -> None:
        """Repaint the screen from the current state."""
        self.query_one("#view", Static).update(render(self.service.state))

    def on_key(self, event: events.Key) -> None:
        """Decode and dispatch one key press."""
        decoded = decode_key(event.key, event.character, self.service.state.mode)
        if decoded is None:
            return
        event.prevent_default()
        event.stop()

        if not self.service.dispatch(decoded):
            self.exit()
            return
        self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.service.dispatch(Resize(event.size.width))
        self.refresh_view()

    def on_unmount(self) -> None:
        # Covers exits that bypass the quit key (e.g. ctrl+q).
        self.service.close()
