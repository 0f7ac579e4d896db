"""Terminal user interface: key decoding, rendering and the textual app."""

from todo_tui.ui.app import TodoApp
from todo_tui.ui.keys import decode_key
from todo_tui.ui.view import render

__all__ = ["TodoApp", "decode_key", "render"]
