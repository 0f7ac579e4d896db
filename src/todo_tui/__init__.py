"""todo-tui - an interactive terminal task list."""

__version__ = "0.1.0"
