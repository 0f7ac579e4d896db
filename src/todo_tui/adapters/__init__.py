"""Storage adapters for todo-tui."""
