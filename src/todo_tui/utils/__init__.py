"""Shared utilities for todo-tui."""
