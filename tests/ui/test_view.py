"""Tests for ui/view.py rendering.

Rendered markup is converted to plain text through rich so assertions do not
depend on styling.
"""

from __future__ import annotations

from datetime import datetime

from conftest import NOW, make_task
from rich.text import Text

from todo_tui.core.ordering import sort_tasks
from todo_tui.core.selection import Selection
from todo_tui.core.state import (
    AddTitle,
    AppState,
    DateField,
    EditPriority,
    EditTitle,
    ExistingTask,
    InputTitle,
    PickDate,
    PickPriority,
)
from todo_tui.models.task import Priority
from todo_tui.ui.view import (
    EMPTY_MESSAGE,
    HELP_DATE,
    HELP_NORMAL,
    render,
    render_date_picker,
    render_priority_picker,
    render_title_input,
)


def _plain(markup: str) -> str:
    return Text.from_markup(markup).plain


def _state(*tasks, cursor=0, **kwargs):
    ordered = sort_tasks(tasks)
    selection = Selection(cursor, ordered[cursor].id) if ordered else Selection()
    return AppState(tasks=ordered, selection=selection, **kwargs)


class TestRenderList:
    def test_empty_state(self):
        text = _plain(render(AppState(), NOW))
        assert "0/0 done" in text
        assert EMPTY_MESSAGE in text
        assert HELP_NORMAL in text

    def test_header_counts_done(self):
        state = _state(make_task("a"), make_task("b", done=True))
        assert "1/2 done" in _plain(render(state, NOW))

    def test_table_rows(self):
        state = _state(
            make_task("Buy milk", priority=Priority.HIGH, deadline=datetime(2024, 6, 11, 9, 0)),
            make_task("Old", done=True),
        )
        lines = _plain(render(state, NOW)).splitlines()

        header = next(line for line in lines if "Status" in line)
        assert "Pri" in header and "Task" in header and "Deadline" in header

        first = next(line for line in lines if "Buy milk" in line)
        assert first.startswith("▶ ○")
        assert "P0" in first
        assert "2024-06-11 09:00" in first

        done = next(line for line in lines if "Old" in line)
        assert done.startswith("  ✓")
        assert done.rstrip().endswith("-")

    def test_long_title_truncated(self):
        state = _state(make_task("x" * 80))
        text = _plain(render(state, NOW))
        assert "x" * 37 + "..." in text
        assert "x" * 38 not in text

    def test_title_filling_column_is_not_truncated(self):
        for length in (39, 40):
            text = _plain(render(_state(make_task("y" * length)), NOW))
            assert "y" * length in text
            assert "..." not in text

    def test_title_markup_is_escaped(self):
        state = _state(make_task("[bold]not markup[/bold]"))
        assert "[bold]not markup" in _plain(render(state, NOW))

    def test_status_line(self):
        state = _state(make_task("a"), status="Failed to commit transaction: disk full")
        assert "● Failed to commit transaction: disk full" in _plain(render(state, NOW))

    def test_overdue_deadline_is_highlighted(self):
        overdue = make_task("late", deadline=datetime(2024, 6, 9, 9, 0))
        markup = render(_state(overdue), NOW)
        assert "[bold red]2024-06-09 09:00" in markup


class TestInteractionArea:
    def test_title_input_placeholder(self):
        text = _plain(render_title_input(InputTitle(AddTitle(make_task(""))), 40))
        assert text == "» █New task title"

    def test_title_input_edit_placeholder(self):
        assert "Edit title" in _plain(render_title_input(InputTitle(EditTitle("id")), 40))

    def test_title_input_shows_tail_of_long_text(self):
        mode = InputTitle(EditTitle("id"), text="a" * 10 + "b" * 60)
        text = _plain(render_title_input(mode, 40))
        assert text.endswith("b█")
        assert "a" not in text
        assert len(text) == 40

    def test_priority_picker(self):
        mode = PickPriority(EditPriority("id"), priority=Priority.HIGH)
        lines = _plain(render_priority_picker(mode)).splitlines()
        assert lines[0] == " Select priority:"
        assert lines[2] == "  ┃ P0"
        assert lines[3].strip() == "P1"
        assert lines[4].strip() == "P2"

    def test_date_picker(self):
        mode = PickDate(
            ExistingTask("id"), value=datetime(2024, 6, 11, 9, 5, 0), field=DateField.MINUTE
        )
        markup = render_date_picker(mode)
        assert _plain(markup) == "Deadline: 2024-06-11 09:05:00"
        assert "[bold reverse]05[/]" in markup

    def test_date_mode_help(self):
        mode = PickDate(ExistingTask("id"), value=NOW)
        assert HELP_DATE in _plain(render(AppState(mode=mode), NOW))
