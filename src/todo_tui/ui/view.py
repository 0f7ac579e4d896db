"""Render application state as rich markup.

``render(state)`` is a pure function: the same state always produces the same
markup string (apart from overdue highlighting, which reads the clock unless
``now`` is given). The textual app feeds the result to a ``Static`` widget.
"""

from __future__ import annotations

from datetime import datetime

from rich.cells import cell_len, set_cell_size
from rich.markup import escape

from todo_tui.core.state import (
    AddTitle,
    AppState,
    DateField,
    InputTitle,
    Normal,
    PickDate,
    PickPriority,
)
from todo_tui.models.task import Priority, Task

STATUS_WIDTH = 6
PRIORITY_WIDTH = 8
TITLE_WIDTH = 40
DEADLINE_WIDTH = 19
TABLE_WIDTH = STATUS_WIDTH + PRIORITY_WIDTH + TITLE_WIDTH + DEADLINE_WIDTH

STYLES = {
    "banner": "bold #ffffff on #5f5fd7",
    "muted": "grey50",
    "table_header": "bold",
    "border": "grey23",
    "selected_row": "on grey15",
    "cursor": "bold #ff5faf",
    "checkbox": "green",
    "done": "strike grey50",
    "overdue": "bold red",
    "picked": "bold reverse",
    "status": "green",
}

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "cyan",
}

HELP_NORMAL = "↑/↓ move • a add • e edit • space toggle • x delete • q quit"
HELP_INPUT = "Enter confirm • Esc cancel"
HELP_PRIORITY = "↑/↓ choose priority • Enter confirm • Esc cancel"
HELP_DATE = "←/→ switch field • ↑/↓ adjust • Enter confirm • Esc cancel"
EMPTY_MESSAGE = "No tasks yet, press a to add one"


def _styled(text: str, style: str) -> str:
    return f"[{style}]{text}[/]"


def _cell(text: str, width: int, align: str = "left") -> str:
    """Pad or cut plain ``text`` to exactly ``width`` cells, then escape it."""
    if cell_len(text) > width:
        text = set_cell_size(text, width)
    padding = width - cell_len(text)
    if align == "center":
        left = padding // 2
        text = " " * left + text + " " * (padding - left)
    else:
        text = text + " " * padding
    return escape(text)


def _truncate(title: str, width: int) -> str:
    if cell_len(title) <= width:
        return title
    return set_cell_size(title, width - 3) + "..."


def render(state: AppState, now: datetime | None = None) -> str:
    """Render the whole screen."""
    parts = ["\n", render_header(state), "\n\n"]
    if state.tasks:
        parts.append(render_table(state, now))
    else:
        parts.append("  " + _styled(EMPTY_MESSAGE, STYLES["muted"]) + "\n")
    parts.append(render_interaction(state))
    if state.status:
        parts.append("\n  " + _styled("● ", STYLES["status"]) + escape(state.status))
    return "".join(parts)


def render_header(state: AppState) -> str:
    """Title banner plus completion count."""
    stats = f" {state.done_count}/{len(state.tasks)} done"
    return " " + _styled(" TODO ", STYLES["banner"]) + _styled(stats, STYLES["muted"])


def render_table(state: AppState, now: datetime | None = None) -> str:
    """Four-column task table with the selected row marked."""
    header = _styled(
        _cell("Status", STATUS_WIDTH)
        + _cell("Pri", PRIORITY_WIDTH, "center")
        + _cell("Task", TITLE_WIDTH)
        + _cell("Deadline", DEADLINE_WIDTH),
        STYLES["table_header"],
    )
    lines = [header, _styled("─" * TABLE_WIDTH, STYLES["border"])]
    for task in state.tasks:
        lines.append(render_row(task, task.id == state.selection.selected_id, now))
    return "\n".join(lines) + "\n"


def render_row(task: Task, selected: bool, now: datetime | None = None) -> str:
    """One table row."""
    marker = "▶ " if selected else "  "
    symbol = "✓" if task.done else "○"
    status = _styled(escape(marker), STYLES["cursor"]) if selected else marker
    status += _styled(symbol, STYLES["checkbox"]) if task.done else symbol
    status += " " * (STATUS_WIDTH - cell_len(marker + symbol))

    priority = _styled(
        _cell(task.priority.label, PRIORITY_WIDTH, "center"), PRIORITY_STYLES[task.priority]
    )

    title = _cell(_truncate(task.title, TITLE_WIDTH), TITLE_WIDTH)
    if task.done:
        title = _styled(title, STYLES["done"])

    deadline = _cell(task.deadline_string(), DEADLINE_WIDTH)
    deadline = _styled(
        deadline, STYLES["overdue"] if task.is_overdue(now) else STYLES["muted"]
    )

    row = status + priority + title + deadline
    if selected:
        row = _styled(row, STYLES["selected_row"])
    return row


def render_interaction(state: AppState) -> str:
    """Help line or the active editor for the current mode."""
    mode = state.mode
    if isinstance(mode, Normal):
        return "\n  " + _styled(HELP_NORMAL, STYLES["muted"]) + "\n"
    if isinstance(mode, InputTitle):
        return "\n  " + render_title_input(mode, state.input_width) + "\n  " + _styled(
            HELP_INPUT, STYLES["muted"]
        ) + "\n"
    if isinstance(mode, PickPriority):
        return "\n" + render_priority_picker(mode) + "\n  " + _styled(
            HELP_PRIORITY, STYLES["muted"]
        ) + "\n"
    if isinstance(mode, PickDate):
        return "\n  " + render_date_picker(mode) + "\n  " + _styled(
            HELP_DATE, STYLES["muted"]
        ) + "\n"
    return ""


def render_title_input(mode: InputTitle, width: int) -> str:
    """Single-line entry showing the tail of the buffer and a block cursor."""
    prompt = "» "
    if not mode.text:
        placeholder = "New task title" if isinstance(mode.context, AddTitle) else "Edit title"
        return prompt + "█" + _styled(placeholder, STYLES["muted"])

    visible = mode.text
    room = max(1, width - cell_len(prompt) - 1)
    while cell_len(visible) > room:
        visible = visible[1:]
    return prompt + escape(visible) + "█"


def render_priority_picker(mode: PickPriority) -> str:
    """Vertical list of tiers, most urgent first."""
    lines = [" Select priority:", ""]
    for priority in (Priority.HIGH, Priority.MEDIUM, Priority.LOW):
        if priority is mode.priority:
            lines.append(
                "  " + _styled("┃ ", STYLES["cursor"]) + _styled(priority.label, STYLES["picked"])
            )
        else:
            lines.append("    " + _styled(priority.label, STYLES["muted"]))
    return "\n".join(lines)


def render_date_picker(mode: PickDate) -> str:
    """Deadline as YYYY-MM-DD HH:MM:SS with the focused field highlighted."""
    value = mode.value
    fields = {
        DateField.YEAR: f"{value.year:04d}",
        DateField.MONTH: f"{value.month:02d}",
        DateField.DAY: f"{value.day:02d}",
        DateField.HOUR: f"{value.hour:02d}",
        DateField.MINUTE: f"{value.minute:02d}",
        DateField.SECOND: f"{value.second:02d}",
    }
    shown = {
        field: _styled(text, STYLES["picked"]) if field is mode.field else text
        for field, text in fields.items()
    }
    return "Deadline: {}-{}-{} {}:{}:{}".format(
        shown[DateField.YEAR],
        shown[DateField.MONTH],
        shown[DateField.DAY],
        shown[DateField.HOUR],
        shown[DateField.MINUTE],
        shown[DateField.SECOND],
    )
