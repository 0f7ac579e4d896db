"""Application state, interaction modes, events and effects.

Modes are a closed set of frozen dataclasses. Each mode carries exactly the
session data it needs: the add flow carries its draft task, the edit flow
carries the ID of the task being edited. A mode that mixes the two cannot
be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum

from todo_tui.core.selection import EMPTY_SELECTION, Selection
from todo_tui.models.task import Priority, Task

MIN_INPUT_WIDTH = 40
MAX_INPUT_WIDTH = 60
TITLE_CHAR_LIMIT = 200


class DateField(IntEnum):
    """Date picker fields, in display order."""

    YEAR = 0
    MONTH = 1
    DAY = 2
    HOUR = 3
    MINUTE = 4
    SECOND = 5

    def rotate(self, delta: int) -> DateField:
        """Step ``delta`` fields, wrapping around at both ends."""
        return DateField((self + delta) % len(DateField))


# -- title input contexts ---------------------------------------------------


@dataclass(frozen=True)
class AddTitle:
    draft: Task


@dataclass(frozen=True)
class EditTitle:
    task_id: str


# -- priority picker contexts -----------------------------------------------


@dataclass(frozen=True)
class AddPriority:
    draft: Task


@dataclass(frozen=True)
class EditPriority:
    task_id: str


# -- date picker targets ----------------------------------------------------


@dataclass(frozen=True)
class NewTask:
    draft: Task


@dataclass(frozen=True)
class ExistingTask:
    task_id: str


# -- modes ------------------------------------------------------------------


@dataclass(frozen=True)
class Normal:
    """Browsing the list."""


@dataclass(frozen=True)
class InputTitle:
    """Typing a task title."""

    context: AddTitle | EditTitle
    text: str = ""


@dataclass(frozen=True)
class PickPriority:
    """Choosing a priority tier."""

    context: AddPriority | EditPriority
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class PickDate:
    """Choosing a deadline field by field."""

    target: NewTask | ExistingTask
    value: datetime
    field: DateField = DateField.HOUR


Mode = Normal | InputTitle | PickPriority | PickDate


# -- events -----------------------------------------------------------------


class KeyName(Enum):
    """Symbolic key intents produced by the key decoder."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ADD = "add"
    EDIT = "edit"
    TOGGLE = "toggle"
    DELETE = "delete"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    QUIT = "quit"


@dataclass(frozen=True)
class Key:
    name: KeyName


@dataclass(frozen=True)
class TypeText:
    text: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Resize:
    width: int


Event = Key | TypeText | Backspace | Resize


# -- effects ----------------------------------------------------------------


@dataclass(frozen=True)
class Persist:
    """Reconcile the durable store with this full task list."""

    tasks: list[Task]


@dataclass(frozen=True)
class Quit:
    """Release resources and leave the event loop."""


Effect = Persist | Quit


# -- state ------------------------------------------------------------------


@dataclass(frozen=True)
class AppState:
    """Everything the UI shows, passed by value through transitions."""

    tasks: list[Task] = field(default_factory=list)
    selection: Selection = EMPTY_SELECTION
    mode: Mode = field(default_factory=Normal)
    status: str = ""
    input_width: int = MIN_INPUT_WIDTH

    @property
    def done_count(self) -> int:
        return sum(1 for task in self.tasks if task.done)


def clamp_input_width(terminal_width: int) -> int:
    """Size the title entry for a terminal ``terminal_width`` columns wide."""
    return max(MIN_INPUT_WIDTH, min(MAX_INPUT_WIDTH, terminal_width - 4))
