"""Task data model."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, Field

DEADLINE_FORMAT = "%Y-%m-%d %H:%M"
NO_DEADLINE = "-"


class Priority(IntEnum):
    """Priority tier. Higher value sorts first."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        """Short display label (P0 is the most urgent)."""
        return _PRIORITY_LABELS[self]

    def rotate(self, delta: int) -> Priority:
        """Step ``delta`` tiers, wrapping around at both ends."""
        return Priority((self + delta) % len(Priority))


_PRIORITY_LABELS = {
    Priority.HIGH: "P0",
    Priority.MEDIUM: "P1",
    Priority.LOW: "P2",
}


def new_task_id() -> str:
    """Generate a new task ID.

    Returns:
        UUID4 string, never reused
    """
    return str(uuid.uuid4())


class Task(BaseModel):
    """A single task on the list.

    Attributes:
        id: Unique identifier, assigned at creation and never changed
        title: Short single-line title
        done: Completion flag
        priority: Priority tier (defaults to Medium)
        has_deadline: Whether ``deadline`` is meaningful
        deadline: Naive local timestamp, ignored unless ``has_deadline``
    """

    id: str = Field(default_factory=new_task_id)
    title: str = ""
    done: bool = False
    priority: Priority = Priority.MEDIUM
    has_deadline: bool = False
    deadline: datetime | None = None

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Return True if the task is open and its deadline has passed."""
        if self.done or not self.has_deadline or self.deadline is None:
            return False
        if now is None:
            now = datetime.now()
        return self.deadline < now

    def deadline_string(self) -> str:
        """Fixed-width deadline text, or a dash when there is none."""
        if not self.has_deadline or self.deadline is None:
            return NO_DEADLINE
        return self.deadline.strftime(DEADLINE_FORMAT)
