"""Pure transition function for the interaction state machine.

``step(state, event)`` never touches storage or the screen. It returns the
next state together with the effects the caller must run (persisting the
list, quitting). Every list mutation goes through ``_commit``, which
re-sorts and re-anchors the selection on a task ID, so no positional cursor
is trusted across a mutation.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import NamedTuple

from todo_tui.core import selection as sel
from todo_tui.core.dates import adjust, default_deadline
from todo_tui.core.ordering import sort_tasks
from todo_tui.core.state import (
    TITLE_CHAR_LIMIT,
    AddPriority,
    AddTitle,
    AppState,
    Backspace,
    EditPriority,
    EditTitle,
    Effect,
    Event,
    ExistingTask,
    InputTitle,
    Key,
    KeyName,
    NewTask,
    Normal,
    Persist,
    PickDate,
    PickPriority,
    Quit,
    Resize,
    TypeText,
    clamp_input_width,
)
from todo_tui.models.task import Priority, Task

EMPTY_TITLE_MESSAGE = "Title cannot be empty"


class Transition(NamedTuple):
    state: AppState
    effects: list[Effect]


def step(state: AppState, event: Event, now: datetime | None = None) -> Transition:
    """Apply one event to ``state``.

    Args:
        state: Current application state
        event: Decoded input event
        now: Clock override used to seed the date picker

    Returns:
        Transition with the next state and the effects to execute
    """
    if isinstance(event, Resize):
        return Transition(replace(state, input_width=clamp_input_width(event.width)), [])
    if isinstance(event, Key) and event.name is KeyName.QUIT:
        return Transition(state, [Quit()])

    mode = state.mode
    if isinstance(mode, Normal):
        return _normal(state, event)
    if isinstance(mode, InputTitle):
        return _input_title(state, mode, event)
    if isinstance(mode, PickPriority):
        return _pick_priority(state, mode, event, now)
    if isinstance(mode, PickDate):
        return _pick_date(state, mode, event)
    raise TypeError(f"Unknown mode: {mode!r}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _stay(state: AppState) -> Transition:
    return Transition(state, [])


def _to_normal(state: AppState) -> AppState:
    return replace(state, mode=Normal(), status="")


def _find(tasks: list[Task], task_id: str) -> Task | None:
    return next((task for task in tasks if task.id == task_id), None)


def _replace_task(tasks: list[Task], task_id: str, **updates) -> list[Task]:
    return [
        task.model_copy(update=updates) if task.id == task_id else task
        for task in tasks
    ]


def _commit(state: AppState, tasks: list[Task], anchor_id: str | None) -> AppState:
    """Sort ``tasks`` canonically and re-anchor the selection on ``anchor_id``."""
    ordered = sort_tasks(tasks)
    return replace(state, tasks=ordered, selection=sel.reanchor(ordered, anchor_id))


def _persisted(state: AppState) -> Transition:
    return Transition(state, [Persist(list(state.tasks))])


# ---------------------------------------------------------------------------
# Normal mode
# ---------------------------------------------------------------------------


def _normal(state: AppState, event: Event) -> Transition:
    if not isinstance(event, Key):
        return _stay(state)

    name = event.name
    if name is KeyName.UP:
        return _stay(replace(state, selection=sel.move(state.tasks, state.selection, -1)))
    if name is KeyName.DOWN:
        return _stay(replace(state, selection=sel.move(state.tasks, state.selection, 1)))
    if name is KeyName.ADD:
        draft = Task(priority=Priority.MEDIUM)
        return _stay(replace(state, mode=InputTitle(AddTitle(draft)), status=""))

    current = sel.current_task(state.tasks, state.selection)
    if current is None:
        return _stay(state)

    if name is KeyName.EDIT:
        mode = InputTitle(EditTitle(current.id), text=current.title)
        return _stay(replace(state, mode=mode, status=""))
    if name is KeyName.TOGGLE:
        tasks = _replace_task(state.tasks, current.id, done=not current.done)
        return _persisted(_commit(state, tasks, current.id))
    if name is KeyName.DELETE:
        tasks, selection = sel.delete_current(state.tasks, state.selection)
        return _persisted(replace(state, tasks=tasks, selection=selection))
    return _stay(state)


# ---------------------------------------------------------------------------
# Title input
# ---------------------------------------------------------------------------


def _input_title(state: AppState, mode: InputTitle, event: Event) -> Transition:
    if isinstance(event, TypeText):
        text = (mode.text + event.text)[:TITLE_CHAR_LIMIT]
        return _stay(replace(state, mode=replace(mode, text=text)))
    if isinstance(event, Backspace):
        return _stay(replace(state, mode=replace(mode, text=mode.text[:-1])))
    if not isinstance(event, Key):
        return _stay(state)

    if event.name is KeyName.CANCEL:
        return _stay(_to_normal(state))
    if event.name is not KeyName.CONFIRM:
        return _stay(state)

    title = mode.text.strip()
    if not title:
        return _stay(replace(state, status=EMPTY_TITLE_MESSAGE))

    context = mode.context
    if isinstance(context, AddTitle):
        draft = context.draft.model_copy(update={"title": title})
        picker = PickPriority(AddPriority(draft), priority=Priority.MEDIUM)
        return _stay(replace(state, mode=picker, status=""))

    task = _find(state.tasks, context.task_id)
    if task is None:
        return _stay(_to_normal(state))
    tasks = _replace_task(state.tasks, task.id, title=title)
    committed = _commit(state, tasks, task.id)
    picker = PickPriority(EditPriority(task.id), priority=task.priority)
    return _persisted(replace(committed, mode=picker, status=""))


# ---------------------------------------------------------------------------
# Priority picker
# ---------------------------------------------------------------------------


def _pick_priority(
    state: AppState, mode: PickPriority, event: Event, now: datetime | None
) -> Transition:
    if not isinstance(event, Key):
        return _stay(state)

    name = event.name
    if name is KeyName.CANCEL:
        return _stay(_to_normal(state))
    if name in (KeyName.UP, KeyName.LEFT):
        return _stay(replace(state, mode=replace(mode, priority=mode.priority.rotate(1))))
    if name in (KeyName.DOWN, KeyName.RIGHT):
        return _stay(replace(state, mode=replace(mode, priority=mode.priority.rotate(-1))))
    if name is not KeyName.CONFIRM:
        return _stay(state)

    context = mode.context
    if isinstance(context, AddPriority):
        draft = context.draft.model_copy(update={"priority": mode.priority})
        picker = PickDate(NewTask(draft), value=default_deadline(now))
        return _stay(replace(state, mode=picker))

    task = _find(state.tasks, context.task_id)
    if task is None:
        return _stay(_to_normal(state))
    tasks = _replace_task(state.tasks, task.id, priority=mode.priority)
    committed = _commit(state, tasks, task.id)

    # _commit reanchored on task.id, which is still in the list, so the cursor
    # sits on the edited task at its new position and cannot be empty.
    target = sel.current_task(committed.tasks, committed.selection)
    assert target is not None
    if target.has_deadline and target.deadline is not None:
        seed = target.deadline
    else:
        seed = default_deadline(now)
    picker = PickDate(ExistingTask(target.id), value=seed)
    return _persisted(replace(committed, mode=picker))


# ---------------------------------------------------------------------------
# Date picker
# ---------------------------------------------------------------------------


def _pick_date(state: AppState, mode: PickDate, event: Event) -> Transition:
    if not isinstance(event, Key):
        return _stay(state)

    name = event.name
    if name is KeyName.CANCEL:
        return _stay(_to_normal(state))
    if name is KeyName.LEFT:
        return _stay(replace(state, mode=replace(mode, field=mode.field.rotate(-1))))
    if name is KeyName.RIGHT:
        return _stay(replace(state, mode=replace(mode, field=mode.field.rotate(1))))
    if name is KeyName.UP:
        return _stay(replace(state, mode=replace(mode, value=adjust(mode.value, mode.field, 1))))
    if name is KeyName.DOWN:
        return _stay(replace(state, mode=replace(mode, value=adjust(mode.value, mode.field, -1))))
    if name is not KeyName.CONFIRM:
        return _stay(state)

    deadline = {"has_deadline": True, "deadline": mode.value}
    target = mode.target
    if isinstance(target, NewTask):
        task = target.draft.model_copy(update=deadline)
        committed = _commit(state, [*state.tasks, task], task.id)
        return _persisted(_to_normal(committed))

    if _find(state.tasks, target.task_id) is None:
        return _stay(_to_normal(state))
    tasks = _replace_task(state.tasks, target.task_id, **deadline)
    committed = _commit(state, tasks, target.task_id)
    return _persisted(_to_normal(committed))
