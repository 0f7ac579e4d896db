"""Map textual key names to state machine events.

The same physical key means different things per mode: ``a`` adds a task
while browsing but is just a letter while typing a title.
"""

from __future__ import annotations

from todo_tui.core.state import (
    Backspace,
    Event,
    InputTitle,
    Key,
    KeyName,
    Mode,
    Normal,
    PickDate,
    PickPriority,
    TypeText,
)

NORMAL_KEYS = {
    "up": KeyName.UP,
    "k": KeyName.UP,
    "down": KeyName.DOWN,
    "j": KeyName.DOWN,
    "a": KeyName.ADD,
    "e": KeyName.EDIT,
    "space": KeyName.TOGGLE,
    "x": KeyName.DELETE,
    "q": KeyName.QUIT,
}

# Priority and date pickers share the same vi-style navigation.
PICKER_KEYS = {
    "up": KeyName.UP,
    "k": KeyName.UP,
    "down": KeyName.DOWN,
    "j": KeyName.DOWN,
    "left": KeyName.LEFT,
    "h": KeyName.LEFT,
    "right": KeyName.RIGHT,
    "l": KeyName.RIGHT,
    "enter": KeyName.CONFIRM,
    "escape": KeyName.CANCEL,
}

INPUT_KEYS = {
    "enter": KeyName.CONFIRM,
    "escape": KeyName.CANCEL,
}


def decode_key(key: str, character: str | None, mode: Mode) -> Event | None:
    """Translate one key press into an event for ``mode``.

    Args:
        key: textual key name (e.g. "up", "enter", "a", "ctrl+c")
        character: printable character for the key, if any
        mode: Current interaction mode

    Returns:
        The decoded event, or None if the key means nothing here
    """
    if key == "ctrl+c":
        return Key(KeyName.QUIT)

    if isinstance(mode, Normal):
        name = NORMAL_KEYS.get(key)
    elif isinstance(mode, InputTitle):
        name = INPUT_KEYS.get(key)
        if name is None:
            if key == "backspace":
                return Backspace()
            if character is not None and character.isprintable():
                return TypeText(character)
            return None
    elif isinstance(mode, (PickPriority, PickDate)):
        name = PICKER_KEYS.get(key)
    else:
        name = None

    return Key(name) if name is not None else None
