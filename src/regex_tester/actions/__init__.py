"""Editing verbs bound to keys by the keymap layer."""

from .base import (
    CONTROL,
    PRESS,
    ActionContext,
    ActionResult,
    EventBus,
    KeyEvent,
    normalize_modifiers,
)
from .core import clear_line, next_focus, quit_session
from .editing import (
    backspace,
    insert_char,
    move_down,
    move_left,
    move_right,
    move_up,
    newline,
)

__all__ = [
    "CONTROL",
    "PRESS",
    "ActionContext",
    "ActionResult",
    "EventBus",
    "KeyEvent",
    "normalize_modifiers",
    "quit_session",
    "next_focus",
    "clear_line",
    "insert_char",
    "newline",
    "backspace",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
]
