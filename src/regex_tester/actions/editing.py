"""Character-level edits and cursor movement on the focused buffer."""

from __future__ import annotations

from .base import ActionContext, ActionResult, KeyEvent


def insert_char(context: ActionContext, event: KeyEvent) -> ActionResult:
    char = event.character
    if char is None:
        return ActionResult(consumed=False, status="ignored")
    context.state.active_buffer.insert_char(char)
    return ActionResult(evaluate=True, status="insert")


def newline(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.newline()
    return ActionResult(evaluate=True, status="newline")


def backspace(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.backspace()
    return ActionResult(evaluate=True, status="backspace")


def move_up(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.move_up()
    return ActionResult(status="move")


def move_down(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.move_down()
    return ActionResult(status="move")


def move_left(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.move_left()
    return ActionResult(status="move")


def move_right(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.move_right()
    return ActionResult(status="move")


__all__ = [
    "insert_char",
    "newline",
    "backspace",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
]
