"""Session-level actions: quitting, focus rotation, line clearing."""

from __future__ import annotations

from .base import ActionContext, ActionResult, KeyEvent


def quit_session(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.quit()
    context.bus.emit("session.quit", None)
    return ActionResult(status="quit", message="quit")


def next_focus(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    focus = context.state.focus_next()
    context.bus.emit("focus.changed", focus)
    return ActionResult(status="focus", message=f"focus:{focus.value}")


def clear_line(context: ActionContext, event: KeyEvent) -> ActionResult:
    del event
    context.state.active_buffer.clear_current_line()
    return ActionResult(status="clear_line")


__all__ = ["quit_session", "next_focus", "clear_line"]
