"""Built-in actions and key bindings for the regex tester."""

from __future__ import annotations

from regex_tester.actions import core as core_actions
from regex_tester.actions import editing as edit_actions

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapRegistry

INSERT_ACTION_ID = "edit.insert_char"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="session.quit",
        handler=core_actions.quit_session,
        description="Stop the session",
    ),
    ActionRef(
        id="focus.next",
        handler=core_actions.next_focus,
        description="Rotate focus pattern -> text -> output",
    ),
    ActionRef(
        id="edit.clear_line",
        handler=core_actions.clear_line,
        description="Empty the current line of the focused buffer",
    ),
    ActionRef(
        id=INSERT_ACTION_ID,
        handler=edit_actions.insert_char,
        description="Insert the typed character",
    ),
    ActionRef(
        id="edit.newline",
        handler=edit_actions.newline,
        description="Start a new line",
    ),
    ActionRef(
        id="edit.backspace",
        handler=edit_actions.backspace,
        description="Delete before the cursor",
    ),
    ActionRef(id="move.up", handler=edit_actions.move_up, description="Line up"),
    ActionRef(id="move.down", handler=edit_actions.move_down, description="Line down"),
    ActionRef(id="move.left", handler=edit_actions.move_left, description="Column left"),
    ActionRef(
        id="move.right", handler=edit_actions.move_right, description="Column right"
    ),
)

_MULTILINE_ONLY = "!pattern_focused"

# (binding id, key stroke, action id, gate)
_BINDING_TABLE: tuple[tuple[str, str, str, str | None], ...] = (
    ("clear_line.ctrl_u", "ctrl+u", "edit.clear_line", None),
    ("clear_line.ctrl_shift_u", "ctrl+U", "edit.clear_line", None),
    ("quit.escape", "ESC", "session.quit", None),
    ("edit.enter", "ENTER", "edit.newline", None),
    ("focus.tab", "TAB", "focus.next", None),
    ("edit.backspace", "BACKSPACE", "edit.backspace", None),
    ("move.up", "UP", "move.up", _MULTILINE_ONLY),
    ("move.down", "DOWN", "move.down", _MULTILINE_ONLY),
    ("move.left", "LEFT", "move.left", None),
    ("move.right", "RIGHT", "move.right", None),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(
        id=binding_id,
        stroke=KeyStroke.parse(stroke),
        action_id=action_id,
        when=(WhenClause.parse(gate),) if gate else (),
    )
    for binding_id, stroke, action_id, gate in _BINDING_TABLE
)


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register the built-in actions, then the bindings that point at them."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "INSERT_ACTION_ID",
]
