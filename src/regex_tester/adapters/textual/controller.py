"""Textual-facing adapter that feeds key events to the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from regex_tester.actions import KeyEvent
from regex_tester.buffer import BufferMirror
from regex_tester.dispatch import DispatchResult, InputDispatcher
from regex_tester.session import Focus

# Textual key names -> dispatcher key names.
_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "delete": "DELETE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "home": "HOME",
    "end": "END",
}
_MODIFIERS = ("ctrl", "shift", "alt", "meta")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class PanelsMirror:
    """Everything a renderer needs for one frame."""

    pattern: BufferMirror
    text: BufferMirror
    output: BufferMirror
    focus: Focus
    running: bool

    @property
    def active(self) -> BufferMirror:
        if self.focus is Focus.PATTERN:
            return self.pattern
        if self.focus is Focus.TEXT:
            return self.text
        return self.output


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_panels: Callable[[PanelsMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def normalize_textual_key(
    key: str, character: Optional[str] = None
) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    """Split a Textual key (``"ctrl+u"``, ``"escape"``, ``"a"``) into parts.

    Returns ``(key, text, modifiers)`` in dispatcher vocabulary.
    """

    if key in _NAMED_KEYS:
        return (_NAMED_KEYS[key], None, ())

    modifiers: list[str] = []
    base = key
    while "+" in base:
        head, _, rest = base.partition("+")
        if head not in _MODIFIERS or not rest:
            break
        modifiers.append(head)
        base = rest

    if base in _NAMED_KEYS:
        return (_NAMED_KEYS[base], None, tuple(modifiers))

    printable = character if character and character.isprintable() else None
    if len(base) == 1:
        if "shift" in modifiers and printable:
            base = printable
            modifiers.remove("shift")
        return (base, printable, tuple(modifiers))
    if printable and not modifiers:
        # Named printable keys such as "space" or "full_stop".
        return (printable, printable, ())
    return (base.upper(), None, tuple(modifiers))


class TextualRegexAdapter:
    """Bridges the dispatcher and its bus to a Textual-friendly surface."""

    def __init__(self, dispatcher: InputDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_panels()

    @property
    def running(self) -> bool:
        return self.dispatcher.state.running

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> DispatchResult:
        """Dispatch a key that is already in dispatcher vocabulary."""

        event = KeyEvent(key=key, text=text, modifiers=tuple(modifiers))
        self._log_state("key ->", key=event.key, text=text, mods=event.modifiers)
        result = self.dispatcher.handle_key(event)
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            action=result.action_id,
            evaluated=result.evaluated,
        )
        return result

    def handle_raw_key(self, key: str, character: Optional[str] = None) -> DispatchResult:
        """Normalize a raw Textual key name and dispatch it."""

        name, text, modifiers = normalize_textual_key(key, character)
        return self.handle_textual_key(name, text=text, modifiers=modifiers)

    def snapshot(self) -> PanelsMirror:
        state = self.dispatcher.state
        return PanelsMirror(
            pattern=state.pattern_buffer.mirror(),
            text=state.text_buffer.mirror(),
            output=state.output_buffer.mirror(),
            focus=state.focus,
            running=state.running,
        )

    def _after_result(self, result: DispatchResult) -> None:
        if result.consumed:
            self.hooks.update_status(self._status_line(result))
        self._refresh_panels()

    def _status_line(self, result: DispatchResult) -> str:
        state = self.dispatcher.state
        cursor = state.active_buffer.cursor
        parts = [state.focus.value, f"Ln {cursor.line + 1}, Col {cursor.column + 1}"]
        evaluation = result.evaluation
        if evaluation is not None:
            if evaluation.outcome == "error":
                parts.append("pattern error")
            elif evaluation.outcome == "matched":
                parts.append(f"{evaluation.match_count} match(es)")
        return " | ".join(parts)

    def _subscribe_events(self) -> None:
        bus = self.dispatcher.bus
        for event in ("focus.changed", "session.quit", "output.updated"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_panels(self) -> None:
        self.hooks.update_panels(self.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.dispatcher.state
        return {
            "focus": state.focus.value,
            "cursor": state.active_buffer.cursor.as_tuple(),
            "pattern": state.pattern,
            "compiled": state.compiled_pattern is not None,
            "running": state.running,
        }


__all__ = [
    "PanelsMirror",
    "TextualRegexAdapter",
    "TextualUIHooks",
    "normalize_textual_key",
]
