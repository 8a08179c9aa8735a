"""Key events, action results and the context actions run against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from regex_tester.session import ApplicationState

PRESS = "press"

CONTROL = "ctrl"


def normalize_modifiers(modifiers) -> Tuple[str, ...]:
    values = (str(m).strip().lower() for m in modifiers)
    aliases = {"control": CONTROL, "meta": "alt"}
    cleaned = (aliases.get(value, value) for value in values if value)
    return tuple(sorted(dict.fromkeys(cleaned)))


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Normalized key event handed to the dispatcher.

    ``key`` is either a single character or an upper-case name such as
    ``ENTER``, ``TAB``, ``BACKSPACE``, ``ESC`` or ``LEFT``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    kind: str = PRESS
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def is_press(self) -> bool:
        return self.kind == PRESS

    @property
    def has_control(self) -> bool:
        return CONTROL in self.modifiers

    @property
    def character(self) -> Optional[str]:
        """The printable character carried by this event, if any."""

        candidate = self.text if self.text is not None else self.key
        if len(candidate) == 1 and candidate.isprintable():
            return candidate
        return None


@dataclass(slots=True)
class ActionResult:
    """What an action did; ``evaluate`` asks for an evaluator pass."""

    consumed: bool = True
    evaluate: bool = False
    status: str = "ok"
    message: Optional[str] = None


class EventBus:
    """Minimal bus letting hosts observe session transitions."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """Services every action can reach."""

    state: ApplicationState
    bus: EventBus = field(default_factory=EventBus)
