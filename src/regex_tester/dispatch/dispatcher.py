"""Routes one key event to one state mutation, then re-evaluates if needed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from regex_tester.actions import (
    CONTROL,
    ActionContext,
    ActionResult,
    EventBus,
    KeyEvent,
)
from regex_tester.evaluation import EvaluationResult, Evaluator
from regex_tester.keymaps import (
    INSERT_ACTION_ID,
    ActionRef,
    KeymapRegistry,
    KeymapResolver,
    key_token,
    load_default_keymaps,
)
from regex_tester.runtime import telemetry
from regex_tester.session import ApplicationState


@dataclass(slots=True)
class DispatchResult:
    """Outcome of :meth:`InputDispatcher.handle_key`."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    action_id: Optional[str] = None
    evaluation: Optional[EvaluationResult] = None

    @property
    def evaluated(self) -> bool:
        return self.evaluation is not None


class InputDispatcher:
    """Maps ``(modifiers, key, focus)`` to an action on the session state.

    Lookup order: the full token (``ctrl+shift+u``), the ctrl-only chord
    (``ctrl+u``), the bare key, then the insert action for printable
    characters. Anything else is ignored.
    """

    def __init__(
        self,
        state: Optional[ApplicationState] = None,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        evaluator: Evaluator | None = None,
        bus: EventBus | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.state = state or ApplicationState()
        self.context = ActionContext(state=self.state, bus=bus or EventBus())
        self.logger = telemetry.get_logger("regex_tester.dispatch")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="regex_tester.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="regex_tester.keymaps"
        )
        self.evaluator = evaluator or Evaluator()

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    def handle_key(self, event: KeyEvent) -> DispatchResult:
        if not self.state.running:
            return DispatchResult(consumed=False, status="stopped")
        if not event.is_press:
            return DispatchResult(consumed=False, status="ignored")

        action = self._lookup(event)
        if action is None:
            return DispatchResult(consumed=False, status="ignored")

        with telemetry.span(
            name=f"dispatch::{action.id}",
            component="dispatch",
            metadata={"key": event.key, "focus": self.state.focus.value},
        ):
            outcome = action(self.context, event)
        if not isinstance(outcome, ActionResult):
            outcome = ActionResult()

        evaluation = None
        if outcome.evaluate:
            evaluation = self.evaluate()

        return DispatchResult(
            consumed=outcome.consumed,
            status=outcome.status,
            message=outcome.message,
            action_id=action.id,
            evaluation=evaluation,
        )

    def evaluate(self) -> EvaluationResult:
        result = self.evaluator.evaluate(self.state)
        self.bus.emit("output.updated", result)
        return result

    def _lookup(self, event: KeyEvent) -> Optional[ActionRef]:
        flags = self.state.flags()
        tokens = [key_token(event.key, event.modifiers)]
        if event.has_control and event.modifiers != (CONTROL,):
            # Extra modifiers on top of ctrl still reach the ctrl chords.
            tokens.append(key_token(event.key, (CONTROL,)))
        if event.modifiers:
            tokens.append(event.key)
        for token in tokens:
            result = self.keymap_resolver.resolve(token, context=flags)
            if result.status == "match" and result.match:
                return result.match.action
        if event.character is not None:
            return self.keymap_registry.get_action(INSERT_ACTION_ID)
        return None


__all__ = ["DispatchResult", "InputDispatcher"]
