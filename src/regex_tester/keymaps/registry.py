"""Keymap registry: named actions plus the key bindings that reach them."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Sequence

from regex_tester.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a new binding can fire in the same context as an existing one."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' on {binding.token!r} clashes with "
            f"{', '.join(other.id for other in self.conflicts)}"
        )


class KeymapRegistry:
    """Actions by id and bindings grouped by key token.

    Every change bumps :meth:`revision` so resolvers know to rebuild.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._by_token: Dict[str, list[Binding]] = {}
        self._ids: set[str] = set()
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def register_action(self, action: ActionRef) -> ActionRef:
        if action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "token": binding.token},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            if binding.id in self._ids:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflicts = self.detect_conflicts(binding)
            if conflicts:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)

            self._by_token.setdefault(binding.token, []).append(binding)
            self._ids.add(binding.id)
            self._revision += 1
            return binding

    def iter_bindings(self, token: Optional[str] = None) -> Iterator[Binding]:
        if token is not None:
            yield from self._by_token.get(token, ())
            return
        for bindings in self._by_token.values():
            yield from bindings

    def tokens(self) -> Sequence[str]:
        return sorted(self._by_token)

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        return [
            existing
            for existing in self.iter_bindings(binding.token)
            if _same_context(binding, existing)
        ]


def _same_context(left: Binding, right: Binding) -> bool:
    """True when the resolver could not tell the two bindings apart."""

    if not left.when or not right.when:
        # An ungated binding only loses to a gated one, never ties with it.
        return not left.when and not right.when
    return left.when_map == right.when_map


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
]
