"""Single-stroke keymap resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional

from regex_tester.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    token: str
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Looks up the binding for a key token under the current flags.

    The token index is rebuilt lazily whenever the registry revision moves.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Optional[tuple[int, Dict[str, tuple[Binding, ...]]]] = None

    def resolve(
        self,
        token: str,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"token": token},
        ) as handle:
            candidates = self._ensure_index().get(token, ())
            match = self._select_match(candidates, ctx)
            if match is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", token=token)
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", match.binding.id)
            return ResolutionResult(status="match", token=token, match=match)

    def _ensure_index(self) -> Dict[str, tuple[Binding, ...]]:
        revision = self._registry.revision()
        if self._cache and self._cache[0] == revision:
            return self._cache[1]

        index: Dict[str, list[Binding]] = {}
        for binding in self._registry.iter_bindings():
            index.setdefault(binding.token, []).append(binding)
        frozen = {token: tuple(bindings) for token, bindings in index.items()}
        self._cache = (revision, frozen)
        return frozen

    def _select_match(
        self, candidates: tuple[Binding, ...], context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        allowed = [binding for binding in candidates if binding.allows(context)]
        if not allowed:
            return None
        # Higher priority first, then the more specific (more gated) binding.
        allowed.sort(key=lambda b: (-b.priority, -len(b.when), b.id))
        binding = allowed[0]
        return ResolutionMatch(
            binding=binding, action=self._registry.get_action(binding.action_id)
        )


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
