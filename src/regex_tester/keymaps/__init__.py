"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeyStroke, WhenClause, key_token
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import INSERT_ACTION_ID, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "WhenClause",
    "key_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "INSERT_ACTION_ID",
    "load_default_keymaps",
]
