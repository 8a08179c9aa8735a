"""Key event dispatch."""

from .dispatcher import DispatchResult, InputDispatcher

__all__ = ["DispatchResult", "InputDispatcher"]
