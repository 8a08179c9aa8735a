"""Snapshot and error types exchanged with host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .state import Cursor


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Read-only view of one buffer for renderers."""

    name: str
    lines: Sequence[str]
    cursor: Cursor
    version: int
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class BufferValidationError(RuntimeError):
    """Raised when a cursor falls outside its buffer."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
