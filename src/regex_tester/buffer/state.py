"""Cursor tracking for text buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class Cursor:
    """Insertion point inside a buffer: ``column`` may equal the line length."""

    column: int = 0
    line: int = 0

    def move_to(self, column: int, line: int) -> None:
        self.column = column
        self.line = line

    def as_tuple(self) -> Tuple[int, int]:
        return (self.column, self.line)

    def copy(self) -> "Cursor":
        return Cursor(self.column, self.line)
