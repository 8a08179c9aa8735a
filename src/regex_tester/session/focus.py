"""Which of the three panels receives input."""

from __future__ import annotations

from enum import Enum


class Focus(Enum):
    PATTERN = "pattern"
    TEXT = "text"
    OUTPUT = "output"

    def next(self) -> "Focus":
        return _SUCCESSOR[self]

    @property
    def is_pattern(self) -> bool:
        return self is Focus.PATTERN

    @property
    def is_text(self) -> bool:
        return self is Focus.TEXT

    @property
    def is_output(self) -> bool:
        return self is Focus.OUTPUT

    @property
    def flag(self) -> str:
        """Keymap flag that is true while this focus is active."""

        return f"{self.value}_focused"


_SUCCESSOR = {
    Focus.PATTERN: Focus.TEXT,
    Focus.TEXT: Focus.OUTPUT,
    Focus.OUTPUT: Focus.PATTERN,
}
