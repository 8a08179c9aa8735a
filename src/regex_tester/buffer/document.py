"""Line storage backing a text buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Mutable list-of-lines that always holds at least one line.

    Every mutation bumps ``version`` so hosts can cheaply detect changes.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "BufferDocument":
        return cls(_lines=list(lines))

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.split("\n"))

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self.version += 1

    def append_line(self, text: str = "") -> None:
        self._lines.append(text)
        self.version += 1

    def remove_line(self, index: int) -> str:
        if self.line_count == 1:
            raise IndexError("cannot remove the only line of a document")
        removed = self._lines.pop(index)
        self.version += 1
        return removed

    def replace(self, lines: Iterable[str]) -> None:
        self._lines = list(lines) or [""]
        self.version += 1

    def joined(self, separator: str = "\n") -> str:
        return separator.join(self._lines)
