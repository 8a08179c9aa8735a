"""Editable text buffer: line storage plus a 2D cursor."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Optional

from regex_tester.runtime import telemetry

from .document import BufferDocument
from .state import Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import clamp_cursor, ensure_cursor


class TextBuffer:
    """Lines + cursor with the character-level edit primitives.

    ``multiline=False`` turns the buffer into a single-line field: ``newline``
    and vertical movement leave it untouched.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        multiline: bool = True,
        document: Optional[BufferDocument] = None,
        cursor: Optional[Cursor] = None,
    ) -> None:
        self.name = name
        self.multiline = multiline
        self.document = document or BufferDocument()
        self.cursor = cursor or Cursor()
        ensure_cursor(self.document, self.cursor)

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "default", multiline: bool = True
    ) -> "TextBuffer":
        if not multiline and "\n" in text:
            raise ValueError(f"Buffer '{name}' is single-line")
        return cls(name=name, multiline=multiline, document=BufferDocument.from_text(text))

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self.document.snapshot())

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def current_line(self) -> str:
        return self.document.get_line(self.cursor.line)

    @property
    def text(self) -> str:
        return self.document.joined()

    @property
    def version(self) -> int:
        return self.document.version

    def is_empty(self) -> bool:
        return self.line_count == 1 and not self.document.get_line(0)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            name=self.name,
            lines=self.lines,
            cursor=self.cursor.copy(),
            version=self.version,
            attributes=dict(attributes or {}),
        )

    def set_cursor(self, column: int, line: int) -> None:
        ensure_cursor(self.document, Cursor(column, line))
        self.cursor.move_to(column, line)

    # -- content edits -------------------------------------------------

    def insert_char(self, char: str) -> None:
        if len(char) != 1 or char == "\n":
            raise ValueError(f"insert_char expects one non-newline character, got {char!r}")
        with Edit(self, "insert_char"):
            line = self.current_line
            column = self.cursor.column
            self.document.set_line(self.cursor.line, line[:column] + char + line[column:])
            self.cursor.column += 1

    def newline(self) -> None:
        if not self.multiline:
            return
        with Edit(self, "newline"):
            # New lines always go to the end of the buffer.
            self.document.append_line("")
            self.cursor.move_to(0, self.cursor.line + 1)

    def backspace(self) -> None:
        column, line = self.cursor.as_tuple()
        if column == 0 and line == 0:
            return
        with Edit(self, "backspace"):
            if column > 0:
                text = self.current_line
                self.document.set_line(line, text[: column - 1] + text[column:])
                self.cursor.column -= 1
                return
            # Start of a later line: the line goes away, its text with it.
            self.document.remove_line(line)
            previous = self.document.get_line(line - 1)
            self.cursor.move_to(len(previous), line - 1)

    def clear_current_line(self) -> None:
        with Edit(self, "clear_line"):
            self.document.set_line(self.cursor.line, "")
            self.cursor.column = 0

    def replace_lines(self, lines: Iterable[str]) -> None:
        """Swap in new content wholesale, keeping the cursor in bounds."""

        with Edit(self, "replace_lines"):
            self.document.replace(lines)
            clamp_cursor(self.document, self.cursor)

    # -- navigation ----------------------------------------------------

    def move_up(self) -> None:
        if self.multiline and self.cursor.line > 0:
            self._jump_to_line(self.cursor.line - 1)

    def move_down(self) -> None:
        if self.multiline and self.cursor.line < self.line_count - 1:
            self._jump_to_line(self.cursor.line + 1)

    def move_left(self) -> None:
        if self.cursor.column > 0:
            self.cursor.column -= 1

    def move_right(self) -> None:
        if self.cursor.column < len(self.current_line):
            self.cursor.column += 1

    def snap_to_line_end(self) -> None:
        self.cursor.column = len(self.current_line)

    def _jump_to_line(self, line: int) -> None:
        # No column memory: vertical moves land at end of line.
        self.cursor.move_to(len(self.document.get_line(line)), line)


class Edit(AbstractContextManager["Edit"]):
    """Wraps one content edit in a telemetry span and re-checks the cursor."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Edit":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        assert self._span_cm is not None
        if exc_type is None:
            try:
                ensure_cursor(self.buffer.document, self.buffer.cursor)
            except BufferValidationError as err:
                self._span_cm.__exit__(type(err), err, err.__traceback__)
                raise
        self._span_cm.__exit__(exc_type, exc, tb)
        return False
