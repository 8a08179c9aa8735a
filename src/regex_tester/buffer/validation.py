"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Cursor
from .sync import BufferValidationError


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    if cursor.line < 0 or cursor.line >= document.line_count:
        raise BufferValidationError("Line out of range", cursor=cursor)
    line = document.get_line(cursor.line)
    if cursor.column < 0 or cursor.column > len(line):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def clamp_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    """Pull ``cursor`` back inside ``document`` in place and return it."""

    line = max(0, min(cursor.line, document.line_count - 1))
    column = max(0, min(cursor.column, len(document.get_line(line))))
    cursor.move_to(column, line)
    return cursor
