"""Text buffers: line storage, cursor state, and edit primitives."""

from .buffer import Edit, TextBuffer
from .document import BufferDocument
from .state import Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferMirror",
    "BufferValidationError",
    "Cursor",
    "Edit",
    "TextBuffer",
    "clamp_cursor",
    "ensure_cursor",
]
