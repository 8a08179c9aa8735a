from __future__ import annotations

import pytest

from regex_tester.buffer import (
    BufferDocument,
    BufferValidationError,
    Cursor,
    TextBuffer,
    ensure_cursor,
)


def make_buffer(*lines: str, cursor: tuple[int, int] = (0, 0), multiline: bool = True) -> TextBuffer:
    buffer = TextBuffer(
        name="test",
        multiline=multiline,
        document=BufferDocument.from_lines(lines or ("",)),
    )
    buffer.set_cursor(*cursor)
    return buffer


def assert_cursor_in_bounds(buffer: TextBuffer) -> None:
    assert 0 <= buffer.cursor.line < buffer.line_count
    assert 0 <= buffer.cursor.column <= len(buffer.current_line)


def test_new_buffer_has_one_empty_line() -> None:
    buffer = TextBuffer()

    assert buffer.lines == ("",)
    assert buffer.cursor == Cursor(0, 0)
    assert buffer.is_empty()


def test_insert_char_advances_cursor() -> None:
    buffer = make_buffer("ac", cursor=(1, 0))

    buffer.insert_char("b")

    assert buffer.lines == ("abc",)
    assert buffer.cursor == Cursor(2, 0)


def test_insert_char_rejects_newline() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(ValueError):
        buffer.insert_char("\n")


def test_newline_appends_line_at_end() -> None:
    buffer = make_buffer("one", "two", cursor=(3, 1))

    buffer.newline()

    assert buffer.lines == ("one", "two", "")
    assert buffer.cursor == Cursor(0, 2)


def test_newline_from_earlier_line_moves_down_one() -> None:
    buffer = make_buffer("one", "two", cursor=(1, 0))

    buffer.newline()

    assert buffer.lines == ("one", "two", "")
    assert buffer.cursor == Cursor(0, 1)


def test_newline_is_ignored_by_single_line_buffer() -> None:
    buffer = make_buffer("a+", cursor=(2, 0), multiline=False)
    version = buffer.version

    buffer.newline()

    assert buffer.lines == ("a+",)
    assert buffer.cursor == Cursor(2, 0)
    assert buffer.version == version


def test_backspace_deletes_before_cursor() -> None:
    buffer = make_buffer("abc", cursor=(2, 0))

    buffer.backspace()

    assert buffer.lines == ("ac",)
    assert buffer.cursor == Cursor(1, 0)


def test_backspace_at_line_start_drops_line_text() -> None:
    buffer = make_buffer("ab", "cd", cursor=(0, 1))

    buffer.backspace()

    assert buffer.lines == ("ab",)
    assert buffer.cursor == Cursor(2, 0)


def test_backspace_at_origin_is_noop() -> None:
    buffer = make_buffer("ab", "cd")

    buffer.backspace()

    assert buffer.lines == ("ab", "cd")
    assert buffer.cursor == Cursor(0, 0)


def test_vertical_moves_snap_to_line_end() -> None:
    buffer = make_buffer("short", "a much longer line", "x", cursor=(2, 0))

    buffer.move_down()
    assert buffer.cursor == Cursor(18, 1)

    buffer.move_down()
    assert buffer.cursor == Cursor(1, 2)

    buffer.move_down()
    assert buffer.cursor == Cursor(1, 2)

    buffer.move_up()
    buffer.move_up()
    buffer.move_up()
    assert buffer.cursor == Cursor(5, 0)


def test_vertical_moves_ignored_by_single_line_buffer() -> None:
    buffer = make_buffer("abc", cursor=(1, 0), multiline=False)

    buffer.move_up()
    buffer.move_down()

    assert buffer.cursor == Cursor(1, 0)


def test_horizontal_moves_clamp_without_wrapping() -> None:
    buffer = make_buffer("ab", "cd", cursor=(0, 1))

    buffer.move_left()
    assert buffer.cursor == Cursor(0, 1)

    buffer.move_right()
    buffer.move_right()
    buffer.move_right()
    assert buffer.cursor == Cursor(2, 1)


def test_clear_current_line_keeps_line() -> None:
    buffer = make_buffer("keep", "hello", "also", cursor=(3, 1))

    buffer.clear_current_line()

    assert buffer.lines == ("keep", "", "also")
    assert buffer.cursor == Cursor(0, 1)


def test_replace_lines_clamps_cursor() -> None:
    buffer = make_buffer("one", "two", "three", cursor=(5, 2))

    buffer.replace_lines(["x"])

    assert buffer.lines == ("x",)
    assert buffer.cursor == Cursor(1, 0)


def test_replace_lines_with_nothing_leaves_one_line() -> None:
    buffer = make_buffer("one", "two")

    buffer.replace_lines([])

    assert buffer.lines == ("",)
    assert buffer.cursor == Cursor(0, 0)


def test_set_cursor_rejects_out_of_bounds() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.set_cursor(4, 0)

    assert excinfo.value.cursor == Cursor(4, 0)
    with pytest.raises(BufferValidationError):
        ensure_cursor(buffer.document, Cursor(0, 1))


def test_cursor_stays_in_bounds_through_edit_sequence() -> None:
    buffer = make_buffer()
    operations = [
        lambda: buffer.insert_char("a"),
        buffer.newline,
        lambda: buffer.insert_char("b"),
        buffer.move_up,
        buffer.newline,
        buffer.backspace,
        buffer.backspace,
        buffer.move_right,
        buffer.move_down,
        buffer.clear_current_line,
        buffer.move_left,
        buffer.backspace,
        buffer.backspace,
        buffer.backspace,
    ]

    for operation in operations:
        operation()
        assert_cursor_in_bounds(buffer)


def test_mirror_is_a_snapshot() -> None:
    buffer = make_buffer("abc", cursor=(3, 0))

    mirror = buffer.mirror()
    buffer.insert_char("d")

    assert mirror.lines == ("abc",)
    assert mirror.cursor == Cursor(3, 0)
    assert mirror.name == "test"
    assert buffer.version > mirror.version


def test_from_text_splits_lines() -> None:
    buffer = TextBuffer.from_text("a\nb\n")

    assert buffer.lines == ("a", "b", "")
    assert buffer.text == "a\nb\n"

    with pytest.raises(ValueError):
        TextBuffer.from_text("a\nb", multiline=False)
