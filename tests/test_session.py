from __future__ import annotations

import pytest

from regex_tester.buffer import BufferDocument, Cursor, TextBuffer
from regex_tester.session import ApplicationState, Focus


@pytest.mark.parametrize("start", list(Focus))
def test_focus_cycle_returns_after_three_steps(start: Focus) -> None:
    assert start.next().next().next() is start


def test_focus_successor_order() -> None:
    assert Focus.PATTERN.next() is Focus.TEXT
    assert Focus.TEXT.next() is Focus.OUTPUT
    assert Focus.OUTPUT.next() is Focus.PATTERN


def test_focus_predicates() -> None:
    assert Focus.PATTERN.is_pattern and not Focus.PATTERN.is_text
    assert Focus.TEXT.is_text and not Focus.TEXT.is_output
    assert Focus.OUTPUT.is_output and not Focus.OUTPUT.is_pattern


def test_new_state_defaults() -> None:
    state = ApplicationState()

    assert state.running is True
    assert state.focus is Focus.TEXT
    assert state.compiled_pattern is None
    for buffer in (state.pattern_buffer, state.text_buffer, state.output_buffer):
        assert buffer.lines == ("",)
    assert state.pattern_buffer.multiline is False


def test_active_buffer_follows_focus() -> None:
    state = ApplicationState()

    assert state.active_buffer is state.text_buffer
    state.focus = Focus.OUTPUT
    assert state.active_buffer is state.output_buffer
    state.focus = Focus.PATTERN
    assert state.active_buffer is state.pattern_buffer


def test_focus_next_snaps_cursor_to_line_end() -> None:
    output = TextBuffer(
        name="output", document=BufferDocument.from_lines(["0.", "  0: abc"])
    )
    output.set_cursor(0, 1)
    state = ApplicationState(output_buffer=output)

    assert state.focus_next() is Focus.OUTPUT
    assert output.cursor == Cursor(8, 1)


def test_flags_mark_only_active_focus() -> None:
    state = ApplicationState(focus=Focus.PATTERN)

    assert state.flags() == {
        "pattern_focused": True,
        "text_focused": False,
        "output_focused": False,
    }


def test_quit_stops_session() -> None:
    state = ApplicationState()

    state.quit()

    assert state.running is False
