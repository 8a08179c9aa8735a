from __future__ import annotations

from typing import List

from regex_tester.adapters.textual import (
    PanelsMirror,
    TextualRegexAdapter,
    TextualUIHooks,
    normalize_textual_key,
)
from regex_tester.dispatch import InputDispatcher
from regex_tester.session import ApplicationState, Focus


def make_adapter(**hooks) -> TextualRegexAdapter:
    hooks.setdefault("update_panels", lambda mirror: None)
    return TextualRegexAdapter(InputDispatcher(ApplicationState()), TextualUIHooks(**hooks))


def test_adapter_pushes_initial_and_updated_panels() -> None:
    frames: List[PanelsMirror] = []
    adapter = make_adapter(update_panels=frames.append)

    adapter.handle_raw_key("a", "a")

    assert len(frames) == 2
    assert frames[0].text.lines == ("",)
    assert frames[-1].text.lines == ("a",)
    assert frames[-1].focus is Focus.TEXT
    assert frames[-1].active is frames[-1].text


def test_adapter_status_reports_focus_cursor_and_matches() -> None:
    statuses: List[str] = []
    adapter = make_adapter(update_status=statuses.append)

    adapter.handle_raw_key("a", "a")
    adapter.handle_raw_key("tab")
    adapter.handle_raw_key("tab")
    adapter.handle_raw_key("a", "a")

    assert statuses[0] == "text | Ln 1, Col 2"
    assert statuses[-1] == "pattern | Ln 1, Col 2 | 1 match(es)"


def test_adapter_status_flags_pattern_error() -> None:
    statuses: List[str] = []
    adapter = make_adapter(update_status=statuses.append)
    adapter.handle_raw_key("tab")
    adapter.handle_raw_key("tab")

    adapter.handle_raw_key("[", "[")

    assert statuses[-1].endswith("pattern error")


def test_adapter_relays_bus_events() -> None:
    events: List[tuple[str, object | None]] = []
    adapter = make_adapter(handle_event=lambda name, payload: events.append((name, payload)))

    adapter.handle_raw_key("tab")
    adapter.handle_raw_key("escape")

    assert ("focus.changed", Focus.OUTPUT) in events
    assert ("session.quit", None) in events
    assert adapter.running is False


def test_adapter_control_u_clears_line() -> None:
    adapter = make_adapter()
    adapter.handle_raw_key("h", "h")
    adapter.handle_raw_key("i", "i")

    adapter.handle_raw_key("ctrl+u", "\x15")

    assert adapter.snapshot().text.lines == ("",)


def test_adapter_control_shift_u_clears_line() -> None:
    adapter = make_adapter()
    adapter.handle_raw_key("h", "h")
    adapter.handle_raw_key("i", "i")

    result = adapter.handle_raw_key("ctrl+shift+u", "\x15")

    assert result.action_id == "edit.clear_line"
    assert adapter.snapshot().text.lines == ("",)


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(log=logs.append)

    adapter.handle_textual_key("x", text="x")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert any("event ->" in line and "output.updated" in line for line in logs)


def test_normalize_named_keys() -> None:
    assert normalize_textual_key("escape") == ("ESC", None, ())
    assert normalize_textual_key("enter") == ("ENTER", None, ())
    assert normalize_textual_key("backspace") == ("BACKSPACE", None, ())
    assert normalize_textual_key("up") == ("UP", None, ())
    assert normalize_textual_key("shift+tab") == ("TAB", None, ("shift",))


def test_normalize_characters_and_chords() -> None:
    assert normalize_textual_key("a", "a") == ("a", "a", ())
    assert normalize_textual_key("space", " ") == (" ", " ", ())
    assert normalize_textual_key("ctrl+u", "\x15") == ("u", None, ("ctrl",))
    assert normalize_textual_key("shift+a", "A") == ("A", "A", ())
    assert normalize_textual_key("f5") == ("F5", None, ())
