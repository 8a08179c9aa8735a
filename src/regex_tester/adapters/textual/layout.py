"""Panel geometry: pattern on top, text and matches splitting the rest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from regex_tester.buffer import Cursor
from regex_tester.session import ApplicationState, Focus

PATTERN_PANEL_HEIGHT = 3
PANEL_TITLES = {Focus.PATTERN: "regex", Focus.TEXT: "text", Focus.OUTPUT: "matches"}


@dataclass(frozen=True, slots=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class PanelLayout:
    pattern: Rect
    text: Rect
    output: Rect

    def panel_for(self, focus: Focus) -> Rect:
        if focus is Focus.PATTERN:
            return self.pattern
        if focus is Focus.TEXT:
            return self.text
        return self.output


def compute_layout(width: int, height: int, *, x: int = 0, y: int = 0) -> PanelLayout:
    """Stack the three panels vertically inside ``width`` x ``height``."""

    width = max(0, width)
    height = max(0, height)
    pattern_height = min(PATTERN_PANEL_HEIGHT, height)
    remaining = height - pattern_height
    text_height = (remaining + 1) // 2
    output_height = remaining - text_height
    return PanelLayout(
        pattern=Rect(x, y, width, pattern_height),
        text=Rect(x, y + pattern_height, width, text_height),
        output=Rect(x, y + pattern_height + text_height, width, output_height),
    )


def cursor_screen_position(panel: Rect, cursor: Cursor) -> Tuple[int, int]:
    # Panels draw a one-cell border on every side.
    return (panel.x + cursor.column + 1, panel.y + cursor.line + 1)


def active_cursor_position(state: ApplicationState, layout: PanelLayout) -> Tuple[int, int]:
    """Screen cell of the focused buffer's cursor; only that cursor is shown."""

    return cursor_screen_position(
        layout.panel_for(state.focus), state.active_buffer.cursor
    )


__all__ = [
    "PANEL_TITLES",
    "PATTERN_PANEL_HEIGHT",
    "PanelLayout",
    "Rect",
    "active_cursor_position",
    "compute_layout",
    "cursor_screen_position",
]
