"""Session state shared by the dispatcher, the evaluator and renderers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from regex_tester.buffer import TextBuffer

from .focus import Focus


def _pattern_buffer() -> TextBuffer:
    return TextBuffer(name="pattern", multiline=False)


def _text_buffer() -> TextBuffer:
    return TextBuffer(name="text")


def _output_buffer() -> TextBuffer:
    return TextBuffer(name="output")


@dataclass(slots=True)
class ApplicationState:
    """Everything one session owns.

    ``compiled_pattern`` reflects the pattern buffer as of the last
    evaluation, not necessarily the latest keystroke.
    """

    running: bool = True
    focus: Focus = Focus.TEXT
    compiled_pattern: Optional[re.Pattern[str]] = None
    pattern_buffer: TextBuffer = field(default_factory=_pattern_buffer)
    text_buffer: TextBuffer = field(default_factory=_text_buffer)
    output_buffer: TextBuffer = field(default_factory=_output_buffer)

    def buffer_for(self, focus: Focus) -> TextBuffer:
        if focus is Focus.PATTERN:
            return self.pattern_buffer
        if focus is Focus.TEXT:
            return self.text_buffer
        return self.output_buffer

    @property
    def active_buffer(self) -> TextBuffer:
        return self.buffer_for(self.focus)

    @property
    def pattern(self) -> str:
        return self.pattern_buffer.text

    def focus_next(self) -> Focus:
        """Rotate focus; the newly focused cursor lands at end of its line."""

        self.focus = self.focus.next()
        self.active_buffer.snap_to_line_end()
        return self.focus

    def quit(self) -> None:
        self.running = False

    def flags(self) -> Dict[str, bool]:
        return {focus.flag: focus is self.focus for focus in Focus}
