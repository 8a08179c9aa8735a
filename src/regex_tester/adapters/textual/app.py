"""Executable Textual app hosting the regex tester."""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use regex_tester.adapters.textual.app"
    ) from exc

from regex_tester.buffer import BufferMirror
from regex_tester.dispatch import InputDispatcher
from regex_tester.evaluation import Evaluator
from regex_tester.runtime import telemetry
from regex_tester.runtime.settings import Settings
from regex_tester.session import ApplicationState, Focus

from .controller import PanelsMirror, TextualRegexAdapter, TextualUIHooks
from .layout import PANEL_TITLES, PanelLayout, compute_layout
from .log_stream import NetworkLogStreamer

CURSOR_STYLE = "reverse"


def create_dispatcher(settings: Optional[Settings] = None) -> InputDispatcher:
    """Fresh session state wired to the default keymaps."""

    settings = settings or Settings()
    return InputDispatcher(
        ApplicationState(),
        evaluator=Evaluator(unmatched_placeholder=settings.unmatched_placeholder),
    )


class BufferPanel(Static):
    """Bordered panel showing one buffer; the active one draws the cursor."""

    def __init__(self, focus: Focus) -> None:
        super().__init__("", id=f"{focus.value}-panel")
        self.border_title = PANEL_TITLES[focus]

    def show(self, mirror: BufferMirror, *, active: bool) -> None:
        self.set_class(active, "active")
        self.update(render_buffer(mirror, active=active))


def render_buffer(mirror: BufferMirror, *, active: bool) -> Text:
    text = Text()
    for index, line in enumerate(mirror.lines):
        if index:
            text.append("\n")
        if active and index == mirror.cursor.line:
            column = mirror.cursor.column
            text.append(line[:column])
            text.append(line[column : column + 1] or " ", style=CURSOR_STYLE)
            text.append(line[column + 1 :])
        else:
            text.append(line)
    return text


class RegexTesterApp(App[None]):
    """Three stacked panels: regex, text, matches."""

    CSS = """
	Screen {
		layout: vertical;
	}

	BufferPanel {
		border: round $secondary;
		padding: 0 0;
		overflow: hidden;
	}

	BufferPanel.active {
		border: round $accent;
	}

	#pattern-panel {
		height: 3;
	}

	#text-panel, #output-panel {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("tab", "send_key('TAB')", show=False, priority=True),
        Binding("shift+tab", "send_key('TAB')", show=False, priority=True),
        Binding("escape", "send_key('ESC')", show=False, priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.dispatcher: InputDispatcher | None = None
        self.adapter: TextualRegexAdapter | None = None
        self.panel_layout: PanelLayout | None = None
        self._panels: dict[Focus, BufferPanel] = {}
        self._status_widget: Static | None = None
        self._log_streamer: NetworkLogStreamer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="panels"):
            for focus in Focus:
                panel = BufferPanel(focus)
                self._panels[focus] = panel
                yield panel
        self._status_widget = Static("", id="status-line")
        yield self._status_widget

    async def on_mount(self) -> None:
        self.dispatcher = create_dispatcher(self.settings)
        hooks = TextualUIHooks(
            update_panels=self._update_panels,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualRegexAdapter(self.dispatcher, hooks)
        await self._maybe_start_log_stream()

    async def on_unmount(self) -> None:
        if self._log_streamer:
            await self._log_streamer.stop()
            self._log_streamer = None

    def on_resize(self, event: events.Resize) -> None:
        # The status line takes the last row.
        self.panel_layout = compute_layout(event.size.width, event.size.height - 1)
        for focus, panel in self._panels.items():
            panel.styles.height = self.panel_layout.panel_for(focus).height

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_raw_key(event.key, event.character)
        event.stop()
        event.prevent_default()

    def action_send_key(self, key: str) -> None:
        if self.adapter:
            self.adapter.handle_textual_key(key)

    def _update_panels(self, mirror: PanelsMirror) -> None:
        for focus, panel in self._panels.items():
            buffer_mirror = {
                Focus.PATTERN: mirror.pattern,
                Focus.TEXT: mirror.text,
                Focus.OUTPUT: mirror.output,
            }[focus]
            panel.show(buffer_mirror, active=focus is mirror.focus)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "session.quit":
            self.exit()

    def _log_line(self, line: str) -> None:
        if self._log_streamer:
            self._log_streamer.log(line)

    async def _maybe_start_log_stream(self) -> None:
        if self.settings.log_port is None:
            return
        self._log_streamer = NetworkLogStreamer(
            self.settings.log_host, self.settings.log_port
        )
        await self._log_streamer.start()
        self._update_status(
            f"Log stream @ {self.settings.log_host}:{self._log_streamer.port}"
        )
        self._log_line("log stream ready")


def _parse_args(argv: Optional[Sequence[str]] = None) -> Settings:
    defaults = Settings.from_env()
    parser = argparse.ArgumentParser(
        prog="regex-tester",
        description="Type a regex and sample text; matches update as you type.",
    )
    parser.add_argument(
        "--log-host",
        default=defaults.log_host,
        help="Host interface for the TCP log stream (default: %(default)s)",
    )
    parser.add_argument(
        "--log-port",
        type=int,
        default=defaults.log_port,
        help="TCP port for the log stream (0 for ephemeral, default: %(default)s)",
    )
    parser.add_argument(
        "--no-log-server",
        action="store_true",
        help="Disable the TCP log stream",
    )
    parser.add_argument(
        "--telemetry",
        choices=telemetry.PRESETS,
        default=defaults.telemetry_preset,
        help="Telemetry preset (default: %(default)s)",
    )
    parser.add_argument(
        "--unmatched",
        default=defaults.unmatched_placeholder,
        help="Text shown for groups that did not take part in a match",
    )
    args = parser.parse_args(argv)
    return Settings(
        log_host=args.log_host,
        log_port=None if args.no_log_server else args.log_port,
        telemetry_preset=args.telemetry,
        unmatched_placeholder=args.unmatched,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = _parse_args(argv)
    telemetry.configure(preset=settings.telemetry_preset)
    RegexTesterApp(settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
