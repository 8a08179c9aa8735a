"""Textual host: adapter, panel layout, and log streaming.

The runnable app lives in :mod:`regex_tester.adapters.textual.app`.
"""

from .controller import (
    PanelsMirror,
    TextualRegexAdapter,
    TextualUIHooks,
    normalize_textual_key,
)
from .layout import PanelLayout, Rect, active_cursor_position, compute_layout
from .log_stream import NetworkLogStreamer

__all__ = [
    "NetworkLogStreamer",
    "PanelLayout",
    "PanelsMirror",
    "Rect",
    "TextualRegexAdapter",
    "TextualUIHooks",
    "active_cursor_position",
    "compute_layout",
    "normalize_textual_key",
]
