"""Floating container holding the title bar and stat rows.

Rows are supplied before mount and composed in z-order; the panel never adds
or removes rows afterwards (settings changes rebuild the whole panel).
"""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widget import Widget

from city_vitals.tui.chip import Chip
from city_vitals.tui.widgets import DragHandle, FloatingMixin


class VitalsPanel(FloatingMixin, Vertical):
    """Floating, draggable dashboard panel."""

    DEFAULT_CSS = """
    VitalsPanel {
        layer: vitals;
        width: 40;
        background: $panel;
        color: $text;
    }
    VitalsPanel .title-bar {
        height: 2;
        border-bottom: solid $primary-muted;
    }
    VitalsPanel .title-bar .panel-title {
        width: 1fr;
        content-align-horizontal: center;
        text-style: bold;
    }
    """

    def __init__(self, title: str, on_close: Callable[[], None], title_bar_height: int = 2, **kwargs):
        super().__init__(**kwargs)
        self._title = title
        self._on_close = on_close
        self._title_bar_height = title_bar_height
        self._rows: list[Widget] = []

    def set_rows(self, rows: list[Widget]) -> None:
        if self.is_mounted:
            raise RuntimeError("rows must be set before the panel is mounted")
        self._rows = list(rows)

    @property
    def rows(self) -> list[Widget]:
        return list(self._rows)

    def compose(self) -> ComposeResult:
        with Horizontal(classes="title-bar") as bar:
            bar.styles.height = self._title_bar_height
            yield DragHandle(Text(self._title), target=self, classes="panel-title")
            yield Chip(" ⚙ ", action="app.toggle_settings", classes="settings-button")
            yield Chip(" ✕ ", on_press=self._on_close, classes="close-button")
        yield from self._rows

    def contains_mouse(self) -> bool:
        if not self.display or not self.is_mounted:
            return False
        return self.region.contains_point(self.app.mouse_position)
