"""Dashboard widgets for the vitals panel and its toggle button.

Floating widgets keep their own (x, y) position and mirror it into
styles.offset, so the host can read back exactly what the user dragged to.
"""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual import events
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

from city_vitals.core.stat_catalog import StatId
from city_vitals.tui import panel_renderers


class FloatingMixin:
    """Absolute position inside a layered container."""

    _position: tuple[float, float] = (0.0, 0.0)

    @property
    def position(self) -> tuple[float, float]:
        return self._position

    def move_to(self, x: float, y: float) -> None:
        self._position = (float(x), float(y))
        self.styles.offset = (int(round(x)), int(round(y)))


class DragHandle(Static):
    """Drags a FloatingMixin target (itself by default) with the mouse."""

    ALLOW_SELECT = False

    def __init__(self, *args, target: FloatingMixin | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._target = target
        self._grab: tuple[int, int, float, float] | None = None
        self.dragged = False

    @property
    def drag_target(self) -> FloatingMixin:
        return self._target if self._target is not None else self

    def on_mouse_down(self, event: events.MouseDown) -> None:
        x, y = self.drag_target.position
        self._grab = (event.screen_x, event.screen_y, x, y)
        self.dragged = False
        self.capture_mouse()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._grab is None:
            return
        origin_x, origin_y, start_x, start_y = self._grab
        dx, dy = event.screen_x - origin_x, event.screen_y - origin_y
        if dx or dy:
            self.dragged = True
            self.drag_target.move_to(max(0, start_x + dx), max(0, start_y + dy))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._grab is not None:
            self._grab = None
            self.release_mouse()


class ToggleButton(FloatingMixin, DragHandle):
    """Small always-visible button that shows/hides the panel. Draggable."""

    DEFAULT_CSS = """
    ToggleButton {
        layer: toggle;
        width: auto;
        height: 1;
        text-style: bold;
        background: $primary;
        color: $text;
    }
    ToggleButton:hover {
        background: $primary-lighten-1;
    }
    """

    def __init__(self, on_press: Callable[[], None], **kwargs):
        super().__init__(panel_renderers.render_toggle_label(True), **kwargs)
        self._on_press = on_press
        self.tooltip = "City Vitals"

    def show_state(self, visible: bool) -> None:
        self.update(panel_renderers.render_toggle_label(visible))

    def on_click(self, event: events.Click) -> None:
        event.stop()
        # A drag ends in a click too; only a stationary press toggles.
        if self.dragged:
            self.dragged = False
            return
        self._on_press()


class StatLabel(Static):
    DEFAULT_CSS = """
    StatLabel {
        width: 1fr;
        padding: 0 1;
        color: $text;
    }
    """

    def __init__(self, stat_id: StatId, text: str, on_press: Callable[[StatId], None], **kwargs):
        super().__init__(Text(text), **kwargs)
        self.stat_id = stat_id
        self._on_press = on_press

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self._on_press(self.stat_id)


class MeterBar(Widget):
    """Horizontal meter; tooltip carries the usage string."""

    DEFAULT_CSS = """
    MeterBar {
        width: 1fr;
        padding: 0 1;
    }
    """

    value: reactive[float] = reactive(0.0)

    def __init__(self, stat_id: StatId, gradient: bool, on_press: Callable[[StatId], None], **kwargs):
        super().__init__(**kwargs)
        self.stat_id = stat_id
        self.gradient = gradient
        self._on_press = on_press

    def render(self) -> Text:
        return panel_renderers.render_meter(self.value, self.content_size.width, self.gradient)

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self._on_press(self.stat_id)
