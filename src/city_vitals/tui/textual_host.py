"""Textual implementation of the DashboardHost protocol.

// [LAW:locality-or-seam] Every Textual call the controller needs goes through here.

The host mounts into a container matched by root_selector. That container
is the one required template: when it is missing, creation raises
HostDependencyError and the controller destroys the partial panel.

Rows are not placed at LayoutRow.offset explicitly. The panel is a vertical
flow container: the title bar is title_bar_height tall and each row widget
is height + padding tall with the padding inside it, composed in z-order,
so flow places every row's content at its computed offset.
"""

from __future__ import annotations

import logging
from typing import Callable

from textual.app import App
from textual.css.query import NoMatches

from city_vitals.app.host import HostDependencyError, Localizer
from city_vitals.core.layout import LayoutResult, RowKind
from city_vitals.core.stat_catalog import (
    MENU_CRIME,
    MENU_EDUCATION,
    MENU_ELECTRICITY,
    MENU_EMPLOYMENT,
    MENU_FIRE_SAFETY,
    MENU_GARBAGE,
    MENU_HEALTH,
    MENU_WATER,
    StatId,
)
from city_vitals.tui.vitals_panel import VitalsPanel
from city_vitals.tui.widgets import MeterBar, StatLabel, ToggleButton

logger = logging.getLogger(__name__)

MENU_NAMES: dict[int, str] = {
    MENU_ELECTRICITY: "Electricity",
    MENU_WATER: "Water & Sewage",
    MENU_GARBAGE: "Garbage",
    MENU_HEALTH: "Health & Deathcare",
    MENU_FIRE_SAFETY: "Fire Safety",
    MENU_CRIME: "Crime",
    MENU_EDUCATION: "Education",
    MENU_EMPLOYMENT: "Employment",
}


class TextualHost:
    """Creates and drives the vitals widgets inside a running Textual app."""

    def __init__(self, app: App, root_selector: str = "#vitals-root"):
        self._app = app
        self._root_selector = root_selector
        self._panel: VitalsPanel | None = None
        self._toggle: ToggleButton | None = None
        self._meters: dict[StatId, MeterBar] = {}
        self._detached = False
        self.navigations: list[int] = []

    @property
    def panel(self) -> VitalsPanel | None:
        return self._panel

    @property
    def toggle_button(self) -> ToggleButton | None:
        return self._toggle

    @property
    def meters(self) -> dict[StatId, MeterBar]:
        return dict(self._meters)

    def _root(self):
        try:
            return self._app.query_one(self._root_selector)
        except NoMatches as exc:
            raise HostDependencyError(
                "container {} not found".format(self._root_selector)
            ) from exc

    # ─── Creation ──────────────────────────────────────────────────────

    def create_panel(self, title: str, position: tuple[float, float], height: int,
                     on_close: Callable[[], None]) -> None:
        self._root()
        panel = VitalsPanel(title, on_close=on_close)
        panel.styles.height = height
        panel.move_to(*position)
        self._panel = panel

    def create_toggle_button(self, position: tuple[float, float],
                             on_click: Callable[[], None]) -> None:
        button = ToggleButton(on_press=on_click)
        button.move_to(*position)
        self._root().mount(button)
        self._toggle = button

    def create_rows(self, layout: LayoutResult, localizer: Localizer,
                    on_stat_click: Callable[[StatId], None]) -> None:
        """Build label/meter widgets in z-order and mount the panel."""
        if self._panel is None:
            raise HostDependencyError("create_panel() must run before create_rows()")
        pad = layout.padding
        widgets = []
        for row in sorted(layout.rows, key=lambda r: r.z_order):
            stat = row.stat
            if row.kind == RowKind.LABEL:
                widget = StatLabel(stat.id, localizer.resolve(stat.display_name_key), on_stat_click)
            else:
                widget = MeterBar(stat.id, stat.uses_gradient_style, on_stat_click)
                self._meters[stat.id] = widget
            # Padding lives inside the row so stacked rows never collapse margins.
            widget.styles.height = row.height + pad.vertical
            widget.styles.padding = (pad.top, 1, pad.bottom, 1)
            widgets.append(widget)
        self._panel.set_rows(widgets)
        self._root().mount(self._panel)

    # ─── Updates ───────────────────────────────────────────────────────

    def update_meter(self, stat_id: StatId, value: float, tooltip: str) -> None:
        meter = self._meters.get(stat_id)
        if meter is None:
            return
        meter.value = value
        meter.tooltip = tooltip

    def set_visible(self, visible: bool) -> None:
        if self._panel is not None:
            self._panel.display = visible
        if self._toggle is not None:
            self._toggle.show_state(visible)

    def is_visible(self) -> bool:
        return self._panel is not None and bool(self._panel.display)

    def set_opacity(self, opacity: float) -> None:
        if self._panel is not None:
            self._panel.styles.opacity = opacity

    def panel_hovered(self) -> bool:
        return self._panel is not None and self._panel.contains_mouse()

    def panel_position(self) -> tuple[float, float]:
        return self._panel.position if self._panel is not None else (0.0, 0.0)

    def toggle_button_position(self) -> tuple[float, float]:
        return self._toggle.position if self._toggle is not None else (0.0, 0.0)

    def navigate(self, menu_index: int) -> None:
        self.navigations.append(menu_index)
        name = MENU_NAMES.get(menu_index, "#{}".format(menu_index))
        self._app.notify("Opening {} info view".format(name), timeout=2)

    # ─── Teardown ──────────────────────────────────────────────────────

    def detach(self) -> None:
        """Stop touching the DOM; used while the app itself is shutting down."""
        self._detached = True

    def destroy(self) -> None:
        if not self._detached:
            for widget in (self._panel, self._toggle):
                if widget is not None and widget.is_mounted:
                    widget.remove()
        self._panel = None
        self._toggle = None
        self._meters = {}
