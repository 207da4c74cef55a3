"""Dashboard controller — owns the lifecycle of the vitals panel.

// [LAW:single-enforcer] Only the controller calls the layout engine and the host.
// [LAW:dataflow-not-control-flow] Settings changes never patch live rows; they
//   produce a fresh build from the new settings.

Lifecycle:
    build()    settings → resolution layout → LayoutResult → host widgets
    tick()     once per host frame while visible: readings + hover opacity
    teardown() positions → ResolutionLayout → save → host.destroy()
    rebuild()  teardown() then build(), used by apply_settings()
"""

from __future__ import annotations

import logging
from typing import Callable

from city_vitals.app.host import (
    DashboardHost,
    HostDependencyError,
    Localizer,
    SimulationSource,
)
from city_vitals.app.settings_editor import SettingsDraft, commit
from city_vitals.app.settings_model import ResolutionLayout, Settings
from city_vitals.core.counters import CityCounters
from city_vitals.core.layout import DEFAULT_METRICS, LayoutMetrics, LayoutResult, compute_layout
from city_vitals.core.locale import PANEL_TITLE, TableLocalizer
from city_vitals.core.metrics import StatReading, compute_reading
from city_vitals.core.stat_catalog import StatId, get_definition
from city_vitals.io.settings import SettingsStore

logger = logging.getLogger(__name__)

HOVERED_OPACITY = 1.0
UNHOVERED_OPACITY = 0.4

ScreenSize = Callable[[], tuple[int, int]]


class DashboardController:
    """Owns one dashboard panel instance at a time."""

    def __init__(
        self,
        settings: Settings,
        store: SettingsStore,
        host: DashboardHost,
        source: SimulationSource,
        screen_size: ScreenSize,
        localizer: Localizer | None = None,
        metrics: LayoutMetrics = DEFAULT_METRICS,
    ):
        self.settings = settings
        self._store = store
        self._host = host
        self._source = source
        self._screen_size = screen_size
        self._localizer = localizer if localizer is not None else TableLocalizer()
        self._metrics = metrics

        self._layout: LayoutResult | None = None
        self._resolution: ResolutionLayout | None = None
        self._previous_hovered = True
        self._readings: dict[StatId, StatReading] = {}

        self.build_count = 0
        self.teardown_count = 0

    @classmethod
    def create(cls, store: SettingsStore, host: DashboardHost, source: SimulationSource,
               screen_size: ScreenSize, **kwargs) -> DashboardController:
        """Load settings from store and build the panel."""
        controller = cls(store.load(), store, host, source, screen_size, **kwargs)
        controller.build()
        return controller

    # ─── Derived state ─────────────────────────────────────────────────

    @property
    def is_built(self) -> bool:
        return self._layout is not None

    @property
    def layout(self) -> LayoutResult | None:
        return self._layout

    @property
    def resolution(self) -> ResolutionLayout | None:
        return self._resolution

    @property
    def readings(self) -> dict[StatId, StatReading]:
        return dict(self._readings)

    # ─── Lifecycle ─────────────────────────────────────────────────────

    def build(self) -> bool:
        """Construct the panel from current settings. Returns False if aborted."""
        if self.is_built:
            raise RuntimeError("dashboard already built; call rebuild()")

        width, height = self._screen_size()
        resolution = self._store.get_or_create_resolution(self.settings, width, height)
        layout = compute_layout(self.settings.enabled_definitions(), metrics=self._metrics)

        try:
            self._host.create_panel(
                PANEL_TITLE,
                resolution.panel_position.as_tuple(),
                layout.panel_height,
                on_close=self.hide,
            )
            self._host.create_toggle_button(
                resolution.toggle_button_position.as_tuple(),
                on_click=self.toggle_visibility,
            )
            self._host.create_rows(layout, self._localizer, on_stat_click=self.open_stat)
        except HostDependencyError:
            # Never leave a half-built panel on screen
            logger.exception("Dashboard construction aborted; destroying partial panel")
            self._host.destroy()
            return False

        self._host.set_visible(self.settings.default_panel_visibility)
        self._host.set_opacity(HOVERED_OPACITY)
        self._previous_hovered = True
        self._readings = {}
        self._resolution = resolution
        self._layout = layout
        self.build_count += 1
        logger.debug(
            "Dashboard built at %sx%s: %d stat(s), panel height %d",
            width, height, len(layout.stats), layout.panel_height,
        )
        return True

    def teardown(self) -> None:
        """Capture positions, persist settings, and release the panel."""
        if not self.is_built:
            return
        resolution = self._resolution
        resolution.panel_position.x, resolution.panel_position.y = self._host.panel_position()
        (resolution.toggle_button_position.x,
         resolution.toggle_button_position.y) = self._host.toggle_button_position()
        resolution.touch()

        self._store.save(self.settings, keep=resolution.key)

        self._host.destroy()
        self._layout = None
        self._resolution = None
        self._readings = {}
        self.teardown_count += 1

    def rebuild(self) -> bool:
        self.teardown()
        return self.build()

    def apply_settings(self, draft: SettingsDraft) -> bool:
        """Commit a settings editor draft; rebuild when anything changed."""
        changed = commit(draft, self.settings)
        if changed:
            logger.info("Settings changed, rebuilding dashboard")
            self.rebuild()
        return changed

    # ─── Per-frame update ──────────────────────────────────────────────

    def _counters(self) -> CityCounters:
        if not self._source.exists():
            return CityCounters.zero()
        return self._source.read_counters()

    def tick(self, hovered: bool = False) -> list[StatReading]:
        """Refresh opacity and meter values. O(enabled stats)."""
        if not self.is_built or not self._host.is_visible():
            return []

        if hovered != self._previous_hovered:
            self._previous_hovered = hovered
            self._host.set_opacity(self.opacity_for(hovered))

        counters = self._counters()
        readings = []
        for definition in self._layout.stats:
            reading = compute_reading(definition, counters)
            self._host.update_meter(reading.stat_id, reading.meter_value, reading.tooltip)
            self._readings[reading.stat_id] = reading
            readings.append(reading)
        return readings

    def opacity_for(self, hovered: bool) -> float:
        if hovered or not self.settings.transparent_when_unhovered:
            return HOVERED_OPACITY
        return UNHOVERED_OPACITY

    # ─── Host callbacks ────────────────────────────────────────────────

    def toggle_visibility(self) -> None:
        if self.is_built:
            self._host.set_visible(not self._host.is_visible())

    def hide(self) -> None:
        if self.is_built:
            self._host.set_visible(False)

    def open_stat(self, stat_id: StatId) -> None:
        """Navigate the host to the stat's info view, if it has one."""
        menu_index = get_definition(stat_id).target_menu_index
        if menu_index is not None:
            self._host.navigate(menu_index)
