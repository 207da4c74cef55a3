"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin host. The DashboardController owns all dashboard
//   behavior; this module only wires Textual events to it.

The frame loop is a set_interval timer. Each frame asks the host whether the
pointer is over the panel and hands that to controller.tick().
"""

from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header

from city_vitals.app.dashboard import DashboardController
from city_vitals.app.host import Localizer, SimulationSource
from city_vitals.app.settings_editor import SettingsDraft
from city_vitals.core.locale import PANEL_TITLE, TableLocalizer
from city_vitals.io.settings import SettingsStore
from city_vitals.tui.settings_panel import VitalsSettingsPanel
from city_vitals.tui.textual_host import TextualHost

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL = 0.25


class CityVitalsApp(App):
    """Terminal host for the vitals dashboard."""

    CSS_PATH = "styles.tcss"
    TITLE = PANEL_TITLE

    BINDINGS = [
        Binding("alt+v", "toggle_panel", "Toggle vitals"),
        Binding("s", "toggle_settings", "Settings"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: SettingsStore,
        source: SimulationSource,
        localizer: Localizer | None = None,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        root_selector: str = "#vitals-root",
    ):
        super().__init__()
        self._store = store
        self._source = source
        self._localizer = localizer if localizer is not None else TableLocalizer()
        self._frame_interval = frame_interval
        self._root_selector = root_selector
        self._host: TextualHost | None = None
        self._controller: DashboardController | None = None
        self._settings_panel: VitalsSettingsPanel | None = None
        self._screen_size: tuple[int, int] = (0, 0)

    @property
    def controller(self) -> DashboardController | None:
        return self._controller

    @property
    def host(self) -> TextualHost | None:
        return self._host

    @property
    def settings_panel(self) -> VitalsSettingsPanel | None:
        return self._settings_panel

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(id="vitals-root")
        yield Footer()

    def on_mount(self) -> None:
        self._screen_size = (self.size.width, self.size.height)
        self._host = TextualHost(self, root_selector=self._root_selector)
        self._controller = DashboardController.create(
            self._store,
            self._host,
            self._source,
            screen_size=lambda: self._screen_size,
            localizer=self._localizer,
        )
        if not self._controller.is_built:
            self.notify("City Vitals panel could not be created", severity="warning")
        self.set_interval(self._frame_interval, self.on_frame)

    def on_frame(self) -> None:
        if self._controller is None or self._host is None:
            return
        self._controller.tick(hovered=self._host.panel_hovered())

    def on_resize(self, event: events.Resize) -> None:
        size = (event.size.width, event.size.height)
        self._screen_size = size
        controller = self._controller
        if controller is None or controller.resolution is None:
            return
        if controller.resolution.key != size:
            logger.debug("Screen resized to %sx%s, rebuilding", *size)
            controller.rebuild()

    def on_unmount(self) -> None:
        if self._controller is None:
            return
        # The app removes its own widgets on shutdown.
        self._host.detach()
        self._controller.teardown()

    # ─── Actions ───────────────────────────────────────────────────────

    def action_toggle_panel(self) -> None:
        if self._controller is not None:
            self._controller.toggle_visibility()

    def action_toggle_settings(self) -> None:
        if self._settings_panel is not None:
            self._settings_panel.close()
            return
        if self._controller is None:
            return
        draft = SettingsDraft.from_settings(self._controller.settings)
        self._settings_panel = VitalsSettingsPanel(draft, self._localizer)
        self.screen.mount(self._settings_panel)

    def on_vitals_settings_panel_closed(self, msg: VitalsSettingsPanel.Closed) -> None:
        panel, self._settings_panel = self._settings_panel, None
        if panel is not None:
            panel.remove()
        if self._controller is not None:
            self._controller.apply_settings(msg.draft)
