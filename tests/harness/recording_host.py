"""In-memory DashboardHost that records every call.

Used by controller tests that don't need a Textual app.
"""

from city_vitals.app.host import HostDependencyError


class RecordingHost:
    """DashboardHost stand-in. fail_on names a creation step to raise from."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls: list[str] = []
        self.panel = None
        self.toggle = None
        self.layout = None
        self.meters: dict = {}
        self.visible = False
        self.opacity = None
        self.opacity_changes: list[float] = []
        self.panel_pos = (0.0, 0.0)
        self.toggle_pos = (0.0, 0.0)
        self.navigations: list[int] = []
        self.destroyed = 0
        self.on_close = None
        self.on_toggle = None
        self.on_stat_click = None

    def _step(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise HostDependencyError("missing template for " + name)

    def create_panel(self, title, position, height, on_close):
        self._step("create_panel")
        self.panel = {"title": title, "height": height}
        self.panel_pos = position
        self.on_close = on_close

    def create_toggle_button(self, position, on_click):
        self._step("create_toggle_button")
        self.toggle = {}
        self.toggle_pos = position
        self.on_toggle = on_click

    def create_rows(self, layout, localizer, on_stat_click):
        self._step("create_rows")
        self.layout = layout
        self.labels = [localizer.resolve(s.display_name_key) for s in layout.stats]
        self.on_stat_click = on_stat_click

    def update_meter(self, stat_id, value, tooltip):
        self.meters[stat_id] = (value, tooltip)

    def set_visible(self, visible):
        self.visible = visible

    def is_visible(self):
        return self.panel is not None and self.visible

    def set_opacity(self, opacity):
        self.opacity = opacity
        self.opacity_changes.append(opacity)

    def panel_position(self):
        return self.panel_pos

    def toggle_button_position(self):
        return self.toggle_pos

    def navigate(self, menu_index):
        self.navigations.append(menu_index)

    def destroy(self):
        self.calls.append("destroy")
        self.destroyed += 1
        self.panel = None
        self.toggle = None
        self.layout = None
        self.meters = {}
