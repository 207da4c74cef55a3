"""Settings panel: a docked side panel with one checkbox per setting.

// [LAW:one-source-of-truth] Rows come from settings_editor.TOGGLE_ROWS, which
//   follows catalog order, so checkboxes line up with dashboard rows.

Closing the panel (✕ or Esc) posts Closed with the edited draft; the app
hands it to the controller, which rebuilds only if something changed.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.message import Message
from textual.widgets import Static

from city_vitals.app.host import Localizer
from city_vitals.app.settings_editor import TOGGLE_ROWS, SettingsDraft, ToggleRow
from city_vitals.core.locale import SETTINGS_TITLE
from city_vitals.tui.chip import Chip, ToggleChip


class VitalsSettingsPanel(VerticalScroll):
    """Side panel editing a SettingsDraft."""

    DEFAULT_CSS = """
    VitalsSettingsPanel {
        dock: right;
        width: 40;
        height: 1fr;
        border-left: solid $primary-muted;
        padding: 0 1;
        background: $panel;
        color: $text;
    }
    VitalsSettingsPanel .title-bar {
        height: 1;
        margin-bottom: 1;
    }
    VitalsSettingsPanel .panel-title {
        width: 1fr;
        text-style: bold;
        color: $text-primary;
    }
    VitalsSettingsPanel ToggleChip {
        margin-bottom: 1;
    }
    """

    class Closed(Message):
        """Posted when the user closes the panel."""

        def __init__(self, draft: SettingsDraft) -> None:
            self.draft = draft
            super().__init__()

    def __init__(self, draft: SettingsDraft, localizer: Localizer, **kwargs) -> None:
        super().__init__(**kwargs)
        self._draft = draft
        self._localizer = localizer
        self._submitted = False

    def _widget_id(self, row: ToggleRow) -> str:
        return "setting-" + row.key.replace(":", "-")

    def _label(self, row: ToggleRow) -> str:
        return row.label if row.is_literal else self._localizer.resolve(row.label)

    def compose(self) -> ComposeResult:
        with Horizontal(classes="title-bar"):
            yield Static(SETTINGS_TITLE, classes="panel-title")
            yield Chip(" ✕ ", on_press=self.close, classes="close-button")
        for row in TOGGLE_ROWS:
            yield ToggleChip(self._label(row), value=self._draft.value_for(row), id=self._widget_id(row))

    def on_mount(self) -> None:
        focusable = self.query(ToggleChip)
        if focusable:
            focusable.first().focus()

    def collect_draft(self) -> SettingsDraft:
        """Current checkbox values as a new draft."""
        draft = SettingsDraft(enabled_stats=dict(self._draft.enabled_stats))
        draft.default_panel_visibility = self._draft.default_panel_visibility
        draft.transparent_when_unhovered = self._draft.transparent_when_unhovered
        for row in TOGGLE_ROWS:
            chip = self.query_one("#" + self._widget_id(row), ToggleChip)
            draft.set_value(row, chip.value)
        return draft

    def close(self) -> None:
        if self._submitted:
            return
        self._submitted = True
        self.post_message(self.Closed(self.collect_draft()))

    def on_key(self, event) -> None:
        if event.key == "escape":
            event.stop()
            event.prevent_default()
            self.close()
