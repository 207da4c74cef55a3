"""Draft state behind the settings panel checkboxes.

// [LAW:one-source-of-truth] Checkbox rows derive from STAT_CATALOG order.

The panel edits a SettingsDraft; closing it calls commit(), which writes
changed values into Settings and reports whether anything changed. The
dashboard rebuilds only when it did.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from city_vitals.app.settings_model import Settings
from city_vitals.core.locale import DEFAULT_VISIBILITY_LABEL, TRANSPARENT_UNHOVERED_LABEL
from city_vitals.core.stat_catalog import STAT_CATALOG, StatId


@dataclass(frozen=True)
class ToggleRow:
    """One checkbox row. label is literal text when is_literal, else a locale key."""

    key: str
    label: str
    is_literal: bool
    stat_id: StatId | None = None


DEFAULT_VISIBILITY_KEY = "default_panel_visibility"
TRANSPARENT_UNHOVERED_KEY = "transparent_when_unhovered"

TOGGLE_ROWS: tuple[ToggleRow, ...] = (
    ToggleRow(DEFAULT_VISIBILITY_KEY, DEFAULT_VISIBILITY_LABEL, True),
    ToggleRow(TRANSPARENT_UNHOVERED_KEY, TRANSPARENT_UNHOVERED_LABEL, True),
) + tuple(
    ToggleRow("stat:" + d.id.value, d.display_name_key, False, d.id) for d in STAT_CATALOG
)


@dataclass
class SettingsDraft:
    default_panel_visibility: bool = True
    transparent_when_unhovered: bool = True
    enabled_stats: dict[StatId, bool] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> SettingsDraft:
        return cls(
            default_panel_visibility=settings.default_panel_visibility,
            transparent_when_unhovered=settings.transparent_when_unhovered,
            enabled_stats={d.id: settings.is_stat_enabled(d.id) for d in STAT_CATALOG},
        )

    def value_for(self, row: ToggleRow) -> bool:
        if row.stat_id is not None:
            return self.enabled_stats.get(row.stat_id, False)
        return getattr(self, row.key)

    def set_value(self, row: ToggleRow, value: bool) -> None:
        if row.stat_id is not None:
            self.enabled_stats[row.stat_id] = bool(value)
        else:
            setattr(self, row.key, bool(value))


def commit(draft: SettingsDraft, settings: Settings) -> bool:
    """Write draft values that differ into settings. Returns True if any changed."""
    changed = False

    if draft.default_panel_visibility != settings.default_panel_visibility:
        settings.default_panel_visibility = draft.default_panel_visibility
        changed = True

    if draft.transparent_when_unhovered != settings.transparent_when_unhovered:
        settings.transparent_when_unhovered = draft.transparent_when_unhovered
        changed = True

    for definition in STAT_CATALOG:
        if definition.id not in draft.enabled_stats:
            continue
        wanted = draft.enabled_stats[definition.id]
        if wanted != settings.is_stat_enabled(definition.id):
            settings.set_stat_enabled(definition.id, wanted)
            changed = True

    return changed
