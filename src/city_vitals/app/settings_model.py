"""Settings data model: global toggles, per-stat flags and per-resolution layout.

// [LAW:one-source-of-truth] Stat defaults come from the catalog, never from here.

A Settings instance is constructed explicitly (usually by SettingsStore.load())
and handed to the dashboard controller. Only the settings editor commit and
dashboard teardown write to it.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from city_vitals.core.stat_catalog import (
    STAT_CATALOG,
    StatDefinition,
    StatId,
    default_enabled_map,
    get_definition,
)


@dataclass
class Position:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


# Engine-supplied defaults for a never-seen resolution (terminal cells).
DEFAULT_PANEL_POSITION = (2.0, 2.0)
DEFAULT_TOGGLE_BUTTON_POSITION = (0.0, 0.0)


@dataclass
class ResolutionLayout:
    """Panel and toggle button positions for one screen size.

    Mutated in place on teardown; the (screen_width, screen_height) pair is
    the identity and never changes after creation.
    """

    screen_width: int
    screen_height: int
    panel_position: Position = field(
        default_factory=lambda: Position(*DEFAULT_PANEL_POSITION)
    )
    toggle_button_position: Position = field(
        default_factory=lambda: Position(*DEFAULT_TOGGLE_BUTTON_POSITION)
    )
    last_used: float = 0.0

    @property
    def key(self) -> tuple[int, int]:
        return (self.screen_width, self.screen_height)

    def touch(self, now: float | None = None) -> None:
        self.last_used = time.time() if now is None else now


@dataclass
class Settings:
    """Root settings aggregate."""

    default_panel_visibility: bool = True
    transparent_when_unhovered: bool = True
    enabled_stats: dict[StatId, bool] = field(default_factory=default_enabled_map)
    resolutions: list[ResolutionLayout] = field(default_factory=list)

    def is_stat_enabled(self, stat_id: StatId) -> bool:
        """Enable flag for stat_id; a missing entry falls back to the catalog default."""
        value = self.enabled_stats.get(stat_id)
        if value is None:
            return get_definition(stat_id).default_enabled
        return bool(value)

    def set_stat_enabled(self, stat_id: StatId, value: bool) -> None:
        self.enabled_stats[stat_id] = bool(value)

    def enabled_definitions(self) -> list[StatDefinition]:
        """Enabled stats in catalog order."""
        return [d for d in STAT_CATALOG if self.is_stat_enabled(d.id)]

    def find_resolution(self, width: int, height: int) -> ResolutionLayout | None:
        for resolution in self.resolutions:
            if resolution.screen_width == width and resolution.screen_height == height:
                return resolution
        return None
