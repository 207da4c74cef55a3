"""Protocol definitions for the dashboard's external collaborators.

The controller only talks to the host toolkit, the simulation, and the
localization resolver through these shapes. Structural typing: hosts do not
inherit from the protocols.

This module has no dependencies on UI libraries.
"""

from __future__ import annotations

from typing import Callable, Protocol

from city_vitals.core.counters import CityCounters
from city_vitals.core.layout import LayoutResult
from city_vitals.core.stat_catalog import StatId


class HostDependencyError(RuntimeError):
    """A template control or container the host needs is missing.

    Fatal to the panel instance being built, never to the process.
    """


class Localizer(Protocol):
    def resolve(self, key: str) -> str:
        """Resolve an opaque display-name key to text."""
        ...


class SimulationSource(Protocol):
    """Per-tick supplier of raw city counters."""

    def exists(self) -> bool:
        """Whether the simulation is available to read this tick."""
        ...

    def read_counters(self) -> CityCounters:
        ...


class DashboardHost(Protocol):
    """Widget toolkit adapter.

    The controller supplies positions, sizes, z-order and callbacks; the host
    owns every visual object it creates and must release them in destroy().
    Creation methods raise HostDependencyError when a template is missing.
    """

    def create_panel(self, title: str, position: tuple[float, float], height: int,
                     on_close: Callable[[], None]) -> None:
        ...

    def create_toggle_button(self, position: tuple[float, float],
                             on_click: Callable[[], None]) -> None:
        ...

    def create_rows(self, layout: LayoutResult, localizer: Localizer,
                    on_stat_click: Callable[[StatId], None]) -> None:
        """Create one label and one meter widget per layout row pair."""
        ...

    def update_meter(self, stat_id: StatId, value: float, tooltip: str) -> None:
        ...

    def set_visible(self, visible: bool) -> None:
        ...

    def is_visible(self) -> bool:
        ...

    def set_opacity(self, opacity: float) -> None:
        ...

    def panel_position(self) -> tuple[float, float]:
        ...

    def toggle_button_position(self) -> tuple[float, float]:
        ...

    def navigate(self, menu_index: int) -> None:
        """Open the host's info view at menu_index."""
        ...

    def destroy(self) -> None:
        """Release everything created since the last destroy(). Idempotent."""
        ...
