"""App lifecycle management for Textual in-process tests.

Creates CityVitalsApp instances wired for testing and manages run_test() lifecycle.
State isolation: every call gets its own settings file and source.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from textual.pilot import Pilot

from city_vitals.app.sources import FixedSource
from city_vitals.core.counters import CityCounters
from city_vitals.io.settings import SettingsStore
from city_vitals.tui.app import CityVitalsApp


@asynccontextmanager
async def run_app(
    settings_path: Path,
    *,
    size: tuple[int, int] = (100, 40),
    counters: CityCounters | None = None,
    root_selector: str = "#vitals-root",
) -> AsyncIterator[tuple[Pilot, CityVitalsApp]]:
    """Create and run a CityVitalsApp in test mode.

    Yields (pilot, app). The frame timer runs at a long interval so tests
    drive ticks explicitly through app.on_frame().
    """
    store = SettingsStore(settings_path)
    source = FixedSource(counters if counters is not None else CityCounters.zero())
    app = CityVitalsApp(store, source, frame_interval=60.0, root_selector=root_selector)

    async with app.run_test(size=size) as pilot:
        # Ensure on_mount processing has completed
        await pilot.pause()
        yield pilot, app
