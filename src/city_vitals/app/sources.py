"""Where per-tick simulation counters come from.

The simulation itself is external. FixedSource serves an in-memory snapshot;
CountersFileSource follows a JSON file the simulation rewrites, re-reading
it only when its modification time changes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from city_vitals.core.counters import CityCounters

logger = logging.getLogger(__name__)


class FixedSource:
    """Source returning whatever counters were last assigned."""

    def __init__(self, counters: CityCounters | None = None, available: bool = True):
        self.counters = counters if counters is not None else CityCounters.zero()
        self.available = available
        self.read_count = 0

    def exists(self) -> bool:
        return self.available

    def read_counters(self) -> CityCounters:
        self.read_count += 1
        return self.counters


class CountersFileSource:
    """Source backed by a JSON object of counter name → number.

    A missing file means the simulation is not running (exists() is False).
    A corrupt rewrite keeps the last good snapshot.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._mtime_ns: int | None = None
        self._counters = CityCounters.zero()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read_counters(self) -> CityCounters:
        try:
            mtime_ns = self._path.stat().st_mtime_ns
        except OSError:
            return CityCounters.zero()
        if mtime_ns == self._mtime_ns:
            return self._counters
        self._mtime_ns = mtime_ns
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("counters file must hold a JSON object")
            self._counters = CityCounters.from_mapping(data)
        except (OSError, ValueError, TypeError, RecursionError) as exc:
            logger.warning("Ignoring unreadable counters file %s: %s", self._path, exc)
        return self._counters
