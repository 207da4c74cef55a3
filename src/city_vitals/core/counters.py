"""Raw simulation counters, the per-tick input to metric computation.

Pure data. Field names are what StatDefinition.primary_counter and
secondary_counter refer to.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields


@dataclass(frozen=True)
class CityCounters:
    """Snapshot of city-wide counters pulled from the simulation."""

    electricity_capacity: int = 0
    electricity_consumption: int = 0
    water_capacity: int = 0
    water_consumption: int = 0
    sewage_capacity: int = 0
    sewage_accumulation: int = 0
    garbage_capacity: int = 0
    garbage_amount: int = 0
    incineration_capacity: int = 0
    garbage_accumulation: int = 0
    heal_capacity: int = 0
    sick_count: int = 0
    average_health: float = 0.0
    dead_capacity: int = 0
    dead_amount: int = 0
    cremate_capacity: int = 0
    dead_count: int = 0
    fire_hazard: float = 0.0
    crime_rate: float = 0.0
    criminal_capacity: int = 0
    criminal_amount: int = 0
    education1_capacity: int = 0
    education1_need: int = 0
    education2_capacity: int = 0
    education2_need: int = 0
    education3_capacity: int = 0
    education3_need: int = 0
    unemployment: float = 0.0
    workplace_count: int = 0
    worker_count: int = 0

    @classmethod
    def zero(cls) -> CityCounters:
        return cls()

    @classmethod
    def from_mapping(cls, data: dict) -> CityCounters:
        """Build from a loose mapping, ignoring unknown keys.

        Values are coerced to the field's declared numeric type. A value that
        cannot be coerced, or is not finite (inf, NaN, too large for a
        float), raises ValueError.
        """
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            try:
                number = float(data[f.name])
            except OverflowError as exc:
                raise ValueError("{} is out of range".format(f.name)) from exc
            if not math.isfinite(number):
                raise ValueError("{} must be finite, got {!r}".format(f.name, data[f.name]))
            kwargs[f.name] = number if f.type == "float" else int(number)
        return cls(**kwargs)

    def get(self, name: str) -> float:
        return getattr(self, name)


COUNTER_NAMES: tuple[str, ...] = tuple(f.name for f in fields(CityCounters))
