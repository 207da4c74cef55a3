"""Metric computation — pure functions from raw counters to meter values.

Pure computation module with no I/O, no state, and no dependencies on UI
modules. Every function here is deterministic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from city_vitals.core.counters import CityCounters
from city_vitals.core.stat_catalog import (
    ComputationKind,
    StatDefinition,
    StatId,
    TooltipKind,
)

METER_MIN = 0.0
METER_MAX = 100.0


# ─── Ratio / value kinds ──────────────────────────────────────────────────────


def availability_ratio(capacity, consumption, minimum: int = 45, maximum: int = 55) -> float:
    """Percentage from a capacity/consumption pair.

    Mirrors the host info views: capacity over consumption, scaled by the
    midpoint of [minimum, maximum] (integer midpoint, 50 by default). Not
    bounded to 0-100. Zero consumption with nonzero capacity is infinite.
    """
    if capacity == 0:
        return 0.0
    if consumption == 0:
        return math.inf
    midpoint = (minimum + maximum) // 2
    return (capacity / consumption) * midpoint


def direct_capacity_ratio(amount, capacity) -> float:
    """Fill percentage of a store (landfill, cemetery)."""
    if capacity == 0:
        return 0.0
    return (amount / capacity) * 100.0


def inverse_value(x) -> int:
    """Complement of a rate, e.g. employment from unemployment."""
    return round(100 - x)


def clamped_value(x, lo: float = 0, hi: float = 100) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def meter_value(raw: float, lo: float = METER_MIN, hi: float = METER_MAX) -> float:
    """Display-safe meter position: NaN sits at lo, everything else clamps."""
    if math.isnan(raw):
        return lo
    return float(clamped_value(raw, lo, hi))


# ─── Tooltip formatting ───────────────────────────────────────────────────────


def _fmt_count(n) -> str:
    """Thousands-separated integer; zero is always the literal "0"."""
    value = int(round(n))
    if value == 0:
        return "0"
    return "{:,}".format(value)


def format_usage(capacity, consumption) -> str:
    """Usage tooltip: "consumption / capacity"."""
    return "{} / {}".format(_fmt_count(consumption), _fmt_count(capacity))


def format_kilo_usage(capacity, consumption) -> str:
    """Usage tooltip with both sides in thousands (electricity in MW)."""
    return format_usage(round(capacity / 1000), round(consumption / 1000))


def format_percent(value: float) -> str:
    if math.isinf(value):
        return "∞%"
    if math.isnan(value):
        return "0%"
    rounded = round(float(value), 2)
    if rounded == int(rounded):
        return "{}%".format(int(rounded))
    return "{:g}%".format(rounded)


# ─── Readings ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StatReading:
    """One tick's derived values for a single stat."""

    stat_id: StatId
    raw_value: float
    meter_value: float
    tooltip: str


def _raw_value(definition: StatDefinition, counters: CityCounters) -> float:
    primary = counters.get(definition.primary_counter)
    kind = definition.computation_kind
    if kind == ComputationKind.AVAILABILITY_RATIO:
        return availability_ratio(primary, counters.get(definition.secondary_counter))
    if kind == ComputationKind.DIRECT_CAPACITY_RATIO:
        return direct_capacity_ratio(counters.get(definition.secondary_counter), primary)
    if kind == ComputationKind.INVERSE_VALUE:
        return float(inverse_value(primary))
    return float(clamped_value(primary))


def _tooltip(definition: StatDefinition, counters: CityCounters, raw: float) -> str:
    if definition.tooltip_kind == TooltipKind.PERCENT:
        return format_percent(raw)
    capacity = counters.get(definition.primary_counter)
    consumption = counters.get(definition.secondary_counter)
    if definition.tooltip_kind == TooltipKind.USAGE_KILO:
        return format_kilo_usage(capacity, consumption)
    return format_usage(capacity, consumption)


def compute_reading(definition: StatDefinition, counters: CityCounters) -> StatReading:
    """Derive the raw value, meter position and tooltip for one stat."""
    raw = _raw_value(definition, counters)
    return StatReading(
        stat_id=definition.id,
        raw_value=raw,
        meter_value=meter_value(raw),
        tooltip=_tooltip(definition, counters, raw),
    )
