"""Stat catalog — single source of truth for every selectable vital statistic.

This module is pure data with no dependencies on other project modules.

// [LAW:one-source-of-truth] All stat metadata lives in STAT_CATALOG.
// [LAW:locality-or-seam] Adding a stat = one StatId member + one catalog entry.

Catalog order is the canonical render order. The settings panel and the
dashboard both iterate STAT_CATALOG so toggles map 1:1 to meter rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class StatId(Enum):
    ELECTRICITY_AVAILABILITY = "electricity_availability"
    WATER_AVAILABILITY = "water_availability"
    SEWAGE_TREATMENT = "sewage_treatment"
    LANDFILL_USAGE = "landfill_usage"
    INCINERATION_STATUS = "incineration_status"
    HEALTHCARE_AVAILABILITY = "healthcare_availability"
    AVERAGE_HEALTH = "average_health"
    CEMETERY_USAGE = "cemetery_usage"
    CREMATORIUM_AVAILABILITY = "crematorium_availability"
    FIRE_HAZARD = "fire_hazard"
    CRIME_RATE = "crime_rate"
    JAIL_AVAILABILITY = "jail_availability"
    ELEMENTARY_SCHOOL_AVAILABILITY = "elementary_school_availability"
    HIGH_SCHOOL_AVAILABILITY = "high_school_availability"
    UNIVERSITY_AVAILABILITY = "university_availability"
    EMPLOYMENT = "employment"
    JOB_AVAILABILITY = "job_availability"


class ComputationKind(Enum):
    AVAILABILITY_RATIO = "availability_ratio"
    DIRECT_CAPACITY_RATIO = "direct_capacity_ratio"
    INVERSE_VALUE = "inverse_value"
    CLAMPED_VALUE = "clamped_value"


class TooltipKind(Enum):
    USAGE = "usage"            # "consumption / capacity"
    USAGE_KILO = "usage_kilo"  # same, both sides divided by 1000
    PERCENT = "percent"        # "42%"


# Host info-view menu indices used by click navigation.
MENU_ELECTRICITY = 0
MENU_WATER = 1
MENU_GARBAGE = 2
MENU_HEALTH = 3
MENU_FIRE_SAFETY = 4
MENU_CRIME = 5
MENU_EDUCATION = 6
MENU_EMPLOYMENT = 7


@dataclass(frozen=True)
class StatDefinition:
    """Immutable description of one dashboard meter.

    primary_counter is the capacity for ratio kinds and the single input for
    value kinds. secondary_counter is the consumption/amount side of a ratio.
    Both name fields on CityCounters.
    """

    id: StatId
    display_name_key: str
    computation_kind: ComputationKind
    primary_counter: str
    secondary_counter: str | None = None
    tooltip_kind: TooltipKind = TooltipKind.USAGE
    target_menu_index: int | None = None
    uses_gradient_style: bool = False
    default_enabled: bool = False


_AR = ComputationKind.AVAILABILITY_RATIO
_DC = ComputationKind.DIRECT_CAPACITY_RATIO


# [LAW:one-source-of-truth] Ordered catalog of all stats
STAT_CATALOG: tuple[StatDefinition, ...] = (
    StatDefinition(
        StatId.ELECTRICITY_AVAILABILITY, "INFO_ELECTRICITY_AVAILABILITY", _AR,
        "electricity_capacity", "electricity_consumption",
        tooltip_kind=TooltipKind.USAGE_KILO,
        target_menu_index=MENU_ELECTRICITY, default_enabled=True,
    ),
    StatDefinition(
        StatId.WATER_AVAILABILITY, "INFO_WATER_WATERAVAILABILITY", _AR,
        "water_capacity", "water_consumption",
        target_menu_index=MENU_WATER, default_enabled=True,
    ),
    StatDefinition(
        StatId.SEWAGE_TREATMENT, "INFO_WATER_SEWAGEAVAILABILITY", _AR,
        "sewage_capacity", "sewage_accumulation",
        target_menu_index=MENU_WATER, default_enabled=True,
    ),
    StatDefinition(
        StatId.LANDFILL_USAGE, "INFO_GARBAGE_LANDFILL", _DC,
        "garbage_capacity", "garbage_amount",
        tooltip_kind=TooltipKind.PERCENT,
        target_menu_index=MENU_GARBAGE, default_enabled=True,
    ),
    StatDefinition(
        StatId.INCINERATION_STATUS, "INFO_GARBAGE_INCINERATOR", _AR,
        "incineration_capacity", "garbage_accumulation",
        target_menu_index=MENU_GARBAGE, default_enabled=True,
    ),
    StatDefinition(
        StatId.HEALTHCARE_AVAILABILITY, "INFO_HEALTH_HEALTHCARE_AVAILABILITY", _AR,
        "heal_capacity", "sick_count",
        target_menu_index=MENU_HEALTH,
    ),
    StatDefinition(
        StatId.AVERAGE_HEALTH, "INFO_HEALTH_AVERAGE", ComputationKind.CLAMPED_VALUE,
        "average_health",
        tooltip_kind=TooltipKind.PERCENT,
        target_menu_index=MENU_HEALTH, uses_gradient_style=True,
    ),
    StatDefinition(
        StatId.CEMETERY_USAGE, "INFO_HEALTH_CEMETARYUSAGE", _DC,
        "dead_capacity", "dead_amount",
        tooltip_kind=TooltipKind.PERCENT,
        target_menu_index=MENU_HEALTH, default_enabled=True,
    ),
    StatDefinition(
        StatId.CREMATORIUM_AVAILABILITY, "INFO_HEALTH_CREMATORIUMAVAILABILITY", _AR,
        "cremate_capacity", "dead_count",
        target_menu_index=MENU_HEALTH, default_enabled=True,
    ),
    StatDefinition(
        StatId.FIRE_HAZARD, "INFO_FIRE_METER", ComputationKind.CLAMPED_VALUE,
        "fire_hazard",
        tooltip_kind=TooltipKind.PERCENT,
        target_menu_index=MENU_FIRE_SAFETY, uses_gradient_style=True,
    ),
    StatDefinition(
        StatId.CRIME_RATE, "INFO_CRIMERATE_METER", ComputationKind.CLAMPED_VALUE,
        "crime_rate",
        tooltip_kind=TooltipKind.PERCENT,
        target_menu_index=MENU_CRIME, uses_gradient_style=True,
    ),
    StatDefinition(
        StatId.JAIL_AVAILABILITY, "INFO_CRIME_JAIL_AVAILABILITY", _AR,
        "criminal_capacity", "criminal_amount",
        target_menu_index=MENU_CRIME,
    ),
    StatDefinition(
        StatId.ELEMENTARY_SCHOOL_AVAILABILITY, "INFO_EDUCATION_AVAILABILITY1", _AR,
        "education1_capacity", "education1_need",
        target_menu_index=MENU_EDUCATION,
    ),
    StatDefinition(
        StatId.HIGH_SCHOOL_AVAILABILITY, "INFO_EDUCATION_AVAILABILITY2", _AR,
        "education2_capacity", "education2_need",
        target_menu_index=MENU_EDUCATION,
    ),
    StatDefinition(
        StatId.UNIVERSITY_AVAILABILITY, "INFO_EDUCATION_AVAILABILITY3", _AR,
        "education3_capacity", "education3_need",
        target_menu_index=MENU_EDUCATION,
    ),
    StatDefinition(
        StatId.EMPLOYMENT, "STATS_9", ComputationKind.INVERSE_VALUE,
        "unemployment",
        tooltip_kind=TooltipKind.PERCENT,
        target_menu_index=MENU_EMPLOYMENT, default_enabled=True,
    ),
    StatDefinition(
        StatId.JOB_AVAILABILITY, "STATS_10", _AR,
        "workplace_count", "worker_count",
        target_menu_index=MENU_EMPLOYMENT,
    ),
)

# Derived, kept in sync automatically
STAT_ORDER: tuple[StatId, ...] = tuple(d.id for d in STAT_CATALOG)
_BY_ID: dict[StatId, StatDefinition] = {d.id: d for d in STAT_CATALOG}
_INDEX: dict[StatId, int] = {stat_id: i for i, stat_id in enumerate(STAT_ORDER)}


def get_definition(stat_id: StatId) -> StatDefinition:
    """Return the catalog entry for stat_id."""
    return _BY_ID[stat_id]


def catalog_index(stat: StatId | StatDefinition) -> int:
    """Position of a stat in catalog order."""
    stat_id = stat.id if isinstance(stat, StatDefinition) else stat
    return _INDEX[stat_id]


def sort_by_catalog(stats: Iterable[StatDefinition]) -> list[StatDefinition]:
    """Order definitions by catalog position, dropping duplicates."""
    unique = {d.id: d for d in stats}
    return sorted(unique.values(), key=catalog_index)


def default_enabled_map() -> dict[StatId, bool]:
    """Fresh enable-flag map holding the catalog default for every stat."""
    return {d.id: d.default_enabled for d in STAT_CATALOG}
