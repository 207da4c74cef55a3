"""Default English strings for stat display-name keys.

The core only stores keys. Hosts resolve them through a Localizer; this
table backs the built-in one.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Fixed, never localized
PANEL_TITLE = "City Vitals"
SETTINGS_TITLE = "City Vitals Settings"
DEFAULT_VISIBILITY_LABEL = "Default Visibility"
TRANSPARENT_UNHOVERED_LABEL = "Transparent Unhovered"

ENGLISH: dict[str, str] = {
    "INFO_ELECTRICITY_AVAILABILITY": "Electricity Availability",
    "INFO_WATER_WATERAVAILABILITY": "Water Availability",
    "INFO_WATER_SEWAGEAVAILABILITY": "Sewage Treatment",
    "INFO_GARBAGE_LANDFILL": "Landfill Usage",
    "INFO_GARBAGE_INCINERATOR": "Incineration Status",
    "INFO_HEALTH_HEALTHCARE_AVAILABILITY": "Healthcare Availability",
    "INFO_HEALTH_AVERAGE": "Average Health",
    "INFO_HEALTH_CEMETARYUSAGE": "Cemetery Usage",
    "INFO_HEALTH_CREMATORIUMAVAILABILITY": "Crematorium Availability",
    "INFO_FIRE_METER": "Fire Hazard",
    "INFO_CRIMERATE_METER": "Crime Rate",
    "INFO_CRIME_JAIL_AVAILABILITY": "Jail Availability",
    "INFO_EDUCATION_AVAILABILITY1": "Elementary School Availability",
    "INFO_EDUCATION_AVAILABILITY2": "High School Availability",
    "INFO_EDUCATION_AVAILABILITY3": "University Availability",
    "STATS_9": "Employment",
    "STATS_10": "Job Availability",
}


class TableLocalizer:
    """Localizer backed by a key → text mapping.

    Unknown keys resolve to the key itself so a missing translation never
    blanks a label.
    """

    def __init__(self, table: dict[str, str] | None = None):
        self._table = dict(ENGLISH if table is None else table)

    def resolve(self, key: str) -> str:
        text = self._table.get(key)
        if text is None:
            logger.debug("No localized text for %s", key)
            return key
        return text
