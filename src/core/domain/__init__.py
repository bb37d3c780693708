"""
Domain models and value objects.

Contains the life calendar entities: LifeProfile, Marker, DayRecord,
DecadeBucket, LifeSummary.
"""

from src.core.domain.day_record import (
    DayCategory,
    DayRecord,
    DecadeBucket,
    LifeSummary,
)
from src.core.domain.marker import (
    DEFAULT_MARKER_COLOR,
    HEX_COLOR_PATTERN,
    MARKER_NAME_MAX_LENGTH,
    UNNAMED_MARKER_LABEL,
    InvalidMarkerRange,
    Marker,
    validate_marker_inputs,
)
from src.core.domain.profile import (
    DEFAULT_LIFE_EXPECTANCY_YEARS,
    MAX_LIFE_EXPECTANCY_YEARS,
    InvalidProfile,
    LifeProfile,
    validate_life_expectancy,
    validate_profile_inputs,
)

__all__ = [
    # Profile
    "DEFAULT_LIFE_EXPECTANCY_YEARS",
    "MAX_LIFE_EXPECTANCY_YEARS",
    "InvalidProfile",
    "LifeProfile",
    "validate_life_expectancy",
    "validate_profile_inputs",
    # Marker
    "DEFAULT_MARKER_COLOR",
    "HEX_COLOR_PATTERN",
    "MARKER_NAME_MAX_LENGTH",
    "UNNAMED_MARKER_LABEL",
    "InvalidMarkerRange",
    "Marker",
    "validate_marker_inputs",
    # Derived records
    "DayCategory",
    "DayRecord",
    "DecadeBucket",
    "LifeSummary",
]
