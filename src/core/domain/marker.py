"""
Marker — Named, colored date range (life event)

Immutable Pydantic model. Markers are owned by the session's marker
collection: created by submission, removed by deletion, never mutated in
place (an edit replaces the entry). Insertion order decides which marker
governs a day covered by several of them.
"""

from datetime import date
from typing import Final, Optional

from pydantic import BaseModel, Field, model_validator

from src.core.math.calendar_math import CalendarDateLike, parse_calendar_date

# =============================================================================
# CONSTANTS
# =============================================================================

MARKER_NAME_MAX_LENGTH: Final[int] = 50

# Display name of a marker submitted with an empty name
UNNAMED_MARKER_LABEL: Final[str] = "unnamed"

# "#rgb" or "#rrggbb"
HEX_COLOR_PATTERN: Final[str] = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"

DEFAULT_MARKER_COLOR: Final[str] = "#3b82f6"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidMarkerRange(ValueError):
    """End date before start date, or a range reaching past today."""

    pass


# =============================================================================
# MARKER MODEL
# =============================================================================


class Marker(BaseModel):
    """
    Life event overlay.

    end_date is optional: a marker without one covers exactly start_date.
    """

    id: str = Field(..., min_length=1, description="Unique identifier within a session")
    name: str = Field("", max_length=MARKER_NAME_MAX_LENGTH, description="Display name (may be empty)")
    start_date: date = Field(..., description="First covered day (inclusive)")
    end_date: Optional[date] = Field(None, description="Last covered day (inclusive)")
    color: str = Field(..., pattern=HEX_COLOR_PATTERN, description="Hex RGB color")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_range_order(self) -> "Marker":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(
                f"end_date {self.end_date.isoformat()} is before start_date {self.start_date.isoformat()}"
            )
        return self

    @property
    def display_name(self) -> str:
        return self.name if self.name.strip() else UNNAMED_MARKER_LABEL

    @property
    def effective_end_date(self) -> date:
        return self.end_date if self.end_date is not None else self.start_date


# =============================================================================
# VALIDATION
# =============================================================================


def validate_marker_inputs(
    marker_id: str,
    name: Optional[str],
    start_date: CalendarDateLike,
    end_date: Optional[CalendarDateLike],
    color: str,
    today: Optional[date] = None,
) -> Marker:
    """
    Validate raw marker inputs and build a Marker.

    Empty or missing end_date means "single day". When today is given, both
    ends of the range must fall on or before it.

    Raises:
        InvalidDate: malformed start/end date
        InvalidMarkerRange: end before start, or range in the future
        pydantic.ValidationError: bad id, name length or color
    """
    start = parse_calendar_date(start_date)
    end = None if end_date in (None, "") else parse_calendar_date(end_date)

    if end is not None and end < start:
        raise InvalidMarkerRange(
            f"end_date {end.isoformat()} cannot be before start_date {start.isoformat()}"
        )

    if today is not None:
        last_day = end if end is not None else start
        if last_day > today:
            raise InvalidMarkerRange(
                f"marker range ends {last_day.isoformat()}, after today {today.isoformat()}"
            )

    return Marker(
        id=marker_id,
        name=name or "",
        start_date=start,
        end_date=end,
        color=color,
    )
