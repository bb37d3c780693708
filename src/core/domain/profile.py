"""
LifeProfile — Birth date and life expectancy

Immutable Pydantic model holding the only two inputs of the lifespan grid.
The profile is replaced wholesale whenever either field changes.

The "birth date strictly before today" invariant depends on the clock and is
enforced by the session at submission time (see validate_profile_inputs).
"""

from datetime import date
from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.math.calendar_math import (
    CalendarDateLike,
    estimate_total_days,
    parse_calendar_date,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Initial value of the life expectancy field
DEFAULT_LIFE_EXPECTANCY_YEARS: Final[int] = 90

# Upper bound accepted at submission (keeps the grid in the tens of thousands of days)
MAX_LIFE_EXPECTANCY_YEARS: Final[int] = 200


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidProfile(ValueError):
    """Birth date not strictly in the past, or unusable life expectancy."""

    pass


# =============================================================================
# PROFILE MODEL
# =============================================================================


class LifeProfile(BaseModel):
    """
    Birth date + life expectancy for one computation cycle.

    Immutable (frozen=True): edits create a new instance.
    """

    birth_date: date = Field(..., description="Calendar date of birth")
    life_expectancy_years: int = Field(..., gt=0, description="Estimated lifespan in years")

    model_config = {"frozen": True}

    @field_validator("life_expectancy_years", mode="before")
    @classmethod
    def reject_non_integer_years(cls, v):
        """Only int values; no coercion from bool, str or float."""
        if isinstance(v, (bool, str, float)):
            raise ValueError(f"life_expectancy_years must be an integer, got {v!r}")
        return v

    @property
    def total_days(self) -> int:
        """Estimated lifespan in days (years * 365 + years // 4)."""
        return estimate_total_days(self.life_expectancy_years)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_profile_inputs(
    birth_date: CalendarDateLike,
    life_expectancy_years: int,
    today: date,
    max_life_expectancy_years: int = MAX_LIFE_EXPECTANCY_YEARS,
) -> LifeProfile:
    """
    Validate raw profile inputs against "today" and build a LifeProfile.

    Args:
        birth_date: date or "YYYY-MM-DD"
        life_expectancy_years: whole number of years
        today: reference calendar date for the "not in the future" check
        max_life_expectancy_years: inclusive upper bound

    Returns:
        LifeProfile

    Raises:
        InvalidDate: malformed birth date
        InvalidProfile: birth date not strictly before today, or bad expectancy
    """
    parsed = parse_calendar_date(birth_date)

    if parsed >= today:
        raise InvalidProfile(
            f"birth_date {parsed.isoformat()} must be strictly before {today.isoformat()}"
        )

    validate_life_expectancy(life_expectancy_years, max_life_expectancy_years)

    return LifeProfile(birth_date=parsed, life_expectancy_years=life_expectancy_years)


def validate_life_expectancy(
    life_expectancy_years: int,
    max_life_expectancy_years: int = MAX_LIFE_EXPECTANCY_YEARS,
) -> int:
    """
    Check a life expectancy value on its own.

    Returns:
        The value unchanged

    Raises:
        InvalidProfile: not an integer, not positive, or above the maximum
    """
    if isinstance(life_expectancy_years, bool) or not isinstance(life_expectancy_years, int):
        raise InvalidProfile(
            f"life_expectancy_years must be an integer, got {life_expectancy_years!r}"
        )
    if life_expectancy_years <= 0:
        raise InvalidProfile(f"life_expectancy_years must be positive, got {life_expectancy_years}")
    if life_expectancy_years > max_life_expectancy_years:
        raise InvalidProfile(
            f"life_expectancy_years {life_expectancy_years} exceeds maximum {max_life_expectancy_years}"
        )
    return life_expectancy_years
