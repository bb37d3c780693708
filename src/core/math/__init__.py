"""
Core math modules for the life calendar

Calendar-day arithmetic shared by the engine and the session.
"""

from src.core.math.calendar_math import (
    DAYS_PER_YEAR,
    LEAP_YEAR_INTERVAL,
    CalendarDateLike,
    InvalidDate,
    add_days,
    days_between,
    estimate_total_days,
    parse_calendar_date,
    split_years_days,
)

__all__ = [
    # Constants
    "DAYS_PER_YEAR",
    "LEAP_YEAR_INTERVAL",
    # Types
    "CalendarDateLike",
    # Exceptions
    "InvalidDate",
    # Functions
    "add_days",
    "days_between",
    "estimate_total_days",
    "parse_calendar_date",
    "split_years_days",
]
