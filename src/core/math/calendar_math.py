"""
Calendar Math — Calendar-Day Arithmetic

Pure date arithmetic used by every stage of the life calendar engine:
- Parsing of calendar dates (date / datetime / strict ISO "YYYY-MM-DD")
- Day difference between two calendar dates
- Shifting a date by N days (month/year/leap-day rollover)
- Leap-aware lifespan estimate from a number of years

CRITICAL INVARIANTS:
1. All operations work at calendar-day granularity (datetimes are truncated)
2. estimate_total_days is a fixed approximation: years * 365 + years // 4
   (no century correction, reproduced exactly for the displayed figures)
3. Malformed or out-of-range dates raise InvalidDate, never a bare error
"""

import re
from datetime import date, datetime, timedelta
from typing import Final, Union

# =============================================================================
# CONSTANTS
# =============================================================================

# Days in a plain year (used by the estimate and by the lived summary)
DAYS_PER_YEAR: Final[int] = 365

# One extra day every LEAP_YEAR_INTERVAL years
LEAP_YEAR_INTERVAL: Final[int] = 4

# Strict ISO calendar date; datetime.fromisoformat accepts more than this
_ISO_DATE_RE: Final[re.Pattern] = re.compile(r"^\d{4}-\d{2}-\d{2}$")

CalendarDateLike = Union[date, datetime, str]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidDate(ValueError):
    """
    Malformed or unrepresentable calendar date.

    Raised at the boundary (parsing, shifting out of range) so callers get a
    typed failure instead of a TypeError / OverflowError.
    """

    pass


# =============================================================================
# PARSING
# =============================================================================


def parse_calendar_date(value: CalendarDateLike) -> date:
    """
    Normalize a date-like value to a calendar date.

    Args:
        value: date, datetime (truncated to its date) or "YYYY-MM-DD" string

    Returns:
        datetime.date

    Raises:
        InvalidDate: if the value is of another type, malformed or out of range

    Examples:
        >>> parse_calendar_date("2000-02-29")
        datetime.date(2000, 2, 29)
        >>> parse_calendar_date(datetime(2024, 1, 1, 23, 59))
        datetime.date(2024, 1, 1)
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDate(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not _ISO_DATE_RE.match(text):
        raise InvalidDate(f"Malformed calendar date: {value!r} (expected YYYY-MM-DD)")

    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise InvalidDate(f"Out-of-range calendar date: {value!r} ({e})") from e


# =============================================================================
# ARITHMETIC
# =============================================================================


def days_between(a: CalendarDateLike, b: CalendarDateLike) -> int:
    """
    Whole calendar days from a to b (b - a).

    Args:
        a: Start date
        b: End date

    Returns:
        Integer day difference, negative if b precedes a

    Examples:
        >>> days_between("2000-01-01", "2024-01-01")
        8766
        >>> days_between("2024-01-02", "2024-01-01")
        -1
    """
    return (parse_calendar_date(b) - parse_calendar_date(a)).days


def add_days(value: CalendarDateLike, n: int) -> date:
    """
    Calendar date n days after value (n may be negative).

    Raises:
        InvalidDate: if the result falls outside date.min..date.max

    Examples:
        >>> add_days("2000-02-28", 1)
        datetime.date(2000, 2, 29)
        >>> add_days("1999-12-31", 1)
        datetime.date(2000, 1, 1)
    """
    start = parse_calendar_date(value)
    try:
        return start + timedelta(days=n)
    except OverflowError as e:
        raise InvalidDate(f"{start.isoformat()} + {n} days is out of calendar range") from e


def estimate_total_days(years: int) -> int:
    """
    Estimated lifespan in days for a number of years.

    Formula: years * 365 + floor(years / 4). Imprecise by design (ignores the
    century rule and birth-date alignment), kept exact for compatibility.

    Args:
        years: Life expectancy in whole years (>= 0)

    Returns:
        Estimated number of days

    Raises:
        ValueError: if years is not a non-negative integer

    Examples:
        >>> estimate_total_days(80)
        29220
        >>> estimate_total_days(90)
        32872
    """
    if isinstance(years, bool) or not isinstance(years, int):
        raise ValueError(f"years must be an integer, got {years!r}")
    if years < 0:
        raise ValueError(f"years must be non-negative, got {years}")

    return years * DAYS_PER_YEAR + years // LEAP_YEAR_INTERVAL


def split_years_days(days: int) -> tuple[int, int]:
    """
    Split a day count into (365-day years, remaining days).

    Examples:
        >>> split_years_days(8766)
        (24, 6)
    """
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")
    return days // DAYS_PER_YEAR, days % DAYS_PER_YEAR
