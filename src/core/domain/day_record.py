"""
Day Records — Derived per-day and per-decade values

Produced fresh on every computation cycle, never stored:
- DayCategory: FUTURE / LIVED_PLAIN / LIVED_MARKED
- DayRecord: classification of one day offset (+ governing marker)
- DecadeBucket: fixed-width group of day offsets with an age range
- LifeSummary: lived / total counters shown next to the grid

These are plain frozen dataclasses: a cycle builds tens of thousands of
records, so they skip Pydantic validation.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from src.core.domain.marker import Marker


# =============================================================================
# ENUMS
# =============================================================================


class DayCategory(str, Enum):
    """Category of a single day of the lifespan."""

    FUTURE = "future"
    LIVED_PLAIN = "lived_plain"
    LIVED_MARKED = "lived_marked"


# =============================================================================
# RECORDS
# =============================================================================


@dataclass(frozen=True)
class DayRecord:
    """
    Classification of one day offset.

    Invariants:
    - category == FUTURE iff offset >= lived_days of the cycle
    - marker is set iff category == LIVED_MARKED
    """

    offset: int
    day_date: date
    category: DayCategory
    marker: Optional[Marker] = None

    @property
    def governing_marker_id(self) -> Optional[str]:
        return self.marker.id if self.marker is not None else None

    @property
    def is_lived(self) -> bool:
        return self.category != DayCategory.FUTURE

    @property
    def label(self) -> str:
        """1-based cell label ("Day 1" is the birth date)."""
        return f"Day {self.offset + 1}"


@dataclass(frozen=True)
class DecadeBucket:
    """Day offsets [start_offset, end_offset) labelled with ages [start_age, end_age]."""

    index: int
    start_offset: int
    end_offset: int
    start_age: int
    end_age: int

    @property
    def day_count(self) -> int:
        return self.end_offset - self.start_offset

    @property
    def label(self) -> str:
        return f"{self.start_age} - {self.end_age} years"


@dataclass(frozen=True)
class LifeSummary:
    """
    Counters for the legend of the grid.

    years_lived / days_remainder use 365-day years.
    """

    lived_days: int
    total_days: int
    years_lived: int
    days_remainder: int
    future_days: int
    life_expectancy_years: int
