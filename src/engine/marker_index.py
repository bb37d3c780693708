"""Marker Range Index — normalized marker date ranges.

Built once per marker-set change so the classifier compares plain bounds
instead of re-reading marker fields for every (day × marker) pair.

Overlap rule: when several ranges cover a day, the one added last governs it.
governing() is the only place this rule is applied.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from src.core.domain.marker import Marker
from src.core.math.calendar_math import days_between

# Calendar date, or day offset relative to some origin date
RangeBound = Union[date, int]


@dataclass(frozen=True)
class MarkerRange:
    """Inclusive [start, end] range of one marker (end defaults to start)."""

    start: RangeBound
    end: RangeBound
    marker: Marker

    def covers(self, key: RangeBound) -> bool:
        return self.start <= key <= self.end


class MarkerRangeIndex:
    """Insertion-ordered list of marker ranges.

    The index is a snapshot: it never observes later changes to the marker
    collection it was built from.
    """

    def __init__(self, ranges: Iterable[MarkerRange] = ()):
        self._ranges: tuple[MarkerRange, ...] = tuple(ranges)

    @property
    def ranges(self) -> tuple[MarkerRange, ...]:
        return self._ranges

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self):
        return iter(self._ranges)

    def governing(self, key: RangeBound) -> Optional[MarkerRange]:
        """Last range in insertion order covering key, or None."""
        for r in reversed(self._ranges):
            if r.covers(key):
                return r
        return None

    def relative_to(self, origin: date) -> "MarkerRangeIndex":
        """Same ranges with integer day offsets from origin as bounds.

        Insertion order is kept, so governing(offset) on the result agrees
        with governing(day) on this index.
        """
        return MarkerRangeIndex(
            MarkerRange(days_between(origin, r.start), days_between(origin, r.end), r.marker)
            for r in self._ranges
        )


def build_marker_index(markers: Iterable[Marker]) -> MarkerRangeIndex:
    """Normalize markers (insertion order preserved) into a MarkerRangeIndex."""
    return MarkerRangeIndex(
        MarkerRange(start=m.start_date, end=m.effective_end_date, marker=m)
        for m in markers
    )
