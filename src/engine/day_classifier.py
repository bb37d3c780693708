"""Day Classifier — category and governing marker of every day of a lifespan.

For each offset in [0, total_days):
1. day_date = birth_date + offset days
2. offset >= lived_days → FUTURE (no marker lookup for future days)
3. otherwise the last marker (insertion order) covering day_date governs it
   → LIVED_MARKED, or LIVED_PLAIN when no marker covers it

lived_days = days_between(birth_date, today) is sampled once per cycle.

The classifier trusts its inputs (profile validated at submission), has no
side effects and is deterministic: equal inputs give equal record sequences.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Union

import structlog

from src.core.domain.day_record import DayCategory, DayRecord
from src.core.domain.marker import Marker
from src.core.domain.profile import LifeProfile
from src.core.math.calendar_math import add_days, days_between
from src.engine.marker_index import MarkerRangeIndex, build_marker_index

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    """Output of one classification cycle."""

    records: tuple[DayRecord, ...]
    lived_days: int
    total_days: int
    today: date

    @property
    def future_days(self) -> int:
        return max(self.total_days - self.lived_days, 0)

    def count_by_category(self) -> Dict[DayCategory, int]:
        counts = Counter(r.category for r in self.records)
        return {category: counts.get(category, 0) for category in DayCategory}


class DayClassifier:
    """Stateless day classifier.

    Marker ranges are translated to day offsets relative to the birth date
    once per cycle (MarkerRangeIndex.relative_to), so the inner loop compares
    integers only.
    """

    def classify(
        self,
        profile: LifeProfile,
        marker_index: MarkerRangeIndex,
        today: date,
    ) -> ClassificationResult:
        """Classify every day of the profile's estimated lifespan.

        Args:
            profile: validated life profile
            marker_index: snapshot of the marker ranges
            today: reference date for lived_days

        Returns:
            ClassificationResult with exactly profile.total_days records
        """
        birth_date = profile.birth_date
        total_days = profile.total_days
        lived_days = days_between(birth_date, today)

        offset_index = marker_index.relative_to(birth_date)

        records: List[DayRecord] = []
        for offset in range(total_days):
            day_date = add_days(birth_date, offset)

            if offset >= lived_days:
                records.append(DayRecord(offset, day_date, DayCategory.FUTURE))
                continue

            governing = offset_index.governing(offset)
            if governing is None:
                records.append(DayRecord(offset, day_date, DayCategory.LIVED_PLAIN))
            else:
                records.append(DayRecord(offset, day_date, DayCategory.LIVED_MARKED, governing.marker))

        log.debug(
            "days_classified",
            total_days=total_days,
            lived_days=lived_days,
            markers=len(offset_index),
        )

        return ClassificationResult(
            records=tuple(records),
            lived_days=lived_days,
            total_days=total_days,
            today=today,
        )


def classify_days(
    profile: LifeProfile,
    markers: Union[MarkerRangeIndex, Iterable[Marker]],
    today: date,
) -> ClassificationResult:
    """Classify with a fresh DayClassifier; accepts an index or raw markers."""
    if not isinstance(markers, MarkerRangeIndex):
        markers = build_marker_index(markers)
    return DayClassifier().classify(profile, markers, today)
