"""Tests for the Day Classifier.

Coverage:
- sequence length and dates
- FUTURE ⟺ offset >= lived_days, one category per offset
- overlap tie-break (later marker wins)
- single-day markers, inert markers, future days never marked
- lifespans shorter than the lived period
- determinism
"""

from datetime import date

import pytest

from src.core.domain.day_record import DayCategory
from src.core.domain.marker import Marker
from src.core.domain.profile import LifeProfile
from src.core.math.calendar_math import add_days, days_between, estimate_total_days
from src.engine.day_classifier import DayClassifier, classify_days
from src.engine.marker_index import build_marker_index

BIRTH = date(2000, 1, 1)
TODAY = date(2024, 1, 1)


def _marker(marker_id, start, end=None, color="#22c55e"):
    return Marker(id=marker_id, name=f"marker {marker_id}", start_date=start, end_date=end, color=color)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def profile():
    return LifeProfile(birth_date=BIRTH, life_expectancy_years=80)


@pytest.fixture
def classifier():
    return DayClassifier()


@pytest.fixture
def marker_a():
    return _marker("1", date(2010, 1, 1), date(2010, 6, 1), color="#f59e0b")


@pytest.fixture
def marker_b():
    return _marker("2", date(2010, 3, 1), date(2010, 4, 1), color="#6366f1")


def _offset(day: date) -> int:
    return days_between(BIRTH, day)


# =============================================================================
# SEQUENCE SHAPE
# =============================================================================


class TestSequenceShape:
    """Length, dates and category split."""

    def test_reference_example_counts(self, classifier, profile):
        result = classifier.classify(profile, build_marker_index([]), TODAY)

        assert result.total_days == 29220
        assert result.lived_days == 8766
        assert len(result.records) == estimate_total_days(80)
        assert result.future_days == 29220 - 8766

    def test_offsets_and_dates(self, classifier, profile):
        result = classifier.classify(profile, build_marker_index([]), TODAY)

        assert [r.offset for r in result.records[:3]] == [0, 1, 2]
        assert result.records[0].day_date == BIRTH
        assert result.records[-1].offset == 29219
        assert result.records[-1].day_date == add_days(BIRTH, 29219)

    def test_future_iff_offset_at_or_after_lived(self, classifier, profile, marker_a):
        result = classifier.classify(profile, build_marker_index([marker_a]), TODAY)

        for r in result.records:
            assert (r.category == DayCategory.FUTURE) == (r.offset >= result.lived_days)

    def test_first_future_day_is_today(self, classifier, profile):
        result = classifier.classify(profile, build_marker_index([]), TODAY)

        assert result.records[8765].category == DayCategory.LIVED_PLAIN
        assert result.records[8766].category == DayCategory.FUTURE
        assert result.records[8766].day_date == TODAY

    def test_marker_set_only_on_marked_days(self, classifier, profile, marker_a, marker_b):
        result = classifier.classify(profile, build_marker_index([marker_a, marker_b]), TODAY)

        for r in result.records:
            assert (r.marker is not None) == (r.category == DayCategory.LIVED_MARKED)

    def test_category_counts_sum_to_total(self, classifier, profile, marker_a):
        result = classifier.classify(profile, build_marker_index([marker_a]), TODAY)
        counts = result.count_by_category()

        assert sum(counts.values()) == result.total_days
        assert counts[DayCategory.FUTURE] == 29220 - 8766
        assert counts[DayCategory.LIVED_MARKED] == days_between("2010-01-01", "2010-06-01") + 1


# =============================================================================
# OVERLAP RESOLUTION
# =============================================================================


class TestOverlapResolution:
    """Later-added markers take priority."""

    def test_later_marker_governs_overlap(self, classifier, profile, marker_a, marker_b):
        result = classifier.classify(profile, build_marker_index([marker_a, marker_b]), TODAY)
        record = result.records[_offset(date(2010, 3, 15))]

        assert record.day_date == date(2010, 3, 15)
        assert record.category == DayCategory.LIVED_MARKED
        assert record.governing_marker_id == "2"
        assert record.marker.color == "#6366f1"

    def test_earlier_marker_outside_overlap(self, classifier, profile, marker_a, marker_b):
        result = classifier.classify(profile, build_marker_index([marker_a, marker_b]), TODAY)

        assert result.records[_offset(date(2010, 2, 15))].governing_marker_id == "1"
        assert result.records[_offset(date(2010, 4, 2))].governing_marker_id == "1"
        assert result.records[_offset(date(2010, 6, 1))].governing_marker_id == "1"

    def test_reverse_insertion_order(self, classifier, profile, marker_a, marker_b):
        result = classifier.classify(profile, build_marker_index([marker_b, marker_a]), TODAY)

        assert result.records[_offset(date(2010, 3, 15))].governing_marker_id == "1"

    def test_unmarked_neighbours(self, classifier, profile, marker_a, marker_b):
        result = classifier.classify(profile, build_marker_index([marker_a, marker_b]), TODAY)

        assert result.records[_offset(date(2009, 12, 31))].category == DayCategory.LIVED_PLAIN
        assert result.records[_offset(date(2010, 6, 2))].category == DayCategory.LIVED_PLAIN


# =============================================================================
# EDGE CASES
# =============================================================================


class TestEdgeCases:
    """Single-day markers, inert markers, short lifespans."""

    def test_marker_without_end_covers_single_day(self, classifier, profile):
        result = classifier.classify(profile, build_marker_index([_marker("w", date(2005, 5, 5))]), TODAY)
        marked = [r for r in result.records if r.category == DayCategory.LIVED_MARKED]

        assert len(marked) == 1
        assert marked[0].day_date == date(2005, 5, 5)

    def test_future_days_never_marked(self, classifier, profile):
        """A range straddling today only marks its lived part."""
        m = _marker("x", date(2023, 12, 25), date(2024, 1, 10))
        result = classifier.classify(profile, build_marker_index([m]), TODAY)
        marked = [r.day_date for r in result.records if r.category == DayCategory.LIVED_MARKED]

        assert marked == [date(2023, 12, d) for d in range(25, 32)]
        assert result.records[_offset(date(2024, 1, 5))].category == DayCategory.FUTURE

    def test_marker_before_birth_is_inert(self, classifier, profile):
        m = _marker("old", date(1990, 1, 1), date(1999, 12, 31))
        result = classifier.classify(profile, build_marker_index([m]), TODAY)

        assert result.count_by_category()[DayCategory.LIVED_MARKED] == 0

    def test_marker_partially_before_birth(self, classifier, profile):
        m = _marker("edge", date(1999, 12, 30), date(2000, 1, 2))
        result = classifier.classify(profile, build_marker_index([m]), TODAY)

        assert [r.offset for r in result.records if r.marker is not None] == [0, 1]

    def test_lifespan_shorter_than_lived(self, classifier):
        """total_days <= lived_days: no future days, no special case."""
        short = LifeProfile(birth_date=date(1950, 1, 1), life_expectancy_years=1)
        m = _marker("first-steps", date(1950, 10, 1), date(1951, 3, 1))
        result = classifier.classify(short, build_marker_index([m]), TODAY)

        assert len(result.records) == 365
        assert result.future_days == 0
        assert all(r.is_lived for r in result.records)
        assert result.records[-1].category == DayCategory.LIVED_MARKED

    def test_today_before_birth_all_future(self, classifier, profile):
        """Unvalidated input still classifies without raising."""
        result = classifier.classify(profile, build_marker_index([]), date(1999, 12, 1))

        assert result.lived_days == -31
        assert all(r.category == DayCategory.FUTURE for r in result.records)


# =============================================================================
# DETERMINISM
# =============================================================================


class TestDeterminism:
    """Equal inputs, equal outputs."""

    def test_idempotent(self, classifier, profile, marker_a, marker_b):
        index = build_marker_index([marker_a, marker_b])
        first = classifier.classify(profile, index, TODAY)
        second = classifier.classify(profile, index, TODAY)

        assert first.records == second.records
        assert first == second

    def test_classify_days_accepts_raw_markers(self, profile, marker_a, marker_b):
        from_index = classify_days(profile, build_marker_index([marker_a, marker_b]), TODAY)
        from_list = classify_days(profile, [marker_a, marker_b], TODAY)

        assert from_index.records == from_list.records
