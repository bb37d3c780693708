"""Tests for the Decade Grouper.

Coverage:
- bucket count ceil(total_days / 3650)
- exact coverage of [0, total_days)
- age labels clamped to the life expectancy
- paging helper
"""

from datetime import date

import pytest

from src.core.domain.profile import LifeProfile
from src.core.math.calendar_math import estimate_total_days
from src.engine.day_classifier import classify_days
from src.engine.decade_grouper import DAYS_PER_DECADE, group_decades, slice_bucket


class TestGroupDecades:
    """Bucket layout."""

    def test_eighty_years(self):
        buckets = group_decades(29220, 80)

        assert len(buckets) == 9
        assert buckets[0].start_offset == 0
        assert buckets[0].end_offset == DAYS_PER_DECADE
        assert (buckets[0].start_age, buckets[0].end_age) == (0, 10)
        # 20 leftover days: the last bucket is short and labelled 80 - 80
        last = buckets[-1]
        assert (last.start_offset, last.end_offset) == (29200, 29220)
        assert (last.start_age, last.end_age) == (80, 80)

    def test_eighty_five_years(self):
        total = estimate_total_days(85)
        buckets = group_decades(total, 85)

        assert len(buckets) == 9
        assert (buckets[-1].start_age, buckets[-1].end_age) == (80, 85)
        assert buckets[-1].end_offset == total

    def test_exact_multiple(self):
        buckets = group_decades(7300, 20)

        assert len(buckets) == 2
        assert all(b.day_count == DAYS_PER_DECADE for b in buckets)

    def test_empty_sequence(self):
        assert group_decades(0, 80) == ()

    def test_short_lifespan(self):
        (only,) = group_decades(365, 1)
        assert (only.start_offset, only.end_offset) == (0, 365)
        assert (only.start_age, only.end_age) == (0, 1)
        assert only.label == "0 - 1 years"

    @pytest.mark.parametrize("years", list(range(1, 121)))
    def test_exact_coverage_and_final_age(self, years):
        total = estimate_total_days(years)
        buckets = group_decades(total, years)

        assert len(buckets) == -(-total // DAYS_PER_DECADE)
        expected_start = 0
        for i, b in enumerate(buckets):
            assert b.index == i
            assert b.start_offset == expected_start
            assert b.end_offset > b.start_offset
            assert b.end_age <= years
            expected_start = b.end_offset
        assert expected_start == total
        assert buckets[-1].end_age == years

    def test_custom_width(self):
        buckets = group_decades(100, 10, days_per_decade=30, years_per_decade=1)

        assert len(buckets) == 4
        assert buckets[-1].day_count == 10
        assert (buckets[2].start_age, buckets[2].end_age) == (2, 3)

    def test_ages_clamped_when_buckets_outrun_expectancy(self):
        buckets = group_decades(100, 1, days_per_decade=30, years_per_decade=1)

        assert [(b.start_age, b.end_age) for b in buckets] == [(0, 1), (1, 1), (1, 1), (1, 1)]
        assert all(b.start_age <= b.end_age for b in buckets)

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            group_decades(100, 10, days_per_decade=0)

    def test_negative_total(self):
        with pytest.raises(ValueError):
            group_decades(-1, 10)


class TestSliceBucket:
    """Paged access to the day records."""

    def test_slices_partition_records(self):
        profile = LifeProfile(birth_date=date(2000, 1, 1), life_expectancy_years=25)
        result = classify_days(profile, [], date(2024, 1, 1))
        buckets = group_decades(result.total_days, 25)

        pages = [slice_bucket(result.records, b) for b in buckets]

        assert [len(p) for p in pages] == [3650, 3650, 1831]
        assert pages[1][0].offset == 3650
        assert sum(pages, ()) == result.records
