"""Decade Grouper — fixed-width buckets of the day sequence.

Partitions [0, total_days) into ceil(total_days / 3650) buckets so a renderer
can page through the grid decade by decade. Bucket d is labelled with ages
[d*10, min(d*10 + 10, life_expectancy_years)], both clamped to the life
expectancy; the last bucket may be shorter.

The grouper only sees counts, never day categories.
"""

from typing import Final, Sequence

from src.core.domain.day_record import DayRecord, DecadeBucket

DAYS_PER_DECADE: Final[int] = 3650
YEARS_PER_DECADE: Final[int] = 10


def group_decades(
    total_days: int,
    life_expectancy_years: int,
    days_per_decade: int = DAYS_PER_DECADE,
    years_per_decade: int = YEARS_PER_DECADE,
) -> tuple[DecadeBucket, ...]:
    """Split [0, total_days) into consecutive buckets.

    Args:
        total_days: length of the day sequence (>= 0)
        life_expectancy_years: clamp for the start and end age of every bucket
        days_per_decade: bucket width in day offsets
        years_per_decade: age span of one bucket

    Returns:
        Buckets covering every offset exactly once, in order

    Raises:
        ValueError: non-positive bucket width or negative total_days
    """
    if days_per_decade <= 0:
        raise ValueError(f"days_per_decade must be positive, got {days_per_decade}")
    if total_days < 0:
        raise ValueError(f"total_days must be non-negative, got {total_days}")

    bucket_count = -(-total_days // days_per_decade)  # ceil
    buckets = []
    for d in range(bucket_count):
        start_offset = d * days_per_decade
        start_age = min(d * years_per_decade, life_expectancy_years)
        buckets.append(
            DecadeBucket(
                index=d,
                start_offset=start_offset,
                end_offset=min(start_offset + days_per_decade, total_days),
                start_age=start_age,
                end_age=min(start_age + years_per_decade, life_expectancy_years),
            )
        )
    return tuple(buckets)


def slice_bucket(records: Sequence[DayRecord], bucket: DecadeBucket) -> Sequence[DayRecord]:
    """Records of one bucket (records are indexed by offset)."""
    return records[bucket.start_offset:bucket.end_offset]
