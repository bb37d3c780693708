"""Render payload — JSON-ready grid for the presentation layer.

This is the only place where a day's marker is turned into display attributes
(color, name, cell label). The structure follows the render_payload contract.
"""

from typing import Any, Dict, List, Optional, Sequence

from src.core.domain.day_record import DayRecord, DecadeBucket, LifeSummary
from src.engine.decade_grouper import slice_bucket


def day_to_dict(record: DayRecord) -> Dict[str, Any]:
    marker = record.marker
    return {
        "offset": record.offset,
        "date": record.day_date.isoformat(),
        "category": record.category.value,
        "label": record.label,
        "markerId": marker.id if marker is not None else None,
        "markerName": marker.display_name if marker is not None else None,
        "color": marker.color if marker is not None else None,
    }


def summary_to_dict(summary: LifeSummary) -> Dict[str, Any]:
    return {
        "livedDays": summary.lived_days,
        "totalDays": summary.total_days,
        "yearsLived": summary.years_lived,
        "daysRemainder": summary.days_remainder,
        "futureDays": summary.future_days,
        "lifeExpectancyYears": summary.life_expectancy_years,
    }


def build_render_payload(
    records: Sequence[DayRecord],
    buckets: Sequence[DecadeBucket],
    summary: LifeSummary,
    decade_indexes: Optional[Sequence[int]] = None,
) -> Dict[str, Any]:
    """Assemble the render payload.

    Args:
        records: full day sequence of the cycle
        buckets: decade buckets of the same cycle
        summary: summary of the same cycle
        decade_indexes: restrict the payload to these decades (paged rendering)

    Returns:
        dict matching the render_payload JSON Schema
    """
    wanted = None if decade_indexes is None else set(decade_indexes)
    decades: List[Dict[str, Any]] = []
    for bucket in buckets:
        if wanted is not None and bucket.index not in wanted:
            continue
        decades.append(
            {
                "index": bucket.index,
                "label": bucket.label,
                "startAge": bucket.start_age,
                "endAge": bucket.end_age,
                "startOffset": bucket.start_offset,
                "endOffset": bucket.end_offset,
                "days": [day_to_dict(r) for r in slice_bucket(records, bucket)],
            }
        )

    return {"summary": summary_to_dict(summary), "decades": decades}
