"""Engine — day classification and grouping pipeline.

Marker Range Index → Day Classifier → Decade Grouper → render payload.
All stages are pure functions of their inputs.
"""

from .day_classifier import ClassificationResult, DayClassifier, classify_days
from .decade_grouper import DAYS_PER_DECADE, YEARS_PER_DECADE, group_decades, slice_bucket
from .marker_index import MarkerRange, MarkerRangeIndex, build_marker_index
from .render_payload import build_render_payload, day_to_dict, summary_to_dict

__all__ = [
    "MarkerRange",
    "MarkerRangeIndex",
    "build_marker_index",
    "ClassificationResult",
    "DayClassifier",
    "classify_days",
    "DAYS_PER_DECADE",
    "YEARS_PER_DECADE",
    "group_decades",
    "slice_bucket",
    "build_render_payload",
    "day_to_dict",
    "summary_to_dict",
]
