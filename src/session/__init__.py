"""Session — explicit, memoized state of one life calendar session."""

from .life_session import (
    REJECT_CONTRACT_VIOLATION,
    REJECT_DUPLICATE_MARKER_ID,
    REJECT_INVALID_DATE,
    REJECT_INVALID_MARKER,
    REJECT_INVALID_MARKER_RANGE,
    REJECT_INVALID_PROFILE,
    REJECT_UNKNOWN_MARKER,
    ComputationCycle,
    LifeSession,
    MarkerSubmissionResult,
    ProfileSubmissionResult,
    SessionConfig,
    build_summary,
)

__all__ = [
    "LifeSession",
    "SessionConfig",
    "ComputationCycle",
    "ProfileSubmissionResult",
    "MarkerSubmissionResult",
    "build_summary",
    "REJECT_CONTRACT_VIOLATION",
    "REJECT_DUPLICATE_MARKER_ID",
    "REJECT_INVALID_DATE",
    "REJECT_INVALID_MARKER",
    "REJECT_INVALID_MARKER_RANGE",
    "REJECT_INVALID_PROFILE",
    "REJECT_UNKNOWN_MARKER",
]
