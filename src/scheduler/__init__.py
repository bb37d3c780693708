"""Scheduler — gating of full recomputations behind a settling window."""

from .recompute_scheduler import (
    PendingRecompute,
    RecomputeScheduler,
    SchedulerConfig,
)

__all__ = [
    "PendingRecompute",
    "RecomputeScheduler",
    "SchedulerConfig",
]
