"""Recompute Scheduler — debounce of the expensive full recomputation.

Policy:
- every request(value) restarts a fixed settling window (default 800 ms)
- only the value pending when the window elapses reaches the callback
- a superseded request is dropped without running (no stale result is ever
  committed after a newer request exists)

The timer is an explicit handle owned by the scheduler. Two drivers share it:
- manual: the host passes its clock to poll(now_ms), the way a cooperative
  event loop ticks
- asyncio: attach_loop(loop) arms loop.call_later for every request and
  cancels the previous handle; a generation check ignores any stale callback
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import structlog

log = structlog.get_logger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class SchedulerConfig:
    """Configuration of the settling window.

    debounce_ms: delay restarted by every new request
    """

    debounce_ms: float = 800.0


@dataclass(frozen=True)
class PendingRecompute:
    """Handle of a scheduled recomputation."""

    value: Any
    generation: int
    requested_at_ms: float
    due_at_ms: float


class RecomputeScheduler:
    """Debounced, cancellable single-slot timer.

    At most one recomputation is pending at a time; a new request always
    replaces it.
    """

    def __init__(
        self,
        callback: Callable[[Any], None],
        config: Optional[SchedulerConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            callback: recomputation to run with the settled value
            config: settling window configuration
            clock: monotonic clock in milliseconds (default time.monotonic)
        """
        self.config = config or SchedulerConfig()
        if self.config.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be non-negative, got {self.config.debounce_ms}")

        self._callback = callback
        self._clock = clock or _monotonic_ms
        self._pending: Optional[PendingRecompute] = None
        self._generation = 0

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer_handle: Optional[asyncio.TimerHandle] = None

        # Counters
        self.requested_count = 0
        self.fired_count = 0
        self.dropped_count = 0

    @property
    def pending(self) -> Optional[PendingRecompute]:
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def request(self, value: Any, now_ms: Optional[float] = None) -> PendingRecompute:
        """Schedule value, restarting the window and dropping any pending value."""
        now = self._now(now_ms)

        if self._pending is not None:
            self.dropped_count += 1
            log.debug(
                "recompute_superseded",
                dropped_value=self._pending.value,
                generation=self._pending.generation,
            )
        self._cancel_timer()

        self._generation += 1
        self.requested_count += 1
        pending = PendingRecompute(
            value=value,
            generation=self._generation,
            requested_at_ms=now,
            due_at_ms=now + self.config.debounce_ms,
        )
        self._pending = pending

        if self._loop is not None:
            self._arm_timer(self.config.debounce_ms)

        log.debug("recompute_scheduled", value=value, due_at_ms=pending.due_at_ms)
        return pending

    def poll(self, now_ms: Optional[float] = None) -> bool:
        """Run the pending recomputation if its window has elapsed.

        Returns:
            True if the callback ran
        """
        pending = self._pending
        if pending is None:
            return False
        if self._now(now_ms) < pending.due_at_ms:
            return False
        self._fire(pending)
        return True

    def flush(self) -> bool:
        """Run the pending recomputation now, ignoring the window."""
        if self._pending is None:
            return False
        self._fire(self._pending)
        return True

    def cancel(self) -> bool:
        """Drop the pending recomputation without running it."""
        if self._pending is None:
            return False
        log.debug("recompute_cancelled", value=self._pending.value)
        self._pending = None
        self.dropped_count += 1
        self._cancel_timer()
        return True

    # -------------------------------------------------------------------------
    # asyncio driver
    # -------------------------------------------------------------------------

    def attach_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Drive the window with loop.call_later (re-arms a pending request)."""
        self._cancel_timer()
        self._loop = loop
        if self._pending is not None:
            remaining_ms = max(self._pending.due_at_ms - self._clock(), 0.0)
            self._arm_timer(remaining_ms)

    def detach_loop(self) -> None:
        self._cancel_timer()
        self._loop = None

    def _arm_timer(self, delay_ms: float) -> None:
        generation = self._generation
        self._timer_handle = self._loop.call_later(
            delay_ms / 1000.0, self._on_timer, generation
        )

    def _on_timer(self, generation: int) -> None:
        self._timer_handle = None
        pending = self._pending
        if pending is None or pending.generation != generation:
            log.debug("recompute_timer_stale", generation=generation)
            return
        self._fire(pending)

    def _cancel_timer(self) -> None:
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None

    # -------------------------------------------------------------------------

    def _fire(self, pending: PendingRecompute) -> None:
        self._pending = None
        self._cancel_timer()
        self.fired_count += 1
        log.debug("recompute_fired", value=pending.value, generation=pending.generation)
        self._callback(pending.value)

    def _now(self, now_ms: Optional[float]) -> float:
        return self._clock() if now_ms is None else now_ms
