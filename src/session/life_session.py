"""Life Session — explicit state of one user session.

Holds the LifeProfile, the insertion-ordered marker collection and the
memoized results of the last computation cycle:
- profile and marker edits bump a version counter
- derived results (day records, decade buckets, summary) are recomputed
  only when (profile_version, markers_version) changed since the last cycle
- "today" is sampled once, when a cycle is computed

Submissions never raise for bad input: they return a *SubmissionResult with
accepted=False, a reject_reason and details, and leave the previous valid
state untouched.

Life-expectancy edits go through the RecomputeScheduler (rapid keystrokes);
birth-date and marker edits apply immediately.
"""

import time
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional, Sequence

import structlog
from pydantic import ValidationError

from src.core.contracts import MarkerSubmissionValidator, ProfileSubmissionValidator
from src.core.domain.day_record import DayRecord, DecadeBucket, LifeSummary
from src.core.domain.marker import (
    DEFAULT_MARKER_COLOR,
    InvalidMarkerRange,
    Marker,
    validate_marker_inputs,
)
from src.core.domain.profile import (
    DEFAULT_LIFE_EXPECTANCY_YEARS,
    MAX_LIFE_EXPECTANCY_YEARS,
    InvalidProfile,
    LifeProfile,
    validate_life_expectancy,
    validate_profile_inputs,
)
from src.core.math.calendar_math import CalendarDateLike, InvalidDate, split_years_days
from src.engine.day_classifier import ClassificationResult, DayClassifier
from src.engine.decade_grouper import (
    DAYS_PER_DECADE,
    YEARS_PER_DECADE,
    group_decades,
    slice_bucket,
)
from src.engine.marker_index import MarkerRangeIndex, build_marker_index
from src.engine.render_payload import build_render_payload
from src.scheduler.recompute_scheduler import (
    PendingRecompute,
    RecomputeScheduler,
    SchedulerConfig,
)


# =============================================================================
# REJECT REASONS
# =============================================================================

REJECT_CONTRACT_VIOLATION = "contract_violation"
REJECT_INVALID_DATE = "invalid_date"
REJECT_INVALID_PROFILE = "invalid_profile"
REJECT_INVALID_MARKER_RANGE = "invalid_marker_range"
REJECT_INVALID_MARKER = "invalid_marker"
REJECT_DUPLICATE_MARKER_ID = "duplicate_marker_id"
REJECT_UNKNOWN_MARKER = "unknown_marker"


# =============================================================================
# CONFIG / RESULTS
# =============================================================================


@dataclass(frozen=True)
class SessionConfig:
    """Session-level settings.

    default_life_expectancy_years: expectancy used before the user edits it
    max_life_expectancy_years: upper bound accepted at submission
    days_per_decade / years_per_decade: decade bucketing
    validate_contracts: check raw submissions against the JSON Schema contracts
    """

    default_life_expectancy_years: int = DEFAULT_LIFE_EXPECTANCY_YEARS
    max_life_expectancy_years: int = MAX_LIFE_EXPECTANCY_YEARS
    days_per_decade: int = DAYS_PER_DECADE
    years_per_decade: int = YEARS_PER_DECADE
    validate_contracts: bool = True


@dataclass(frozen=True)
class ProfileSubmissionResult:
    """Outcome of a profile (or life-expectancy) submission."""

    accepted: bool
    reject_reason: str
    profile: Optional[LifeProfile]
    details: str


@dataclass(frozen=True)
class MarkerSubmissionResult:
    """Outcome of a marker submission or replacement."""

    accepted: bool
    reject_reason: str
    marker: Optional[Marker]
    details: str


@dataclass(frozen=True)
class ComputationCycle:
    """Memoized derived results, keyed by input versions."""

    profile_version: int
    markers_version: int
    classification: ClassificationResult
    buckets: tuple[DecadeBucket, ...]
    summary: LifeSummary


def _date_text(value: Any) -> Any:
    """Serialize date objects for the contract check; leave anything else as is."""
    if isinstance(value, date):
        return value.isoformat()
    return value


def build_summary(classification: ClassificationResult, profile: LifeProfile) -> LifeSummary:
    lived_days = classification.lived_days
    years_lived, days_remainder = split_years_days(max(lived_days, 0))
    return LifeSummary(
        lived_days=lived_days,
        total_days=classification.total_days,
        years_lived=years_lived,
        days_remainder=days_remainder,
        future_days=classification.future_days,
        life_expectancy_years=profile.life_expectancy_years,
    )


# =============================================================================
# SESSION
# =============================================================================


class LifeSession:
    """Single-user, memory-resident life calendar session."""

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        today_provider: Optional[Callable[[], date]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        scheduler_config: Optional[SchedulerConfig] = None,
        monotonic_ms: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            config: session settings
            today_provider: returns the current calendar date (default date.today)
            id_factory: returns new marker ids (default uuid4 hex)
            scheduler_config: debounce window of life-expectancy edits
            monotonic_ms: clock of the scheduler in milliseconds
        """
        self.config = config or SessionConfig()
        self._today = today_provider or date.today
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._log = structlog.get_logger(__name__).bind(component="life_session")

        self._profile: Optional[LifeProfile] = None
        self._profile_version = 0
        self._life_expectancy_years = self.config.default_life_expectancy_years

        self._markers: tuple[Marker, ...] = ()
        self._markers_version = 0
        self._marker_index: Optional[MarkerRangeIndex] = None
        self._marker_index_version = -1

        self._classifier = DayClassifier()
        self._cycle: Optional[ComputationCycle] = None
        self.cycles_computed = 0

        self._profile_contract = ProfileSubmissionValidator() if self.config.validate_contracts else None
        self._marker_contract = MarkerSubmissionValidator() if self.config.validate_contracts else None

        self._scheduler = RecomputeScheduler(
            self._apply_life_expectancy, config=scheduler_config, clock=monotonic_ms
        )
        self.last_expectancy_result: Optional[ProfileSubmissionResult] = None

    # -------------------------------------------------------------------------
    # State accessors
    # -------------------------------------------------------------------------

    @property
    def profile(self) -> Optional[LifeProfile]:
        return self._profile

    @property
    def markers(self) -> tuple[Marker, ...]:
        return self._markers

    @property
    def life_expectancy_years(self) -> int:
        """Committed life expectancy (pending debounced edits excluded)."""
        return self._life_expectancy_years

    @property
    def pending_life_expectancy(self) -> Optional[Any]:
        pending = self._scheduler.pending
        return pending.value if pending is not None else None

    @property
    def scheduler(self) -> RecomputeScheduler:
        return self._scheduler

    # -------------------------------------------------------------------------
    # Profile inputs
    # -------------------------------------------------------------------------

    def submit_profile(
        self,
        birth_date: CalendarDateLike,
        life_expectancy_years: Optional[int] = None,
    ) -> ProfileSubmissionResult:
        """Replace the profile immediately.

        An explicit life_expectancy_years supersedes any pending debounced
        edit; without it the committed expectancy is used.
        """
        explicit_years = life_expectancy_years is not None
        years = life_expectancy_years if explicit_years else self._life_expectancy_years

        result = self._validate_profile(birth_date, years)
        if result.accepted:
            if explicit_years:
                self._scheduler.cancel()
            self._commit_profile(result.profile)
        return result

    def submit_birth_date(self, birth_date: CalendarDateLike) -> ProfileSubmissionResult:
        """Replace the birth date immediately, keeping the committed expectancy."""
        return self.submit_profile(birth_date)

    def set_life_expectancy(self, years: Any, now_ms: Optional[float] = None) -> PendingRecompute:
        """Debounced life-expectancy edit.

        The value is validated when the settling window elapses (see poll);
        intermediate keystrokes are never validated nor computed.
        """
        return self._scheduler.request(years, now_ms=now_ms)

    def poll(self, now_ms: Optional[float] = None) -> bool:
        """Tick the scheduler; True if a pending expectancy edit was applied."""
        return self._scheduler.poll(now_ms)

    def flush_pending(self) -> bool:
        """Apply a pending expectancy edit right away."""
        return self._scheduler.flush()

    def _apply_life_expectancy(self, years: Any) -> None:
        if self._profile is None:
            result = self._validate_years_only(years)
            if result.accepted:
                self._life_expectancy_years = years
                self._log.info("life_expectancy_committed", years=years, profile=False)
        else:
            result = self._validate_profile(self._profile.birth_date, years)
            if result.accepted:
                self._commit_profile(result.profile)
        self.last_expectancy_result = result

    def _validate_years_only(self, years: Any) -> ProfileSubmissionResult:
        try:
            validate_life_expectancy(years, self.config.max_life_expectancy_years)
        except InvalidProfile as e:
            return self._reject_profile(REJECT_INVALID_PROFILE, str(e))
        return ProfileSubmissionResult(
            accepted=True, reject_reason="", profile=None, details=f"life_expectancy_years={years}"
        )

    def _validate_profile(self, birth_date: Any, years: Any) -> ProfileSubmissionResult:
        if self._profile_contract is not None:
            payload = {"birthDate": _date_text(birth_date), "lifeExpectancyYears": years}
            violations = self._profile_contract.error_messages(payload)
            if violations:
                return self._reject_profile(REJECT_CONTRACT_VIOLATION, "; ".join(violations))

        try:
            profile = validate_profile_inputs(
                birth_date,
                years,
                today=self._today(),
                max_life_expectancy_years=self.config.max_life_expectancy_years,
            )
        except InvalidDate as e:
            return self._reject_profile(REJECT_INVALID_DATE, str(e))
        except InvalidProfile as e:
            return self._reject_profile(REJECT_INVALID_PROFILE, str(e))
        except ValidationError as e:
            return self._reject_profile(REJECT_INVALID_PROFILE, str(e))

        return ProfileSubmissionResult(
            accepted=True,
            reject_reason="",
            profile=profile,
            details=(
                f"birth_date={profile.birth_date.isoformat()}, "
                f"life_expectancy_years={profile.life_expectancy_years}"
            ),
        )

    def _reject_profile(self, reason: str, details: str) -> ProfileSubmissionResult:
        self._log.warning("profile_rejected", reason=reason, details=details)
        return ProfileSubmissionResult(accepted=False, reject_reason=reason, profile=None, details=details)

    def _commit_profile(self, profile: LifeProfile) -> None:
        if profile == self._profile:
            # Memoized cycle stays valid
            self._log.debug("profile_unchanged", version=self._profile_version)
            return
        self._profile = profile
        self._life_expectancy_years = profile.life_expectancy_years
        self._profile_version += 1
        self._log.info(
            "profile_committed",
            birth_date=profile.birth_date.isoformat(),
            life_expectancy_years=profile.life_expectancy_years,
            version=self._profile_version,
        )

    # -------------------------------------------------------------------------
    # Markers
    # -------------------------------------------------------------------------

    def submit_marker(
        self,
        name: Optional[str],
        start_date: CalendarDateLike,
        end_date: Optional[CalendarDateLike] = None,
        color: str = DEFAULT_MARKER_COLOR,
        marker_id: Optional[str] = None,
    ) -> MarkerSubmissionResult:
        """Append a marker (it takes priority over every existing overlap)."""
        marker_id = marker_id if marker_id is not None else self._id_factory()
        if any(m.id == marker_id for m in self._markers):
            return self._reject_marker(REJECT_DUPLICATE_MARKER_ID, f"marker id {marker_id!r} already exists")

        result = self._validate_marker(marker_id, name, start_date, end_date, color)
        if result.accepted:
            self._commit_markers(self._markers + (result.marker,), "marker_added", marker_id)
        return result

    def replace_marker(
        self,
        marker_id: str,
        name: Optional[str],
        start_date: CalendarDateLike,
        end_date: Optional[CalendarDateLike] = None,
        color: str = DEFAULT_MARKER_COLOR,
    ) -> MarkerSubmissionResult:
        """Replace an existing marker, keeping its position in insertion order."""
        position = self._marker_position(marker_id)
        if position is None:
            return self._reject_marker(REJECT_UNKNOWN_MARKER, f"marker id {marker_id!r} not found")

        result = self._validate_marker(marker_id, name, start_date, end_date, color)
        if result.accepted:
            markers = list(self._markers)
            markers[position] = result.marker
            self._commit_markers(tuple(markers), "marker_replaced", marker_id)
        return result

    def delete_marker(self, marker_id: str) -> bool:
        """Remove a marker; False if the id is unknown."""
        position = self._marker_position(marker_id)
        if position is None:
            self._log.warning("marker_delete_unknown", marker_id=marker_id)
            return False
        markers = self._markers[:position] + self._markers[position + 1:]
        self._commit_markers(markers, "marker_deleted", marker_id)
        return True

    def _marker_position(self, marker_id: str) -> Optional[int]:
        for i, m in enumerate(self._markers):
            if m.id == marker_id:
                return i
        return None

    def _validate_marker(
        self,
        marker_id: str,
        name: Optional[str],
        start_date: Any,
        end_date: Any,
        color: str,
    ) -> MarkerSubmissionResult:
        if self._marker_contract is not None:
            payload = {
                "name": name,
                "startDate": _date_text(start_date),
                "endDate": _date_text(end_date),
                "color": color,
            }
            violations = self._marker_contract.error_messages(payload)
            if violations:
                return self._reject_marker(REJECT_CONTRACT_VIOLATION, "; ".join(violations))

        try:
            marker = validate_marker_inputs(
                marker_id, name, start_date, end_date, color, today=self._today()
            )
        except InvalidDate as e:
            return self._reject_marker(REJECT_INVALID_DATE, str(e))
        except InvalidMarkerRange as e:
            return self._reject_marker(REJECT_INVALID_MARKER_RANGE, str(e))
        except ValidationError as e:
            return self._reject_marker(REJECT_INVALID_MARKER, str(e))

        return MarkerSubmissionResult(
            accepted=True,
            reject_reason="",
            marker=marker,
            details=(
                f"{marker.display_name}: {marker.start_date.isoformat()}"
                f"..{marker.effective_end_date.isoformat()}"
            ),
        )

    def _reject_marker(self, reason: str, details: str) -> MarkerSubmissionResult:
        self._log.warning("marker_rejected", reason=reason, details=details)
        return MarkerSubmissionResult(accepted=False, reject_reason=reason, marker=None, details=details)

    def _commit_markers(self, markers: tuple[Marker, ...], event: str, marker_id: str) -> None:
        self._markers = markers
        self._markers_version += 1
        self._log.info(event, marker_id=marker_id, markers=len(markers), version=self._markers_version)

    # -------------------------------------------------------------------------
    # Derived results
    # -------------------------------------------------------------------------

    def get_day_records(self) -> tuple[DayRecord, ...]:
        cycle = self._ensure_cycle()
        return cycle.classification.records if cycle is not None else ()

    def get_decade_buckets(self) -> tuple[DecadeBucket, ...]:
        cycle = self._ensure_cycle()
        return cycle.buckets if cycle is not None else ()

    def get_decade_records(self, index: int) -> Sequence[DayRecord]:
        """Records of one decade bucket (paged rendering).

        Raises:
            IndexError: unknown bucket index
        """
        buckets = self.get_decade_buckets()
        if not 0 <= index < len(buckets):
            raise IndexError(f"decade index {index} out of range (0..{len(buckets) - 1})")
        return slice_bucket(self.get_day_records(), buckets[index])

    def get_summary(self) -> Optional[LifeSummary]:
        cycle = self._ensure_cycle()
        return cycle.summary if cycle is not None else None

    def get_render_payload(
        self, decade_indexes: Optional[Sequence[int]] = None
    ) -> Optional[Dict[str, Any]]:
        cycle = self._ensure_cycle()
        if cycle is None:
            return None
        return build_render_payload(
            cycle.classification.records, cycle.buckets, cycle.summary, decade_indexes
        )

    def invalidate(self) -> None:
        """Drop memoized results (e.g. to resample "today" after midnight)."""
        self._cycle = None

    def _current_marker_index(self) -> MarkerRangeIndex:
        if self._marker_index is None or self._marker_index_version != self._markers_version:
            self._marker_index = build_marker_index(self._markers)
            self._marker_index_version = self._markers_version
        return self._marker_index

    def _ensure_cycle(self) -> Optional[ComputationCycle]:
        profile = self._profile
        if profile is None:
            return None

        cycle = self._cycle
        if (
            cycle is not None
            and cycle.profile_version == self._profile_version
            and cycle.markers_version == self._markers_version
        ):
            return cycle

        started = time.perf_counter()
        classification = self._classifier.classify(
            profile, self._current_marker_index(), self._today()
        )
        buckets = group_decades(
            classification.total_days,
            profile.life_expectancy_years,
            days_per_decade=self.config.days_per_decade,
            years_per_decade=self.config.years_per_decade,
        )
        cycle = ComputationCycle(
            profile_version=self._profile_version,
            markers_version=self._markers_version,
            classification=classification,
            buckets=buckets,
            summary=build_summary(classification, profile),
        )
        self._cycle = cycle
        self.cycles_computed += 1

        self._log.info(
            "cycle_computed",
            total_days=classification.total_days,
            lived_days=classification.lived_days,
            markers=len(self._markers),
            decades=len(buckets),
            duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
        )
        return cycle
