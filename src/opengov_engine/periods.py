"""
Referendum lifecycle period tracking

Progress through the prepare, decision, confirm and enactment periods, the
labels shown next to progress bars and the timeline of lifecycle phases.
"""

import math
from enum import Enum
from typing import Optional
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .types import TrackInfo

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
MS_PER_DAY = MINUTES_PER_DAY * 60 * 1000


class PeriodUnit(Enum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class TrackPeriod(Enum):
    """Lifecycle periods configured per track"""
    PREPARE = "prepare_period"
    DECISION = "decision_period"
    CONFIRM = "confirm_period"
    ENACTMENT = "min_enactment_period"


class PhaseState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PeriodSpec:
    """A period ending at `end_at` and lasting `duration_days`. No end means not started."""
    end_at: Optional[datetime]
    duration_days: float

    @property
    def start_at(self) -> Optional[datetime]:
        if self.end_at is None:
            return None
        return self.end_at - timedelta(days=self.duration_days)

    @property
    def total_minutes(self) -> float:
        return self.duration_days * MINUTES_PER_DAY


@dataclass(frozen=True)
class ProgressLabel:
    """Elapsed and total period length in a single display unit"""
    elapsed: int
    total: int
    unit: PeriodUnit

    def __str__(self):
        return f"{self.elapsed}/{self.total} {self.unit.value}"


@dataclass(frozen=True)
class ReferendumTimeline:
    """Display state of each lifecycle phase"""
    prepare: PhaseState
    voting: PhaseState
    enactment: PhaseState
    decision_active: bool
    confirmation_active: bool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _align(now: Optional[datetime], reference: datetime) -> datetime:
    """Use `reference`'s timezone awareness for `now`"""
    if now is None:
        now = _utcnow()
    if reference.tzinfo is None and now.tzinfo is not None:
        return now.astimezone(timezone.utc).replace(tzinfo=None)
    if reference.tzinfo is not None and now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


def _elapsed_minutes(spec: PeriodSpec, now: Optional[datetime]) -> float:
    if spec.end_at is None:
        return 0

    now = _align(now, spec.end_at)
    if now >= spec.end_at:
        return spec.total_minutes
    if now <= spec.start_at:
        return 0
    return _whole_minutes(now - spec.start_at)


def period_progress(spec: PeriodSpec, now: Optional[datetime] = None) -> float:
    """Percentage of the period elapsed, at minute granularity"""
    if spec.end_at is None or spec.total_minutes <= 0:
        return 0

    now = _align(now, spec.end_at)
    if now >= spec.end_at:
        return 100
    if now <= spec.start_at:
        return 0

    return _whole_minutes(now - spec.start_at) / spec.total_minutes * 100


def period_progress_label(spec: PeriodSpec, now: Optional[datetime] = None) -> ProgressLabel:
    """
    Elapsed/total in the coarsest sensible unit.

    Minutes below an hour, hours below a day, days otherwise. Elapsed and
    total are rounded separately.
    """
    total_minutes = spec.total_minutes
    elapsed_minutes = _elapsed_minutes(spec, now)

    if total_minutes < MINUTES_PER_HOUR:
        unit, divisor = PeriodUnit.MINUTES, 1
    elif total_minutes < MINUTES_PER_DAY:
        unit, divisor = PeriodUnit.HOURS, MINUTES_PER_HOUR
    else:
        unit, divisor = PeriodUnit.DAYS, MINUTES_PER_DAY

    return ProgressLabel(
        elapsed=_round_half_up(elapsed_minutes / divisor),
        total=_round_half_up(total_minutes / divisor),
        unit=unit,
    )


def blocks_to_days(blocks: int, block_time_ms: int) -> float:
    return blocks * block_time_ms / MS_PER_DAY


def decision_progress(
    ends_at: Optional[datetime],
    decision_period_blocks: int,
    block_time_ms: int,
    now: Optional[datetime] = None
) -> float:
    """Percentage of the decision period elapsed"""
    spec = PeriodSpec(
        end_at=ends_at,
        duration_days=blocks_to_days(decision_period_blocks, block_time_ms),
    )
    return period_progress(spec, now)


def period_spec_for_track(
    track: TrackInfo,
    period: TrackPeriod,
    ends_at: Optional[datetime],
    block_time_ms: int
) -> PeriodSpec:
    blocks = getattr(track, period.value)
    return PeriodSpec(end_at=ends_at, duration_days=blocks_to_days(blocks, block_time_ms))


def resolve_timeline(
    prepare_period_ended: bool,
    decision_period_ended: bool,
    confirmation_period_ended: bool,
    proposal_has_failed: bool
) -> ReferendumTimeline:
    """Which lifecycle phases are active or completed"""
    if proposal_has_failed or decision_period_ended:
        voting = PhaseState.COMPLETED
    elif prepare_period_ended:
        voting = PhaseState.ACTIVE
    else:
        voting = PhaseState.INACTIVE

    if proposal_has_failed:
        enactment = PhaseState.INACTIVE
    elif confirmation_period_ended:
        enactment = PhaseState.COMPLETED
    elif decision_period_ended:
        enactment = PhaseState.ACTIVE
    else:
        enactment = PhaseState.INACTIVE

    decision_active = prepare_period_ended and not decision_period_ended
    confirmation_active = decision_period_ended and not confirmation_period_ended

    return ReferendumTimeline(
        prepare=PhaseState.COMPLETED if prepare_period_ended else PhaseState.ACTIVE,
        voting=voting,
        enactment=enactment,
        decision_active=decision_active and not proposal_has_failed,
        confirmation_active=confirmation_active and not proposal_has_failed,
    )


@dataclass(frozen=True)
class RelativeTime:
    days: int
    hours: int
    minutes: int
    is_past: bool


def relative_time(target: datetime, now: Optional[datetime] = None) -> RelativeTime:
    """Days/hours/minutes between now and `target`"""
    now = _align(now, target)
    diff = target - now
    total_minutes = int(abs(diff.total_seconds()) // 60)
    days, remainder = divmod(total_minutes, MINUTES_PER_DAY)
    hours, minutes = divmod(remainder, MINUTES_PER_HOUR)
    return RelativeTime(days=days, hours=hours, minutes=minutes, is_past=diff.total_seconds() < 0)


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'' if value == 1 else 's'}"


def format_relative_time(relative: RelativeTime) -> str:
    """Human-readable relative time, e.g. 'in 80 days, 12 hours' or '3 hours ago'"""
    parts = []
    if relative.days > 0:
        parts.append(_plural(relative.days, "day"))
    if relative.hours > 0:
        parts.append(_plural(relative.hours, "hour"))
    if relative.minutes > 0 and len(parts) < 2:
        parts.append(_plural(relative.minutes, "minute"))

    if not parts:
        return "just now" if relative.is_past else "any moment"

    text = ", ".join(parts)
    return f"{text} ago" if relative.is_past else f"in {text}"
