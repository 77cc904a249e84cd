"""
Approval and support threshold curves

OpenGov tracks lower the approval and support a referendum needs as its
decision period elapses. The chain evaluates the curves in perbill fixed-point
integer math; the evaluators here reproduce that truncation order exactly so
thresholds can be cross-checked against on-chain values.
"""

import logging
import math
from typing import Callable, Dict, Any, List, Optional, Mapping, NamedTuple

from .types import (
    PERBILL,
    ReciprocalCurve,
    LinearDecreasingCurve,
    TrackCurve,
    TrackInfo,
    CurveConfigurationError,
)

logger = logging.getLogger(__name__)

PERCENTAGE_MULTIPLIER = 100

CurveFunction = Callable[[float], float]


class Thresholds(NamedTuple):
    """Required approval and support, as fractions. None means no curve."""
    approval: Optional[float]
    support: Optional[float]


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero, like the runtime's fixed-point types"""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


def _to_perbill(fraction: float) -> int:
    return math.floor(fraction * PERBILL)


def reciprocal_threshold(curve: ReciprocalCurve, fraction: float) -> float:
    """
    Evaluate a reciprocal curve

    value = factor / (x + x_offset) + y_offset, with x the elapsed fraction
    in perbill and the division truncated before the offset is applied.
    """
    x = _to_perbill(fraction)
    denominator = x + curve.x_offset
    if denominator == 0:
        return 0.0

    v = _div_trunc(curve.factor * PERBILL, denominator)
    return max(0.0, (v + curve.y_offset) / PERBILL)


def linear_threshold(curve: LinearDecreasingCurve, fraction: float) -> float:
    """
    Evaluate a linear decreasing curve

    Falls from ceil to floor over `length` (perbill of the decision period)
    and stays at floor afterwards.
    """
    if curve.length == 0:
        return 0.0

    x = min(max(_to_perbill(fraction), 0), curve.length)
    slope = _div_trunc((curve.ceil - curve.floor) * PERBILL, curve.length)
    deducted = _div_trunc(slope * x, PERBILL)
    perbill = curve.ceil - deducted
    return max(0.0, perbill / PERBILL)


def build_curve(params: Optional[TrackCurve]) -> Optional[CurveFunction]:
    """
    Build the threshold function for a curve definition.

    Returns None when no curve is configured. Anything that is not one of the
    two supported curve shapes is a configuration error.
    """
    if params is None:
        return None
    if isinstance(params, ReciprocalCurve):
        return lambda fraction: reciprocal_threshold(params, fraction)
    if isinstance(params, LinearDecreasingCurve):
        return lambda fraction: linear_threshold(params, fraction)
    raise CurveConfigurationError(
        f"Unsupported curve definition of type {type(params).__name__}"
    )


def parse_curve(raw: Optional[Mapping[str, Any]]) -> Optional[TrackCurve]:
    """Parse the chain JSON shape of a curve into a curve variant"""
    if raw is None:
        return None

    reciprocal = raw.get("reciprocal")
    linear = raw.get("linearDecreasing")
    if reciprocal is not None and linear is not None:
        raise CurveConfigurationError("Curve defines both reciprocal and linearDecreasing")

    try:
        if reciprocal is not None:
            return ReciprocalCurve(
                factor=int(reciprocal["factor"]),
                x_offset=int(reciprocal["xOffset"]),
                y_offset=int(reciprocal["yOffset"]),
            )
        if linear is not None:
            return LinearDecreasingCurve(
                length=int(linear["length"]),
                floor=int(linear["floor"]),
                ceil=int(linear["ceil"]),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise CurveConfigurationError(f"Malformed curve parameters: {e}") from e

    raise CurveConfigurationError(f"Curve has no supported shape: {sorted(raw)}")


def track_thresholds(track: TrackInfo, fraction: float) -> Thresholds:
    """Approval and support required on a track at a point of its decision period"""
    approval_curve = build_curve(track.min_approval)
    support_curve = build_curve(track.min_support)
    return Thresholds(
        approval=approval_curve(fraction) if approval_curve else None,
        support=support_curve(fraction) if support_curve else None,
    )


def threshold_value(
    track: Optional[TrackInfo],
    elapsed_hours: Optional[float],
    decision_period_hours: float
) -> Optional[float]:
    """Approval threshold in percent after `elapsed_hours` of deciding"""
    if track is None or elapsed_hours is None or decision_period_hours <= 0:
        return None

    fraction = min(1.0, max(0.0, elapsed_hours / decision_period_hours))
    approval = track_thresholds(track, fraction).approval
    if approval is None:
        return None
    return round(approval * PERCENTAGE_MULTIPLIER, 2)


def curve_points(
    track: TrackInfo,
    decision_period_hours: int,
    step_hours: int = 1
) -> List[Dict[str, Any]]:
    """
    Threshold series over the decision period for charting.

    Each point carries the hour and the approval/support thresholds in
    percent (None where the track has no curve).
    """
    if step_hours <= 0:
        raise ValueError("step_hours must be positive")
    if decision_period_hours <= 0:
        return []

    approval_curve = build_curve(track.min_approval)
    support_curve = build_curve(track.min_support)

    points = []
    for hour in range(0, decision_period_hours + 1, step_hours):
        fraction = hour / decision_period_hours
        points.append({
            "hour": hour,
            "approval": approval_curve(fraction) * PERCENTAGE_MULTIPLIER if approval_curve else None,
            "support": support_curve(fraction) * PERCENTAGE_MULTIPLIER if support_curve else None,
        })

    logger.debug(f"Built {len(points)} curve points for track {track.name}")
    return points
