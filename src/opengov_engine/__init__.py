"""
OpenGov Engine

Threshold curves, period progress, conviction vote locks and delegated vote
aggregation for Substrate OpenGov referenda.
"""

from .types import (
    PERBILL,
    CONVICTION_MULTIPLIERS,
    INDEFINITE,
    AccountVote,
    Conviction,
    IndefiniteLock,
    LinearDecreasingCurve,
    ReciprocalCurve,
    SplitAbstainVote,
    SplitVote,
    StandardVote,
    TallyOutcome,
    TallyStatus,
    TrackCurve,
    TrackInfo,
    VoteLock,
    GovernanceEngineError,
    CurveConfigurationError,
    InvalidVoteError,
    InvalidTallyTransition,
    UnknownNetworkError,
    UnknownTrackError,
)

from .curves import (
    Thresholds,
    build_curve,
    parse_curve,
    track_thresholds,
    threshold_value,
    curve_points,
)

from .periods import (
    PeriodSpec,
    ProgressLabel,
    ReferendumTimeline,
    period_progress,
    period_progress_label,
    decision_progress,
    resolve_timeline,
)

from .locks import (
    LockSummary,
    compute_lock,
    compute_all_locks,
    summarize_locks,
    parse_tally,
    parse_account_vote,
)

from .delegation import (
    DelegatedCohortVote,
    normalize_vote,
    format_cohort_vote,
)

from .cohorts import (
    calculate_cohort_stats,
    calculate_influence,
    calculate_voting_matrix,
    select_cohort,
    cohort_tenure_days,
)

from .dv_cohorts import DV_TRACKS, get_cohort, get_cohorts, get_current_cohort
from .turnout import track_turnout_percentages
from .networks import NETWORKS, NetworkDetails, get_network, get_track, find_track
from .config import EngineSettings, get_settings, lock_parameters

__all__ = [
    # Types
    "PERBILL",
    "CONVICTION_MULTIPLIERS",
    "INDEFINITE",
    "AccountVote",
    "Conviction",
    "IndefiniteLock",
    "LinearDecreasingCurve",
    "ReciprocalCurve",
    "SplitAbstainVote",
    "SplitVote",
    "StandardVote",
    "TallyOutcome",
    "TallyStatus",
    "TrackCurve",
    "TrackInfo",
    "VoteLock",

    # Errors
    "GovernanceEngineError",
    "CurveConfigurationError",
    "InvalidVoteError",
    "InvalidTallyTransition",
    "UnknownNetworkError",
    "UnknownTrackError",

    # Curves
    "Thresholds",
    "build_curve",
    "parse_curve",
    "track_thresholds",
    "threshold_value",
    "curve_points",

    # Periods
    "PeriodSpec",
    "ProgressLabel",
    "ReferendumTimeline",
    "period_progress",
    "period_progress_label",
    "decision_progress",
    "resolve_timeline",

    # Locks
    "LockSummary",
    "compute_lock",
    "compute_all_locks",
    "summarize_locks",
    "parse_tally",
    "parse_account_vote",

    # Delegation
    "DelegatedCohortVote",
    "normalize_vote",
    "format_cohort_vote",
    "calculate_cohort_stats",
    "calculate_influence",
    "calculate_voting_matrix",
    "select_cohort",
    "cohort_tenure_days",
    "DV_TRACKS",
    "get_cohorts",
    "get_current_cohort",
    "get_cohort",
    "track_turnout_percentages",

    # Networks & config
    "NETWORKS",
    "NetworkDetails",
    "get_network",
    "get_track",
    "find_track",
    "EngineSettings",
    "get_settings",
    "lock_parameters",
]

__version__ = "1.0.0"
