"""
Core types and enums for OpenGov referendum computations.
"""

from enum import Enum, IntEnum
from typing import Optional, Union
from dataclasses import dataclass


PERBILL = 1_000_000_000


class TallyStatus(Enum):
    """Referendum finality states"""
    ONGOING = "ongoing"
    KILLED = "killed"
    CANCELLED = "cancelled"
    TIMED_OUT = "timedOut"
    APPROVED = "approved"
    REJECTED = "rejected"


class Conviction(IntEnum):
    """Conviction levels a standard vote may carry"""
    NONE = 0
    LOCKED_1X = 1
    LOCKED_2X = 2
    LOCKED_3X = 3
    LOCKED_4X = 4
    LOCKED_5X = 5
    LOCKED_6X = 6

    @property
    def tag(self) -> str:
        if self is Conviction.NONE:
            return "None"
        return f"Locked{self.value}x"


# Lock periods per conviction, as multiples of the vote locking period
CONVICTION_MULTIPLIERS = (0, 1, 2, 4, 8, 16, 32)


class VoteDecision(Enum):
    """Decision a delegate expressed on a referendum"""
    AYE = "aye"
    NAY = "nay"
    SPLIT = "split"
    ABSTAIN = "abstain"
    SPLIT_ABSTAIN = "splitAbstain"


class ProposalStatus(Enum):
    """Referendum statuses as reported by the indexer"""
    SUBMITTED = "Submitted"
    DECIDING = "Deciding"
    CONFIRM_STARTED = "ConfirmStarted"
    CONFIRMED = "Confirmed"
    APPROVED = "Approved"
    EXECUTED = "Executed"
    EXECUTION_FAILED = "ExecutionFailed"
    REJECTED = "Rejected"
    TIMED_OUT = "TimedOut"
    CANCELLED = "Cancelled"
    KILLED = "Killed"


PASSED_STATUSES = frozenset({
    ProposalStatus.EXECUTED,
    ProposalStatus.APPROVED,
    ProposalStatus.CONFIRMED,
})

CLOSED_STATUSES = PASSED_STATUSES | frozenset({
    ProposalStatus.REJECTED,
    ProposalStatus.TIMED_OUT,
    ProposalStatus.CANCELLED,
    ProposalStatus.KILLED,
    ProposalStatus.EXECUTION_FAILED,
})


class InfluenceStatus(Enum):
    """Effect of a delegate cohort's votes on a referendum outcome"""
    APPROVED = "approved"
    REJECTED = "rejected"
    FAILED = "failed"
    NO_IMPACT = "no_impact"


class DelegateRole(Enum):
    """Role of a member inside a decentralized voices cohort"""
    DAO = "dao"
    GUARDIAN = "guardian"


class CohortStatus(Enum):
    ONGOING = "ongoing"
    CLOSED = "closed"


# Curve parameters

@dataclass(frozen=True)
class ReciprocalCurve:
    """Reciprocal threshold curve, perbill-scaled integers"""
    factor: int
    x_offset: int
    y_offset: int


@dataclass(frozen=True)
class LinearDecreasingCurve:
    """Linearly decreasing threshold curve, perbill-scaled integers"""
    length: int
    floor: int
    ceil: int


TrackCurve = Union[ReciprocalCurve, LinearDecreasingCurve]


@dataclass(frozen=True)
class TrackInfo:
    """Governance track parameters. Periods are expressed in blocks."""
    track_id: int
    name: str
    description: str = ""
    prepare_period: int = 0
    decision_period: int = 0
    confirm_period: int = 0
    min_enactment_period: int = 0
    min_approval: Optional[TrackCurve] = None
    min_support: Optional[TrackCurve] = None

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


# Tally state machine

class TallyOutcome:
    """
    Finality state of a referendum.

    A referendum starts ONGOING and moves exactly once to a terminal state,
    which carries the block it occurred at. Terminal states are absorbing.
    """

    __slots__ = ("_status", "_block")

    def __init__(self, status: TallyStatus, block: Optional[int] = None):
        if status is TallyStatus.ONGOING:
            if block is not None:
                raise InvalidTallyTransition("An ongoing tally carries no block")
        elif block is None or block < 0:
            raise InvalidTallyTransition(f"Terminal tally {status.value} requires a block number")
        self._status = status
        self._block = block

    @property
    def status(self) -> TallyStatus:
        return self._status

    @property
    def block(self) -> Optional[int]:
        return self._block

    @property
    def is_ongoing(self) -> bool:
        return self._status is TallyStatus.ONGOING

    @property
    def is_terminal(self) -> bool:
        return self._status is not TallyStatus.ONGOING

    @classmethod
    def ongoing(cls) -> "TallyOutcome":
        return cls(TallyStatus.ONGOING)

    @classmethod
    def killed(cls, block: int) -> "TallyOutcome":
        return cls(TallyStatus.KILLED, block)

    @classmethod
    def cancelled(cls, block: int) -> "TallyOutcome":
        return cls(TallyStatus.CANCELLED, block)

    @classmethod
    def timed_out(cls, block: int) -> "TallyOutcome":
        return cls(TallyStatus.TIMED_OUT, block)

    @classmethod
    def approved(cls, block: int) -> "TallyOutcome":
        return cls(TallyStatus.APPROVED, block)

    @classmethod
    def rejected(cls, block: int) -> "TallyOutcome":
        return cls(TallyStatus.REJECTED, block)

    def transition(self, status: TallyStatus, block: int) -> "TallyOutcome":
        """Return the terminal outcome this ongoing tally moves to"""
        if self.is_terminal:
            raise InvalidTallyTransition(
                f"Tally already {self._status.value} at block {self._block}"
            )
        if status is TallyStatus.ONGOING:
            raise InvalidTallyTransition("Cannot transition to ongoing")
        return TallyOutcome(status, block)

    def __eq__(self, other):
        if not isinstance(other, TallyOutcome):
            return NotImplemented
        return self._status is other._status and self._block == other._block

    def __hash__(self):
        return hash((self._status, self._block))

    def __repr__(self):
        if self.is_ongoing:
            return "TallyOutcome(ongoing)"
        return f"TallyOutcome({self._status.value}, block={self._block})"


# Ballots

def _check_balance(name: str, value: int) -> None:
    if value < 0:
        raise InvalidVoteError(f"{name} balance must be non-negative, got {value}")


@dataclass(frozen=True)
class StandardVote:
    """Aye or nay ballot with a conviction"""
    balance: int
    aye: bool
    conviction: int = 0

    def __post_init__(self):
        _check_balance("standard", self.balance)

    @property
    def total_balance(self) -> int:
        return self.balance


@dataclass(frozen=True)
class SplitVote:
    """Balance split between aye and nay, without conviction"""
    aye: int = 0
    nay: int = 0

    def __post_init__(self):
        _check_balance("aye", self.aye)
        _check_balance("nay", self.nay)

    @property
    def total_balance(self) -> int:
        return self.aye + self.nay


@dataclass(frozen=True)
class SplitAbstainVote:
    """Balance split between aye, nay and abstain, without conviction"""
    aye: int = 0
    nay: int = 0
    abstain: int = 0

    def __post_init__(self):
        _check_balance("aye", self.aye)
        _check_balance("nay", self.nay)
        _check_balance("abstain", self.abstain)

    @property
    def total_balance(self) -> int:
        return self.aye + self.nay + self.abstain


AccountVote = Union[StandardVote, SplitVote, SplitAbstainVote]


# Lock output

class IndefiniteLock:
    """
    Unlock block of a vote on an ongoing referendum.

    Deliberately not orderable against block numbers.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "INDEFINITE"

    def __reduce__(self):
        return (IndefiniteLock, ())


INDEFINITE = IndefiniteLock()

UnlockBlock = Union[int, IndefiniteLock]


@dataclass(frozen=True)
class VoteLock:
    """Balance locked by a single vote and the block it unlocks at"""
    ref_id: int
    track: int
    total_balance: int
    conviction_tag: str
    unlock_block: UnlockBlock

    @property
    def is_indefinite(self) -> bool:
        return self.unlock_block is INDEFINITE

    def is_unlockable(self, current_block: int) -> bool:
        if self.is_indefinite:
            return False
        return self.unlock_block <= current_block


# Errors

class GovernanceEngineError(Exception):
    """Base exception for engine configuration and usage errors"""
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.error_code = error_code
        super().__init__(message)


class CurveConfigurationError(GovernanceEngineError):
    """Curve parameters are neither reciprocal nor linear decreasing"""
    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_CURVE")


class InvalidVoteError(GovernanceEngineError):
    """Ballot violates its shape invariants"""
    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_VOTE")


class InvalidTallyTransition(GovernanceEngineError):
    """Tally state change not permitted by the referendum state machine"""
    def __init__(self, message: str):
        super().__init__(message, error_code="INVALID_STATE")


class UnknownNetworkError(GovernanceEngineError):
    def __init__(self, network: str):
        super().__init__(f"Network '{network}' is not configured", error_code="NOT_FOUND")


class UnknownTrackError(GovernanceEngineError):
    def __init__(self, network: str, track: Union[str, int]):
        super().__init__(
            f"Track '{track}' is not configured for network '{network}'",
            error_code="NOT_FOUND"
        )
