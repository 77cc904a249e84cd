"""
Delegated vote aggregation

Normalizes indexer vote records into account votes and rolls up the voting
power and capital delegated to a voter. All balance arithmetic stays in
Python ints so native-token amounts never lose precision.
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from .models import IndexerVote, IndexerVoteBalance
from .types import AccountVote, SplitAbstainVote, SplitVote, StandardVote

logger = logging.getLogger(__name__)

_AYE_DECISIONS = frozenset({"yes", "aye"})
_NAY_DECISIONS = frozenset({"no", "nay"})
_SPLIT_DECISIONS = frozenset({"split", "splitabstain", "abstain"})

# Display convention carried over from the portal; not a protocol constant
SPLIT_VOTES_DIVISOR = 10


@dataclass(frozen=True)
class DelegatedCohortVote:
    """A delegate's vote on a referendum with the delegations behind it"""
    referendum_index: int
    account: str
    is_delegating: bool
    is_standard: bool
    is_split: bool
    is_split_abstain: bool
    is_abstain: bool
    balance: int
    aye: bool
    conviction: Optional[int]
    votes: int
    delegated_votes: int
    delegated_capital: int
    aye_balance: Optional[int] = None
    nay_balance: Optional[int] = None
    abstain_balance: Optional[int] = None
    aye_votes: Optional[int] = None
    nay_votes: Optional[int] = None
    abstain_votes: Optional[int] = None

    @property
    def total_votes(self) -> int:
        """Self plus delegated voting power"""
        return self.votes + self.delegated_votes


def normalize_vote(record: IndexerVote) -> List[AccountVote]:
    """
    Fan an indexer vote out into single-sided account votes.

    Standard votes map to one entry, split votes to an aye and a nay entry and
    split-abstain votes to aye, nay and abstain entries, so tallies can be
    taken per side regardless of the ballot shape.
    """
    balance = record.balance or IndexerVoteBalance()
    decision = (record.decision or "").lower()

    if balance.value is not None and decision in _AYE_DECISIONS | _NAY_DECISIONS:
        return [StandardVote(
            balance=balance.value,
            aye=decision in _AYE_DECISIONS,
            conviction=record.lock_period or 0,
        )]

    aye = balance.aye or 0
    nay = balance.nay or 0

    # balance keys only pick the shape when the decision does not name one
    if decision not in _SPLIT_DECISIONS:
        if balance.abstain is not None:
            decision = "splitabstain"
        elif balance.aye is not None or balance.nay is not None:
            decision = "split"

    if decision in ("splitabstain", "abstain"):
        return [
            SplitAbstainVote(aye=aye),
            SplitAbstainVote(nay=nay),
            SplitAbstainVote(abstain=balance.abstain or 0),
        ]

    if decision == "split":
        return [SplitVote(aye=aye), SplitVote(nay=nay)]

    logger.warning(
        f"Unrecognized vote shape from {record.voter} on referendum {record.proposal.index}"
    )
    return []


def _delegated_capital(balance: Optional[IndexerVoteBalance]) -> int:
    if balance is None:
        return 0
    value = balance.value or 0
    if value > 0:
        return value
    return (balance.aye or 0) + (balance.nay or 0) + (balance.abstain or 0)


def format_cohort_vote(record: IndexerVote) -> DelegatedCohortVote:
    """Summarize a delegate's vote together with the delegations it carries"""
    delegated_votes = 0
    delegated_capital = 0
    for delegation in record.delegated_votes:
        delegated_votes += delegation.voting_power or 0
        delegated_capital += _delegated_capital(delegation.balance)

    balance = record.balance or IndexerVoteBalance()
    aye_balance = balance.aye or 0
    nay_balance = balance.nay or 0
    abstain_balance = balance.abstain or 0

    is_split = aye_balance > 0 and nay_balance > 0
    is_split_abstain = abstain_balance > 0 and (aye_balance > 0 or nay_balance > 0)
    is_standard = bool(balance.value)

    decision = (record.decision or "").lower()

    branches = {}
    if is_split or is_split_abstain:
        branches = dict(
            aye_balance=aye_balance,
            nay_balance=nay_balance,
            abstain_balance=abstain_balance,
            aye_votes=aye_balance // SPLIT_VOTES_DIVISOR,
            nay_votes=nay_balance // SPLIT_VOTES_DIVISOR,
            abstain_votes=abstain_balance // SPLIT_VOTES_DIVISOR,
        )

    return DelegatedCohortVote(
        referendum_index=record.proposal.index,
        account=record.voter,
        is_delegating=bool(record.delegated_to),
        is_standard=is_standard,
        is_split=is_split,
        is_split_abstain=is_split_abstain,
        is_abstain=decision == "abstain",
        balance=balance.value if balance.value else aye_balance + nay_balance + abstain_balance,
        aye=decision in _AYE_DECISIONS,
        conviction=record.lock_period,
        votes=record.self_voting_power or 0,
        delegated_votes=delegated_votes,
        delegated_capital=delegated_capital,
        **branches
    )
