"""
Decentralized voices cohort analytics

Participation, win rate, influence and voting-matrix views over the votes of
a delegate cohort, built from formatted cohort votes.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .delegation import DelegatedCohortVote
from .models import Cohort, CohortReferendum
from .networks import find_track
from .types import (
    CLOSED_STATUSES,
    CohortStatus,
    PASSED_STATUSES,
    DelegateRole,
    InfluenceStatus,
    ProposalStatus,
    VoteDecision,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class VoteStats:
    aye_count: int
    nay_count: int
    abstain_count: int
    participation: float
    win_rate: float


@dataclass(frozen=True)
class DelegateStats:
    address: str
    role: DelegateRole
    vote_stats: VoteStats


@dataclass(frozen=True)
class DelegateVote:
    address: str
    decision: VoteDecision
    voting_power: int
    balance: int
    conviction: int
    percentage: float = 0.0


@dataclass(frozen=True)
class ReferendumInfluence:
    index: int
    title: str
    track: str
    status: Optional[ProposalStatus]
    aye_voting_power: int
    nay_voting_power: int
    aye_percent: float
    nay_percent: float
    influence: InfluenceStatus
    dv_total_voting_power: int
    total_aye_voting_power: int
    total_nay_voting_power: int
    delegate_votes: List[DelegateVote] = field(default_factory=list)
    guardian_votes: List[DelegateVote] = field(default_factory=list)


@dataclass(frozen=True)
class DelegateVotingRow:
    address: str
    role: DelegateRole
    votes: Dict[int, VoteDecision]
    participation: float
    aye_rate: float
    active_count: int
    total_refs: int
    total_voting_power: int


def _percent(part: int, whole: int) -> float:
    """Percentage with two decimals, computed in integers"""
    if whole <= 0:
        return 0
    return (part * 10000 // whole) / 100


def _is_passed(status: Optional[ProposalStatus]) -> bool:
    return status in PASSED_STATUSES


def calculate_cohort_stats(
    votes: Sequence[DelegatedCohortVote],
    referenda: Sequence[CohortReferendum],
    cohort: Cohort
) -> List[DelegateStats]:
    """Aye/nay/abstain counts, participation and win rate per delegate"""
    referenda_by_index = {r.index: r for r in referenda}
    total_refs = len(referenda)

    stats = []
    for delegate in cohort.delegates:
        aye_count = nay_count = abstain_count = 0
        voted_count = winning_votes = 0

        for vote in votes:
            if vote.account != delegate.address:
                continue
            referendum = referenda_by_index.get(vote.referendum_index)
            if referendum is None:
                continue

            voted_count += 1
            if vote.is_split or vote.is_split_abstain:
                aye_count += 1 if (vote.aye_balance or 0) > 0 else 0
                nay_count += 1 if (vote.nay_balance or 0) > 0 else 0
                abstain_count += 1 if (vote.abstain_balance or 0) > 0 else 0
            elif vote.is_abstain:
                abstain_count += 1
            elif vote.aye:
                aye_count += 1
            else:
                nay_count += 1

            if referendum.status in CLOSED_STATUSES:
                passed = _is_passed(referendum.status)
                if passed == vote.aye:
                    winning_votes += 1

        stats.append(DelegateStats(
            address=delegate.address,
            role=delegate.role,
            vote_stats=VoteStats(
                aye_count=aye_count,
                nay_count=nay_count,
                abstain_count=abstain_count,
                participation=voted_count / total_refs * 100 if total_refs else 0,
                win_rate=winning_votes / voted_count * 100 if voted_count else 0,
            ),
        ))

    return stats


def _influence_status(aye_power: int, nay_power: int, referendum: CohortReferendum) -> InfluenceStatus:
    if aye_power == 0 and nay_power == 0:
        return InfluenceStatus.NO_IMPACT
    if _is_passed(referendum.status):
        return InfluenceStatus.APPROVED if aye_power >= nay_power else InfluenceStatus.FAILED
    if referendum.status is ProposalStatus.REJECTED:
        return InfluenceStatus.REJECTED if nay_power >= aye_power else InfluenceStatus.FAILED
    return InfluenceStatus.NO_IMPACT


def _decision_and_power(vote: DelegatedCohortVote) -> Tuple[VoteDecision, int, int, int]:
    """Decision, total power and the aye/nay power it contributes"""
    if vote.is_split or vote.is_split_abstain:
        aye = vote.aye_votes or 0
        nay = vote.nay_votes or 0
        abstain = vote.abstain_votes or 0
        decision = VoteDecision.SPLIT_ABSTAIN if vote.is_split_abstain else VoteDecision.SPLIT
        return decision, aye + nay + abstain, aye, nay

    total = vote.total_votes
    if vote.aye:
        return VoteDecision.AYE, total, total, 0
    if not vote.is_abstain:
        return VoteDecision.NAY, total, 0, total
    return VoteDecision.ABSTAIN, total, 0, 0


def calculate_influence(
    votes: Sequence[DelegatedCohortVote],
    cohort: Cohort,
    referenda: Sequence[CohortReferendum],
    network: Optional[str] = None
) -> List[ReferendumInfluence]:
    """How the cohort's voting power weighed on each referendum"""
    votes_by_referendum: Dict[int, List[DelegatedCohortVote]] = {}
    for vote in votes:
        votes_by_referendum.setdefault(vote.referendum_index, []).append(vote)

    delegates = {d.address: d for d in cohort.delegates}

    results = []
    for referendum in referenda:
        aye_power = 0
        nay_power = 0
        delegate_votes = []
        guardian_votes = []

        for vote in votes_by_referendum.get(referendum.index, []):
            delegate = delegates.get(vote.account)
            if delegate is None:
                logger.debug(f"Skipping vote from non-cohort account {vote.account}")
                continue

            decision, power, aye, nay = _decision_and_power(vote)
            aye_power += aye
            nay_power += nay

            entry = (vote.account, decision, power, vote.balance, vote.conviction or 0)
            if delegate.role is DelegateRole.DAO:
                delegate_votes.append(entry)
            else:
                guardian_votes.append(entry)

        total_aye = referendum.tally.ayes if referendum.tally else 0
        total_nay = referendum.tally.nays if referendum.tally else 0
        turnout = total_aye + total_nay

        def with_share(entries):
            return [
                DelegateVote(
                    address=address,
                    decision=decision,
                    voting_power=power,
                    balance=balance,
                    conviction=conviction,
                    percentage=_percent(power, turnout),
                )
                for address, decision, power, balance, conviction in entries
            ]

        track_name = ""
        if network is not None and referendum.track_number is not None:
            track = find_track(network, referendum.track_number)
            if track is not None:
                track_name = track.display_name

        results.append(ReferendumInfluence(
            index=referendum.index,
            title=referendum.title or "Untitled",
            track=track_name,
            status=referendum.status,
            aye_voting_power=aye_power,
            nay_voting_power=nay_power,
            aye_percent=_percent(total_aye, turnout),
            nay_percent=_percent(total_nay, turnout),
            influence=_influence_status(aye_power, nay_power, referendum),
            dv_total_voting_power=aye_power + nay_power,
            total_aye_voting_power=total_aye,
            total_nay_voting_power=total_nay,
            delegate_votes=with_share(delegate_votes),
            guardian_votes=with_share(guardian_votes),
        ))

    return results


def _matrix_decision(vote: DelegatedCohortVote) -> Tuple[VoteDecision, int]:
    if vote.is_split or vote.is_split_abstain:
        aye = vote.aye_balance or 0
        nay = vote.nay_balance or 0
        abstain = vote.abstain_balance or 0
        if aye >= nay and aye >= abstain:
            decision = VoteDecision.AYE
        elif nay >= aye and nay >= abstain:
            decision = VoteDecision.NAY
        else:
            decision = VoteDecision.ABSTAIN
        power = (vote.aye_votes or 0) + (vote.nay_votes or 0) + (vote.abstain_votes or 0)
        return decision, power

    decision, power, _, _ = _decision_and_power(vote)
    return decision, power


def calculate_voting_matrix(
    votes: Sequence[DelegatedCohortVote],
    cohort: Cohort,
    referenda: Sequence[CohortReferendum]
) -> Tuple[List[DelegateVotingRow], List[int]]:
    """Decision of every delegate on every referendum, with sorted referendum indices"""
    referendum_indices = sorted(r.index for r in referenda)
    valid_indices = set(referendum_indices)
    total_refs = len(referenda)

    votes_by_account: Dict[str, Dict[int, DelegatedCohortVote]] = {}
    for vote in votes:
        # a later vote on the same referendum replaces the earlier one
        votes_by_account.setdefault(vote.account, {})[vote.referendum_index] = vote

    rows = []
    for delegate in cohort.delegates:
        decisions: Dict[int, VoteDecision] = {}
        total_power = 0

        for ref_index, vote in votes_by_account.get(delegate.address, {}).items():
            if ref_index not in valid_indices:
                continue
            decision, power = _matrix_decision(vote)
            decisions[ref_index] = decision
            total_power += power

        active_count = len(decisions)
        aye_count = sum(1 for d in decisions.values() if d is VoteDecision.AYE)

        rows.append(DelegateVotingRow(
            address=delegate.address,
            role=delegate.role,
            votes=decisions,
            participation=active_count / total_refs * 100 if total_refs else 0,
            aye_rate=aye_count / active_count * 100 if active_count else 0,
            active_count=active_count,
            total_refs=total_refs,
            total_voting_power=total_power,
        ))

    return rows, referendum_indices


def cohort_tenure_days(cohort: Cohort, now: Optional[datetime] = None) -> int:
    """Whole days between the cohort's start and its end (or now)"""
    end = cohort.end_time
    if end is None:
        end = now or datetime.now(timezone.utc)

    start = cohort.start_time
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)

    days = int((end - start).total_seconds() // SECONDS_PER_DAY)
    return max(0, days)


def select_cohort(cohorts: Sequence[Cohort], index: Optional[int] = None) -> Optional[Cohort]:
    """The cohort with `index`, or the ongoing one when no index is given"""
    for cohort in cohorts:
        if index is None and cohort.status is CohortStatus.ONGOING:
            return cohort
        if index is not None and cohort.index == index:
            return cohort
    return None
