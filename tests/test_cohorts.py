"""
Tests for decentralized voices cohort analytics
"""

import pytest
from datetime import datetime, timezone

from opengov_engine.cohorts import (
    calculate_cohort_stats,
    calculate_influence,
    calculate_voting_matrix,
    cohort_tenure_days,
    select_cohort,
)
from opengov_engine.models import Cohort
from opengov_engine.types import DelegateRole, InfluenceStatus, VoteDecision

from conftest import make_cohort_vote


def test_cohort_stats(cohort_votes, cohort_referenda, cohort):
    """Test participation and win rate per delegate"""
    stats = {s.address: s for s in calculate_cohort_stats(cohort_votes, cohort_referenda, cohort)}

    assert set(stats) == {"alice", "bob"}

    alice = stats["alice"].vote_stats
    assert alice.aye_count == 2
    assert alice.nay_count == 0
    assert alice.participation == pytest.approx(66.67, abs=0.01)
    assert alice.win_rate == 50

    bob = stats["bob"]
    assert bob.role is DelegateRole.GUARDIAN
    assert bob.vote_stats.aye_count == 1
    assert bob.vote_stats.nay_count == 2
    assert bob.vote_stats.win_rate == 50


def test_cohort_stats_without_referenda(cohort_votes, cohort):
    stats = calculate_cohort_stats(cohort_votes, [], cohort)
    assert all(s.vote_stats.participation == 0 for s in stats)
    assert all(s.vote_stats.win_rate == 0 for s in stats)


def test_influence(cohort_votes, cohort, cohort_referenda):
    """Test how cohort voting power weighed on each referendum"""
    results = {r.index: r for r in calculate_influence(cohort_votes, cohort, cohort_referenda, "polkadot")}

    first = results[1]
    assert first.influence is InfluenceStatus.APPROVED
    assert first.track == "Medium Spender"
    assert first.title == "Fund tooling"
    assert first.aye_voting_power == 100
    assert first.aye_percent == 90.0
    assert first.nay_percent == 10.0
    assert [v.address for v in first.delegate_votes] == ["alice"]
    assert first.delegate_votes[0].percentage == 10.0
    assert first.guardian_votes == []

    second = results[2]
    assert second.influence is InfluenceStatus.REJECTED
    assert second.title == "Untitled"
    assert second.nay_voting_power == 200
    assert second.guardian_votes[0].decision is VoteDecision.NAY
    assert second.guardian_votes[0].percentage == 50.0
    assert second.delegate_votes[0].percentage == 12.5

    third = results[3]
    assert third.influence is InfluenceStatus.NO_IMPACT
    assert third.track == "Root"
    assert third.dv_total_voting_power == 15
    assert third.guardian_votes[0].decision is VoteDecision.SPLIT
    assert third.guardian_votes[0].percentage == 0


def test_influence_failed_when_outvoted(cohort, cohort_referenda):
    votes = [make_cohort_vote(referendum_index=1, account="bob", aye=False, votes=500)]
    results = calculate_influence(votes, cohort, cohort_referenda[:1])
    assert results[0].influence is InfluenceStatus.FAILED
    assert results[0].track == ""


def test_influence_includes_delegated_power(cohort, cohort_referenda):
    votes = [make_cohort_vote(referendum_index=1, votes=100, delegated_votes=250)]
    results = calculate_influence(votes, cohort, cohort_referenda[:1])
    assert results[0].aye_voting_power == 350


def test_voting_matrix(cohort_votes, cohort, cohort_referenda):
    rows, indices = calculate_voting_matrix(cohort_votes, cohort, list(reversed(cohort_referenda)))
    assert indices == [1, 2, 3]

    rows = {row.address: row for row in rows}
    alice = rows["alice"]
    assert alice.votes == {1: VoteDecision.AYE, 2: VoteDecision.AYE}
    assert alice.total_voting_power == 150
    assert alice.aye_rate == 100
    assert alice.total_refs == 3

    bob = rows["bob"]
    assert bob.votes == {2: VoteDecision.NAY, 3: VoteDecision.AYE}
    assert bob.aye_rate == 50
    assert bob.total_voting_power == 215
    assert bob.active_count == 2


def test_voting_matrix_ignores_unknown_referenda(cohort, cohort_referenda):
    votes = [make_cohort_vote(referendum_index=99)]
    rows, _ = calculate_voting_matrix(votes, cohort, cohort_referenda)
    assert rows[0].votes == {}
    assert rows[0].participation == 0


def test_cohort_tenure_days(cohort):
    assert cohort_tenure_days(cohort) == 104


def test_ongoing_cohort_tenure():
    cohort = Cohort(
        index=2,
        network="kusama",
        status="ongoing",
        start_time=datetime(2025, 1, 1),
    )
    now = datetime(2025, 1, 31, 12, tzinfo=timezone.utc)
    assert cohort_tenure_days(cohort, now) == 30


def test_select_cohort(cohort):
    ongoing = Cohort(index=2, network="polkadot", status="ongoing", start_time=datetime(2025, 1, 1))
    cohorts = [cohort, ongoing]
    assert select_cohort(cohorts) is ongoing
    assert select_cohort(cohorts, 1) is cohort
    assert select_cohort(cohorts, 5) is None
