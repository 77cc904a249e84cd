"""
Shared fixtures for engine tests
"""

import pytest
from datetime import datetime, timezone

from opengov_engine.config import get_settings
from opengov_engine.delegation import DelegatedCohortVote
from opengov_engine.models import Cohort, CohortReferendum


@pytest.fixture
def now():
    """Fixed reference time"""
    return datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_cohort_vote(**overrides) -> DelegatedCohortVote:
    """Standard aye vote with no delegations unless overridden"""
    fields = dict(
        referendum_index=1,
        account="alice",
        is_delegating=False,
        is_standard=True,
        is_split=False,
        is_split_abstain=False,
        is_abstain=False,
        balance=1000,
        aye=True,
        conviction=1,
        votes=100,
        delegated_votes=0,
        delegated_capital=0,
    )
    fields.update(overrides)
    return DelegatedCohortVote(**fields)


@pytest.fixture
def cohort():
    return Cohort.model_validate({
        "index": 1,
        "network": "polkadot",
        "status": "closed",
        "startTime": "2024-02-26T18:11:12Z",
        "endTime": "2024-06-10T16:57:42Z",
        "delegates": [
            {"address": "alice", "role": "dao"},
            {"address": "bob", "role": "guardian"},
        ],
    })


@pytest.fixture
def cohort_referenda():
    return [
        CohortReferendum.model_validate({
            "index": 1, "status": "Executed", "trackNumber": 33,
            "title": "Fund tooling", "tally": {"ayes": "900", "nays": "100"},
        }),
        CohortReferendum.model_validate({
            "index": 2, "status": "Rejected", "trackNumber": 11,
            "tally": {"ayes": "100", "nays": "300"},
        }),
        CohortReferendum.model_validate({
            "index": 3, "status": "Deciding", "trackNumber": 0,
            "tally": {"ayes": "0", "nays": "0"},
        }),
    ]


@pytest.fixture
def cohort_votes():
    return [
        make_cohort_vote(referendum_index=1, account="alice", aye=True, votes=100),
        make_cohort_vote(referendum_index=2, account="alice", aye=True, votes=50),
        make_cohort_vote(referendum_index=2, account="bob", aye=False, votes=200),
        make_cohort_vote(
            referendum_index=3, account="bob", aye=False,
            is_standard=False, is_split=True, balance=150,
            aye_balance=100, nay_balance=50, abstain_balance=0,
            aye_votes=10, nay_votes=5, abstain_votes=0,
        ),
        make_cohort_vote(referendum_index=1, account="carol", aye=False, votes=10_000),
    ]
