"""
Tests for per-track turnout
"""

import pytest

from opengov_engine.models import TurnoutProposal
from opengov_engine.turnout import track_turnout_percentages


def proposal(index, track, votes):
    return TurnoutProposal.model_validate({
        "index": index,
        "trackNumber": track,
        "convictionVoting": votes,
    })


@pytest.fixture
def proposals():
    return [
        proposal(1, 0, [{"decision": "yes", "balance": {"value": "1500"}}]),
        proposal(2, 0, [
            {"decision": "yes", "balance": {"value": "300"}},
            {"decision": "abstain", "balance": {"abstain": "200"}},
            {"decision": "no", "balance": {"value": "999"}},
        ]),
        proposal(3, 33, [{"decision": "yes", "balance": {"value": "333"}}]),
        proposal(4, 999, [{"decision": "yes", "balance": {"value": "10"}}]),
        proposal(5, 34, []),
    ]


def test_track_turnout(proposals):
    turnout = track_turnout_percentages(proposals, 10_000, "polkadot")
    assert turnout == {"root": 10.0, "medium_spender": 3.33}


def test_zero_issuance(proposals):
    assert track_turnout_percentages(proposals, 0, "polkadot") == {}
