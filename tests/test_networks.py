"""
Tests for the network and track registry
"""

import pytest

from opengov_engine.networks import NETWORKS, find_track, get_network, get_track
from opengov_engine.types import CONVICTION_MULTIPLIERS, UnknownNetworkError, UnknownTrackError


def test_get_network():
    polkadot = get_network("Polkadot")
    assert polkadot.token_symbol == "DOT"
    assert polkadot.token_decimals == 10
    assert polkadot.vote_locking_period == 100800
    assert polkadot.conviction_multipliers == CONVICTION_MULTIPLIERS


def test_unknown_network():
    with pytest.raises(UnknownNetworkError) as excinfo:
        get_network("rococo")
    assert excinfo.value.error_code == "NOT_FOUND"


@pytest.mark.parametrize("lookup", [33, "medium_spender", "Medium Spender"])
def test_find_track(lookup):
    track = find_track("polkadot", lookup)
    assert track.track_id == 33
    assert track.display_name == "Medium Spender"


def test_find_missing_track():
    assert find_track("westend", "wish_for_change") is None
    assert find_track("unknown", 0) is None


def test_get_track_errors():
    with pytest.raises(UnknownTrackError):
        get_track("kusama", 77)
    with pytest.raises(UnknownNetworkError):
        get_track("unknown", 0)


def test_every_track_has_curves():
    for network in NETWORKS.values():
        ids = [t.track_id for t in network.tracks.values()]
        assert len(ids) == len(set(ids))
        for track in network.tracks.values():
            assert track.min_approval is not None
            assert track.min_support is not None
            assert track.decision_period > 0
