"""
Static OpenGov network and track configuration.
"""

import logging
from typing import Dict, Optional, Tuple, Union
from dataclasses import dataclass, field

from .types import (
    CONVICTION_MULTIPLIERS,
    LinearDecreasingCurve,
    ReciprocalCurve,
    TrackInfo,
    UnknownNetworkError,
    UnknownTrackError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkDetails:
    """OpenGov parameters of a relay chain"""
    key: str
    name: str
    block_time_ms: int
    token_decimals: int
    token_symbol: str
    vote_locking_period: int  # blocks
    conviction_multipliers: Tuple[int, ...] = CONVICTION_MULTIPLIERS
    tracks: Dict[str, TrackInfo] = field(default_factory=dict)


# Curves shared between tracks
_APPROVAL_ROOT = ReciprocalCurve(factor=222222224, x_offset=333333335, y_offset=333333332)
_APPROVAL_WHITELISTED = ReciprocalCurve(factor=270899180, x_offset=389830523, y_offset=305084738)
_APPROVAL_FULL = LinearDecreasingCurve(length=1000000000, floor=500000000, ceil=1000000000)
_APPROVAL_MEDIUM = LinearDecreasingCurve(length=821428571, floor=500000000, ceil=1000000000)
_APPROVAL_ADMIN = LinearDecreasingCurve(length=607142857, floor=500000000, ceil=1000000000)
_APPROVAL_TIPPER = LinearDecreasingCurve(length=357142857, floor=500000000, ceil=1000000000)

_SUPPORT_ROOT = LinearDecreasingCurve(length=1000000000, floor=0, ceil=500000000)
_SUPPORT_WHITELISTED = ReciprocalCurve(factor=8650766, x_offset=18867926, y_offset=41509433)
_SUPPORT_GENERAL_ADMIN = ReciprocalCurve(factor=49586777, x_offset=90909091, y_offset=-45454546)
_SUPPORT_BIG_SPENDER = ReciprocalCurve(factor=28326977, x_offset=53763445, y_offset=-26881723)
_SUPPORT_MEDIUM_SPENDER = ReciprocalCurve(factor=14377233, x_offset=27972031, y_offset=-13986016)
_SUPPORT_ADMIN = ReciprocalCurve(factor=7892829, x_offset=15544040, y_offset=-7772020)
_SUPPORT_BIG_TIPPER = ReciprocalCurve(factor=4149097, x_offset=8230453, y_offset=-4115227)
_SUPPORT_SMALL_TIPPER = ReciprocalCurve(factor=1620729, x_offset=3231018, y_offset=-1615509)

_DESCRIPTIONS = {
    "root": "Origin for General network-wide improvements",
    "whitelisted_caller": "Origin commanded by any members of the Polkadot Fellowship (no Dan grade needed)",
    "wish_for_change": "Origin for signaling that the network wishes for some change.",
    "staking_admin": "Origin for cancelling slashes.",
    "treasurer": "Origin for spending (any amount of) funds until the upper limit of the treasury",
    "lease_admin": "Origin able to force slot leases",
    "fellowship_admin": "Origin for managing the composition of the fellowship",
    "general_admin": "Origin for managing the registrar",
    "auction_admin": "Origin for starting auctions.",
    "referendum_canceller": "Origin able to cancel referenda.",
    "referendum_killer": "Origin able to kill referenda.",
    "small_tipper": "Origin able to spend small amounts from the treasury",
    "big_tipper": "Origin able to spend larger tips from the treasury",
    "small_spender": "Origin able to spend a small amount from the treasury",
    "medium_spender": "Origin able to spend a medium amount from the treasury",
    "big_spender": "Origin able to spend a large amount from the treasury",
}


def _track(track_id, name, prepare, decision, confirm, enactment, approval, support) -> TrackInfo:
    return TrackInfo(
        track_id=track_id,
        name=name,
        description=_DESCRIPTIONS.get(name, ""),
        prepare_period=prepare,
        decision_period=decision,
        confirm_period=confirm,
        min_enactment_period=enactment,
        min_approval=approval,
        min_support=support,
    )


def _index(*tracks: TrackInfo) -> Dict[str, TrackInfo]:
    return {track.name: track for track in tracks}


_POLKADOT_TRACKS = _index(
    _track(0, "root", 80, 200, 120, 50, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(1, "whitelisted_caller", 60, 200, 40, 30, _APPROVAL_WHITELISTED, _SUPPORT_WHITELISTED),
    _track(2, "wish_for_change", 1200, 403200, 14400, 100, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(10, "staking_admin", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(11, "treasurer", 1200, 403200, 1800, 14400, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(12, "lease_admin", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(13, "fellowship_admin", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(14, "general_admin", 1200, 403200, 1800, 100, _APPROVAL_ROOT, _SUPPORT_GENERAL_ADMIN),
    _track(15, "auction_admin", 1200, 403200, 1800, 100, _APPROVAL_ROOT, _SUPPORT_GENERAL_ADMIN),
    _track(20, "referendum_canceller", 1200, 100800, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(21, "referendum_killer", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(30, "small_tipper", 10, 140, 40, 10, _APPROVAL_TIPPER, _SUPPORT_SMALL_TIPPER),
    _track(31, "big_tipper", 100, 100800, 600, 100, _APPROVAL_TIPPER, _SUPPORT_BIG_TIPPER),
    _track(32, "small_spender", 2400, 403200, 7200, 14400, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(33, "medium_spender", 2400, 403200, 14400, 14400, _APPROVAL_MEDIUM, _SUPPORT_MEDIUM_SPENDER),
    _track(34, "big_spender", 2400, 403200, 28800, 14400, _APPROVAL_FULL, _SUPPORT_BIG_SPENDER),
)

_KUSAMA_TRACKS = _index(
    _track(0, "root", 1200, 201600, 14400, 14400, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(1, "whitelisted_caller", 300, 201600, 100, 100, _APPROVAL_WHITELISTED, _SUPPORT_WHITELISTED),
    _track(2, "wish_for_change", 1200, 201600, 14400, 100, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(10, "staking_admin", 1200, 201600, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(11, "treasurer", 1200, 201600, 1800, 14400, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(12, "lease_admin", 1200, 201600, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(13, "fellowship_admin", 1200, 201600, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(14, "general_admin", 1200, 201600, 1800, 100, _APPROVAL_ROOT, _SUPPORT_GENERAL_ADMIN),
    _track(15, "auction_admin", 1200, 201600, 1800, 100, _APPROVAL_ROOT, _SUPPORT_GENERAL_ADMIN),
    _track(20, "referendum_canceller", 1200, 100800, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(21, "referendum_killer", 1200, 201600, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(30, "small_tipper", 10, 100800, 100, 10, _APPROVAL_TIPPER, _SUPPORT_SMALL_TIPPER),
    _track(31, "big_tipper", 100, 100800, 600, 100, _APPROVAL_TIPPER, _SUPPORT_BIG_TIPPER),
    _track(32, "small_spender", 2400, 201600, 7200, 14400, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(33, "medium_spender", 2400, 201600, 14400, 14400, _APPROVAL_MEDIUM, _SUPPORT_MEDIUM_SPENDER),
    _track(34, "big_spender", 2400, 201600, 28800, 14400, _APPROVAL_FULL, _SUPPORT_BIG_SPENDER),
)

_WESTEND_TRACKS = _index(
    _track(0, "root", 80, 200, 120, 50, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(1, "whitelisted_caller", 60, 200, 40, 30, _APPROVAL_WHITELISTED, _SUPPORT_WHITELISTED),
    _track(10, "staking_admin", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(11, "treasurer", 1200, 403200, 1800, 14400, _APPROVAL_ROOT, _SUPPORT_ROOT),
    _track(12, "lease_admin", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(13, "fellowship_admin", 1200, 403200, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(14, "general_admin", 1200, 403200, 1800, 100, _APPROVAL_ROOT, _SUPPORT_GENERAL_ADMIN),
    _track(15, "auction_admin", 1200, 403200, 1800, 100, _APPROVAL_ROOT, _SUPPORT_GENERAL_ADMIN),
    _track(20, "referendum_canceller", 1200, 100800, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(21, "referendum_killer", 1200, 201600, 1800, 100, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(30, "small_tipper", 10, 140, 40, 10, _APPROVAL_TIPPER, _SUPPORT_SMALL_TIPPER),
    _track(31, "big_tipper", 100, 100800, 600, 100, _APPROVAL_TIPPER, _SUPPORT_BIG_TIPPER),
    _track(32, "small_spender", 2400, 403200, 7200, 14400, _APPROVAL_ADMIN, _SUPPORT_ADMIN),
    _track(33, "medium_spender", 2400, 403200, 14400, 14400, _APPROVAL_MEDIUM, _SUPPORT_MEDIUM_SPENDER),
    _track(34, "big_spender", 2400, 403200, 28800, 14400, _APPROVAL_FULL, _SUPPORT_BIG_SPENDER),
)

NETWORKS: Dict[str, NetworkDetails] = {
    "polkadot": NetworkDetails(
        key="polkadot",
        name="Polkadot",
        block_time_ms=6000,
        token_decimals=10,
        token_symbol="DOT",
        vote_locking_period=100800,
        tracks=_POLKADOT_TRACKS,
    ),
    "kusama": NetworkDetails(
        key="kusama",
        name="Kusama",
        block_time_ms=6000,
        token_decimals=12,
        token_symbol="KSM",
        vote_locking_period=100800,
        tracks=_KUSAMA_TRACKS,
    ),
    "westend": NetworkDetails(
        key="westend",
        name="Westend",
        block_time_ms=6000,
        token_decimals=12,
        token_symbol="WND",
        vote_locking_period=100800,
        tracks=_WESTEND_TRACKS,
    ),
}


def get_network(network: str) -> NetworkDetails:
    details = NETWORKS.get(network.lower())
    if details is None:
        raise UnknownNetworkError(network)
    return details


def find_track(network: str, track: Union[str, int]) -> Optional[TrackInfo]:
    """Look a track up by name or on-chain id; None when it is not configured"""
    details = NETWORKS.get(network.lower())
    if details is None:
        logger.warning(f"Track lookup on unconfigured network '{network}'")
        return None

    if isinstance(track, int):
        for info in details.tracks.values():
            if info.track_id == track:
                return info
        return None
    return details.tracks.get(track.lower().replace(" ", "_"))


def get_track(network: str, track: Union[str, int]) -> TrackInfo:
    info = find_track(get_network(network).key, track)
    if info is None:
        raise UnknownTrackError(network, track)
    return info
