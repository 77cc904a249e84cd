"""
Per-track turnout analytics.
"""

import logging
from typing import Dict, Sequence

from .models import TurnoutProposal, TurnoutVote
from .networks import find_track

logger = logging.getLogger(__name__)

_SUPPORT_DECISIONS = frozenset({"yes", "abstain"})


def _support_balance(vote: TurnoutVote) -> int:
    # Support counts aye and abstain balances
    if vote.decision not in _SUPPORT_DECISIONS:
        return 0
    balance = vote.balance
    return balance.value or balance.aye or balance.abstain or 0


def track_turnout_percentages(
    proposals: Sequence[TurnoutProposal],
    active_issuance: int,
    network: str
) -> Dict[str, float]:
    """
    Average support per proposal on each track, as a percentage of the
    active issuance, rounded to two decimals.
    """
    if active_issuance <= 0:
        logger.warning("Active issuance is zero, cannot compute turnout")
        return {}

    totals: Dict[int, int] = {}
    counts: Dict[int, int] = {}
    for proposal in proposals:
        # track 0 is root, so only a missing track number is skipped
        if proposal.track_number is None or not proposal.conviction_voting:
            continue
        support = sum(_support_balance(vote) for vote in proposal.conviction_voting)
        totals[proposal.track_number] = totals.get(proposal.track_number, 0) + support
        counts[proposal.track_number] = counts.get(proposal.track_number, 0) + 1

    percentages = {}
    for track_number, total in totals.items():
        track = find_track(network, track_number)
        if track is None:
            logger.debug(f"Skipping turnout for unknown track {track_number} on {network}")
            continue
        average = total // counts[track_number]
        turnout = (average * 10000 // active_issuance) / 100
        percentages[track.name] = round(turnout, 2)

    return percentages
