"""
Conviction vote lock calculation

Works out, from a voter's ballots and the referenda tallies, how much balance
each vote locks and the block at which the lock expires. A conviction only
extends the lock when the vote was cast on the winning side.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

from .types import (
    INDEFINITE,
    AccountVote,
    Conviction,
    SplitAbstainVote,
    SplitVote,
    StandardVote,
    TallyOutcome,
    TallyStatus,
    UnlockBlock,
    VoteLock,
)

logger = logging.getLogger(__name__)

_IMMEDIATE_UNLOCK = frozenset({
    TallyStatus.KILLED,
    TallyStatus.CANCELLED,
    TallyStatus.TIMED_OUT,
})

_DECIDED = frozenset({
    TallyStatus.APPROVED,
    TallyStatus.REJECTED,
})

_AYE_BIT = 0x80
_CONVICTION_MASK = 0x7F

VotingCasting = Sequence[Tuple[int, AccountVote]]
ReferendaTallies = Union[Mapping[int, TallyOutcome], Iterable[Tuple[int, TallyOutcome]]]


@dataclass(frozen=True)
class LockSummary:
    """Aggregate view over a voter's locks at a given block"""
    locked_balance: int
    unlockable_balance: int
    next_unlock_block: Optional[int]
    indefinite_count: int


def vote_balance(vote: AccountVote) -> Optional[int]:
    """Total balance committed by a ballot"""
    if isinstance(vote, StandardVote):
        return vote.balance
    if isinstance(vote, SplitAbstainVote):
        return vote.aye + vote.nay + vote.abstain
    if isinstance(vote, SplitVote):
        return vote.aye + vote.nay
    return None


def conviction_tag(index: int) -> str:
    try:
        return Conviction(index).tag
    except ValueError:
        logger.warning(f"Unknown conviction index {index}, treating as no conviction")
        return Conviction.NONE.tag


def _conviction_info(vote: AccountVote, tally: TallyOutcome) -> Tuple[int, str]:
    if isinstance(vote, StandardVote):
        status = getattr(tally, "status", None)
        won = (
            (status is TallyStatus.APPROVED and vote.aye)
            or (status is TallyStatus.REJECTED and not vote.aye)
        )
        if won:
            return vote.conviction, conviction_tag(vote.conviction)
    return 0, Conviction.NONE.tag


def _multiplier(conviction_multipliers: Sequence[int], conviction: int) -> int:
    if 0 <= conviction < len(conviction_multipliers):
        return conviction_multipliers[conviction] or 0
    logger.debug(f"No multiplier configured for conviction {conviction}")
    return 0


def _unlock_block(
    tally: TallyOutcome,
    lock_period_blocks: int,
    conviction_multipliers: Sequence[int],
    conviction: int
) -> Optional[UnlockBlock]:
    status = getattr(tally, "status", None)
    if status is TallyStatus.ONGOING:
        return INDEFINITE
    if status in _IMMEDIATE_UNLOCK:
        return tally.block
    if status in _DECIDED:
        lock_blocks = lock_period_blocks * _multiplier(conviction_multipliers, conviction)
        return tally.block + lock_blocks
    return None


def compute_lock(
    ref_id: int,
    track: int,
    vote: AccountVote,
    tally: TallyOutcome,
    lock_period_blocks: int,
    conviction_multipliers: Sequence[int]
) -> Optional[VoteLock]:
    """
    Lock produced by one vote on one referendum.

    Returns None when the ballot carries no balance or the tally is not a
    recognized outcome.
    """
    total_balance = vote_balance(vote)
    if not total_balance:
        return None

    conviction, tag = _conviction_info(vote, tally)
    unlock_block = _unlock_block(tally, lock_period_blocks, conviction_multipliers, conviction)
    if unlock_block is None:
        logger.warning(f"Unrecognized tally for referendum {ref_id}: {tally!r}")
        return None

    return VoteLock(
        ref_id=ref_id,
        track=track,
        total_balance=total_balance,
        conviction_tag=tag,
        unlock_block=unlock_block,
    )


def compute_all_locks(
    votes_by_track: Iterable[Tuple[int, VotingCasting]],
    referenda: ReferendaTallies,
    lock_period_blocks: int,
    conviction_multipliers: Sequence[int]
) -> List[VoteLock]:
    """
    Locks for every vote of a voter across tracks.

    Votes on referenda missing from `referenda` are skipped.
    """
    items = referenda.items() if isinstance(referenda, Mapping) else referenda
    tallies: Dict[int, TallyOutcome] = {int(ref_id): tally for ref_id, tally in items}

    locks = []
    for track, casting in votes_by_track:
        for raw_ref_id, vote in casting:
            ref_id = int(raw_ref_id)
            tally = tallies.get(ref_id)
            if tally is None:
                logger.debug(f"No tally for referendum {ref_id}, skipping vote")
                continue

            lock = compute_lock(ref_id, track, vote, tally, lock_period_blocks, conviction_multipliers)
            if lock is not None:
                locks.append(lock)

    return locks


def summarize_locks(locks: Iterable[VoteLock], current_block: int) -> LockSummary:
    """
    Locked and unlockable balance at `current_block`.

    Vote locks overlap, so the locked balance is the largest single lock
    rather than the sum.
    """
    locked = 0
    still_locked = 0
    next_unlock = None
    indefinite = 0

    for lock in locks:
        locked = max(locked, lock.total_balance)
        if lock.is_indefinite:
            indefinite += 1
            still_locked = max(still_locked, lock.total_balance)
        elif lock.unlock_block > current_block:
            still_locked = max(still_locked, lock.total_balance)
            if next_unlock is None or lock.unlock_block < next_unlock:
                next_unlock = lock.unlock_block

    return LockSummary(
        locked_balance=locked,
        unlockable_balance=locked - still_locked,
        next_unlock_block=next_unlock,
        indefinite_count=indefinite,
    )


def lock_sort_key(lock: VoteLock) -> Tuple[bool, int]:
    """Sort key placing indefinite locks after every finite unlock block"""
    if lock.is_indefinite:
        return (True, 0)
    return (False, lock.unlock_block)


# Chain JSON decoding

def _to_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value.replace(",", ""))
    return int(value)


def _first_block(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


_TALLY_KEYS = {
    "ongoing": TallyStatus.ONGOING,
    "killed": TallyStatus.KILLED,
    "cancelled": TallyStatus.CANCELLED,
    "timedOut": TallyStatus.TIMED_OUT,
    "approved": TallyStatus.APPROVED,
    "rejected": TallyStatus.REJECTED,
}


def parse_tally(raw: Mapping[str, Any]) -> Optional[TallyOutcome]:
    """
    Decode a referendum info entry as returned by the chain JSON API.

    Terminal variants carry the finishing block either directly (killed) or
    as the first element of a tuple. Unrecognized entries decode to None.
    """
    if not isinstance(raw, Mapping) or len(raw) != 1:
        return None

    (key, value), = raw.items()
    status = _TALLY_KEYS.get(key)
    if status is None:
        return None
    if status is TallyStatus.ONGOING:
        return TallyOutcome.ongoing()

    block = _first_block(value)
    if block is None:
        return None
    return TallyOutcome(status, _to_int(block))


def decode_vote_byte(vote: Union[int, str]) -> Tuple[bool, int]:
    """Split the packed standard vote byte into (aye, conviction)"""
    value = _to_int(vote)
    return bool(value & _AYE_BIT), value & _CONVICTION_MASK


def parse_account_vote(raw: Mapping[str, Any]) -> Optional[AccountVote]:
    """Decode an account vote from its chain JSON shape"""
    if "standard" in raw:
        standard = raw["standard"]
        vote = standard["vote"]
        if isinstance(vote, Mapping):
            aye = bool(vote.get("aye", vote.get("isAye", False)))
            conviction = vote.get("conviction", 0)
            if isinstance(conviction, str):
                conviction = _parse_conviction_name(conviction)
        else:
            aye, conviction = decode_vote_byte(vote)
        return StandardVote(balance=_to_int(standard["balance"]), aye=aye, conviction=int(conviction))
    if "splitAbstain" in raw:
        split = raw["splitAbstain"]
        return SplitAbstainVote(
            aye=_to_int(split.get("aye", 0)),
            nay=_to_int(split.get("nay", 0)),
            abstain=_to_int(split.get("abstain", 0)),
        )
    if "split" in raw:
        split = raw["split"]
        return SplitVote(aye=_to_int(split.get("aye", 0)), nay=_to_int(split.get("nay", 0)))
    return None


def _parse_conviction_name(name: str) -> int:
    for conviction in Conviction:
        if conviction.tag == name:
            return conviction.value
    logger.warning(f"Unknown conviction '{name}', treating as no conviction")
    return Conviction.NONE.value
