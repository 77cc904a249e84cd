"""
Tests for conviction vote locks and the tally state machine
"""

import pickle

import pytest

from opengov_engine.locks import (
    compute_all_locks,
    compute_lock,
    conviction_tag,
    decode_vote_byte,
    lock_sort_key,
    parse_account_vote,
    parse_tally,
    summarize_locks,
    vote_balance,
)
from opengov_engine.types import (
    CONVICTION_MULTIPLIERS,
    INDEFINITE,
    IndefiniteLock,
    InvalidTallyTransition,
    InvalidVoteError,
    SplitAbstainVote,
    SplitVote,
    StandardVote,
    TallyOutcome,
    TallyStatus,
    VoteLock,
)

LOCK_PERIOD = 201600


def lock_for(vote, tally, ref_id=43, track=0):
    return compute_lock(ref_id, track, vote, tally, LOCK_PERIOD, CONVICTION_MULTIPLIERS)


class TestTallyOutcome:
    """Referendum finality state machine"""

    def test_ongoing_has_no_block(self):
        tally = TallyOutcome.ongoing()
        assert tally.is_ongoing
        assert tally.block is None

    def test_terminal_requires_block(self):
        with pytest.raises(InvalidTallyTransition):
            TallyOutcome(TallyStatus.APPROVED)
        with pytest.raises(InvalidTallyTransition):
            TallyOutcome(TallyStatus.REJECTED, -1)
        with pytest.raises(InvalidTallyTransition):
            TallyOutcome(TallyStatus.ONGOING, 10)

    def test_transition_from_ongoing(self):
        approved = TallyOutcome.ongoing().transition(TallyStatus.APPROVED, 500)
        assert approved == TallyOutcome.approved(500)
        assert approved.is_terminal

    def test_terminal_states_are_absorbing(self):
        for tally in (
            TallyOutcome.killed(1),
            TallyOutcome.cancelled(1),
            TallyOutcome.timed_out(1),
            TallyOutcome.approved(1),
            TallyOutcome.rejected(1),
        ):
            with pytest.raises(InvalidTallyTransition) as excinfo:
                tally.transition(TallyStatus.REJECTED, 2)
            assert excinfo.value.error_code == "INVALID_STATE"

    def test_cannot_transition_to_ongoing(self):
        with pytest.raises(InvalidTallyTransition):
            TallyOutcome.ongoing().transition(TallyStatus.ONGOING, 1)

    def test_hashable(self):
        assert len({TallyOutcome.approved(1), TallyOutcome.approved(1), TallyOutcome.ongoing()}) == 2


class TestBallots:

    def test_negative_balance_rejected(self):
        with pytest.raises(InvalidVoteError):
            StandardVote(balance=-1, aye=True)
        with pytest.raises(InvalidVoteError):
            SplitVote(aye=1, nay=-1)
        with pytest.raises(InvalidVoteError):
            SplitAbstainVote(abstain=-5)

    def test_vote_balance(self):
        assert vote_balance(StandardVote(balance=10, aye=False, conviction=3)) == 10
        assert vote_balance(SplitVote(aye=3, nay=4)) == 7
        assert vote_balance(SplitAbstainVote(aye=1, nay=2, abstain=3)) == 6
        assert vote_balance("not a vote") is None


class TestIndefinite:

    def test_singleton(self):
        assert IndefiniteLock() is INDEFINITE
        assert pickle.loads(pickle.dumps(INDEFINITE)) is INDEFINITE

    def test_not_orderable(self):
        with pytest.raises(TypeError):
            INDEFINITE < 5

    def test_sort_key_places_indefinite_last(self):
        locks = [
            VoteLock(1, 0, 10, "None", INDEFINITE),
            VoteLock(2, 0, 10, "None", 300),
            VoteLock(3, 0, 10, "None", 100),
        ]
        assert [l.ref_id for l in sorted(locks, key=lock_sort_key)] == [3, 2, 1]


class TestComputeLock:

    def test_winning_aye_with_conviction(self):
        vote = StandardVote(balance=1000, aye=True, conviction=2)
        lock = lock_for(vote, TallyOutcome.approved(900000))
        assert lock == VoteLock(
            ref_id=43,
            track=0,
            total_balance=1000,
            conviction_tag="Locked2x",
            unlock_block=1303200,
        )

    def test_winning_nay_on_rejected(self):
        vote = StandardVote(balance=50, aye=False, conviction=6)
        lock = lock_for(vote, TallyOutcome.rejected(100))
        assert lock.unlock_block == 100 + LOCK_PERIOD * 32
        assert lock.conviction_tag == "Locked6x"

    def test_losing_side_unlocks_at_end_block(self):
        vote = StandardVote(balance=1000, aye=False, conviction=6)
        lock = lock_for(vote, TallyOutcome.approved(900000))
        assert lock.unlock_block == 900000
        assert lock.conviction_tag == "None"

    @pytest.mark.parametrize("tally", [
        TallyOutcome.killed(700),
        TallyOutcome.cancelled(700),
        TallyOutcome.timed_out(700),
    ])
    def test_immediate_unlock(self, tally):
        lock = lock_for(StandardVote(balance=5, aye=True, conviction=4), tally)
        assert lock.unlock_block == 700
        assert lock.is_unlockable(700)

    @pytest.mark.parametrize("vote", [
        *(StandardVote(balance=5, aye=aye, conviction=c) for c in range(7) for aye in (True, False)),
        SplitVote(aye=3, nay=2),
        SplitAbstainVote(aye=1, nay=1, abstain=3),
    ])
    def test_ongoing_is_indefinite(self, vote):
        """Test every ballot on an ongoing referendum stays locked"""
        lock = lock_for(vote, TallyOutcome.ongoing())
        assert lock.unlock_block is INDEFINITE
        assert lock.is_indefinite
        assert not lock.is_unlockable(10 ** 12)

    def test_split_vote_has_no_conviction(self):
        lock = lock_for(SplitVote(aye=30, nay=20), TallyOutcome.approved(1000))
        assert lock.total_balance == 50
        assert lock.conviction_tag == "None"
        assert lock.unlock_block == 1000

    def test_split_abstain_balance(self):
        lock = lock_for(SplitAbstainVote(aye=1, nay=2, abstain=3), TallyOutcome.rejected(10))
        assert lock.total_balance == 6

    def test_zero_balance_produces_no_lock(self):
        assert lock_for(StandardVote(balance=0, aye=True), TallyOutcome.approved(1)) is None
        assert lock_for(SplitVote(), TallyOutcome.approved(1)) is None

    def test_unrecognized_tally(self):
        assert lock_for(StandardVote(balance=1, aye=True), object()) is None

    def test_out_of_range_conviction(self):
        vote = StandardVote(balance=10, aye=True, conviction=9)
        lock = lock_for(vote, TallyOutcome.approved(100))
        assert lock.unlock_block == 100
        assert lock.conviction_tag == "None"

    def test_unlock_never_before_end_block(self):
        for conviction in range(7):
            for aye in (True, False):
                for tally in (TallyOutcome.approved(500), TallyOutcome.rejected(500)):
                    lock = lock_for(StandardVote(balance=1, aye=aye, conviction=conviction), tally)
                    assert lock.unlock_block >= 500


def test_compute_all_locks():
    votes_by_track = [
        (0, [(1, StandardVote(balance=100, aye=True, conviction=1)), ("2", SplitVote(aye=5, nay=5))]),
        (33, [("3", StandardVote(balance=0, aye=True)), (4, StandardVote(balance=7, aye=False))]),
    ]
    referenda = {
        "1": TallyOutcome.approved(1000),
        2: TallyOutcome.ongoing(),
        3: TallyOutcome.approved(1000),
    }

    locks = compute_all_locks(votes_by_track, referenda, LOCK_PERIOD, CONVICTION_MULTIPLIERS)

    assert [(l.ref_id, l.track) for l in locks] == [(1, 0), (2, 0)]
    assert locks[0].unlock_block == 1000 + LOCK_PERIOD
    assert locks[1].unlock_block is INDEFINITE
    assert all(type(l.ref_id) is int for l in locks)


def test_compute_all_locks_accepts_pairs():
    votes_by_track = [(0, [(1, StandardVote(balance=1, aye=True))])]
    locks = compute_all_locks(votes_by_track, [(1, TallyOutcome.killed(5))], LOCK_PERIOD, CONVICTION_MULTIPLIERS)
    assert locks[0].unlock_block == 5


def test_summarize_locks():
    locks = [
        VoteLock(1, 0, 1000, "Locked1x", 100),
        VoteLock(2, 0, 500, "Locked2x", 300),
        VoteLock(3, 0, 200, "None", INDEFINITE),
    ]
    summary = summarize_locks(locks, current_block=200)
    assert summary.locked_balance == 1000
    assert summary.unlockable_balance == 500
    assert summary.next_unlock_block == 300
    assert summary.indefinite_count == 1


def test_summarize_no_locks():
    summary = summarize_locks([], current_block=1)
    assert summary.locked_balance == 0
    assert summary.next_unlock_block is None


def test_conviction_tag():
    assert conviction_tag(0) == "None"
    assert conviction_tag(3) == "Locked3x"
    assert conviction_tag(42) == "None"


class TestChainDecoding:

    @pytest.mark.parametrize("raw, expected", [
        ({"ongoing": {"track": 0}}, TallyOutcome.ongoing()),
        ({"approved": [1_000, None, None]}, TallyOutcome.approved(1000)),
        ({"rejected": ["1,234", None, None]}, TallyOutcome.rejected(1234)),
        ({"killed": 77}, TallyOutcome.killed(77)),
        ({"timedOut": ["0x10", None, None]}, TallyOutcome.timed_out(16)),
    ])
    def test_parse_tally(self, raw, expected):
        assert parse_tally(raw) == expected

    @pytest.mark.parametrize("raw", [{}, {"unknown": 1}, {"approved": []}, "approved"])
    def test_parse_tally_unrecognized(self, raw):
        assert parse_tally(raw) is None

    def test_decode_vote_byte(self):
        assert decode_vote_byte(0x82) == (True, 2)
        assert decode_vote_byte(0x06) == (False, 6)
        assert decode_vote_byte("0x81") == (True, 1)

    def test_parse_standard_vote_byte(self):
        vote = parse_account_vote({"standard": {"vote": "0x83", "balance": "1,000"}})
        assert vote == StandardVote(balance=1000, aye=True, conviction=3)

    def test_parse_standard_vote_mapping(self):
        vote = parse_account_vote({
            "standard": {"vote": {"aye": False, "conviction": "Locked4x"}, "balance": 12}
        })
        assert vote == StandardVote(balance=12, aye=False, conviction=4)

    def test_parse_split_votes(self):
        assert parse_account_vote({"split": {"aye": "5", "nay": 6}}) == SplitVote(aye=5, nay=6)
        assert parse_account_vote({"splitAbstain": {"aye": 1, "nay": 2, "abstain": 3}}) == \
            SplitAbstainVote(aye=1, nay=2, abstain=3)

    def test_parse_unknown_vote(self):
        assert parse_account_vote({"delegating": {}}) is None
