"""
Input models for indexer-shaped records.

The indexer returns camelCase JSON with balances as decimal strings; these
models accept that shape and coerce balances to int.
"""

from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .types import CohortStatus, DelegateRole, ProposalStatus


class IndexerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class IndexerVoteBalance(IndexerModel):
    """Balance of a vote. Standard votes set `value`, split votes set the branches."""
    value: Optional[int] = Field(None, description="Standard vote balance")
    aye: Optional[int] = Field(None, description="Aye branch of a split vote")
    nay: Optional[int] = Field(None, description="Nay branch of a split vote")
    abstain: Optional[int] = Field(None, description="Abstain branch of a split-abstain vote")


class IndexerDelegatedVote(IndexerModel):
    """A vote delegated to the voter"""
    voter: Optional[str] = None
    voting_power: Optional[int] = Field(None, alias="votingPower")
    balance: Optional[IndexerVoteBalance] = None
    lock_period: Optional[int] = Field(None, alias="lockPeriod")


class IndexerProposalRef(IndexerModel):
    index: int


class IndexerVote(IndexerModel):
    """A conviction vote as returned by the indexer"""
    proposal: IndexerProposalRef
    voter: str
    decision: Optional[str] = Field(None, description="yes, no, abstain, split or splitAbstain")
    balance: Optional[IndexerVoteBalance] = None
    lock_period: Optional[int] = Field(None, alias="lockPeriod")
    self_voting_power: Optional[int] = Field(None, alias="selfVotingPower")
    delegated_to: Optional[str] = Field(None, alias="delegatedTo")
    delegated_votes: List[IndexerDelegatedVote] = Field(default_factory=list, alias="delegatedVotes")


class CohortDelegate(IndexerModel):
    address: str
    name: Optional[str] = None
    role: DelegateRole = DelegateRole.DAO


class Cohort(IndexerModel):
    """A decentralized voices cohort"""
    index: int
    network: str
    status: CohortStatus
    start_time: datetime = Field(..., alias="startTime")
    start_block: Optional[int] = Field(None, alias="startBlock")
    end_time: Optional[datetime] = Field(None, alias="endTime")
    end_block: Optional[int] = Field(None, alias="endBlock")
    tracks: List[str] = Field(default_factory=list, description="Track names the delegation covers")
    delegates: List[CohortDelegate] = Field(default_factory=list)


class CohortTally(IndexerModel):
    ayes: int = 0
    nays: int = 0


class CohortReferendum(IndexerModel):
    """A referendum voted on during a cohort's tenure"""
    index: int
    status: Optional[ProposalStatus] = None
    track_number: Optional[int] = Field(None, alias="trackNumber")
    title: Optional[str] = None
    tally: Optional[CohortTally] = None


class TurnoutVote(IndexerModel):
    decision: str
    balance: IndexerVoteBalance


class TurnoutProposal(IndexerModel):
    index: int
    track_number: Optional[int] = Field(None, alias="trackNumber")
    conviction_voting: List[TurnoutVote] = Field(default_factory=list, alias="convictionVoting")
