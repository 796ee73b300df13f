"""Pydantic v2 schemas for ballot assembly, vote casting and results."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class BallotCandidate(BaseModel):
    """A selectable option on a ballot position."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    name_local: str | None = None
    party: str | None = None
    manifesto: str | None = None
    position: str
    is_nota: bool


class BallotPosition(BaseModel):
    """One fillable slot and its eligible candidates."""

    position_id: str
    label: str
    seat_index: int
    candidates: list[BallotCandidate]


class BallotResponse(BaseModel):
    """The ballot offered to one voter for one election."""

    election_id: uuid.UUID
    election_type: str
    zone_id: uuid.UUID
    zone_code: str
    zone_name: str
    seats: int
    is_frozen: bool
    has_voted: bool
    positions: list[BallotPosition]


class CastVotesRequest(BaseModel):
    """Full ballot submission: position id to candidate id, or ``NOTA``."""

    selections: dict[str, str] = Field(
        min_length=1,
        description="Map of position_id to candidate id (or the literal 'NOTA')",
    )


class CastVotesResponse(BaseModel):
    """Receipt for a committed ballot."""

    receipt_id: uuid.UUID
    election_type: str
    votes_count: int
    nota_count: int
    submitted_at: datetime


class RevokeVotesResponse(BaseModel):
    """Result of an administrative vote revocation."""

    voter_id: uuid.UUID
    election_type: str
    votes_deleted: int
    has_voted: bool


class CandidateTally(BaseModel):
    candidate_id: uuid.UUID
    name: str
    is_nota: bool
    votes: int


class PositionTally(BaseModel):
    position_id: str
    candidates: list[CandidateTally]


class ZoneTally(BaseModel):
    zone_id: uuid.UUID
    zone_code: str
    zone_name: str
    seats: int
    ballots_cast: int
    positions: list[PositionTally]


class ElectionResultsResponse(BaseModel):
    """Vote counts per zone, position and candidate for one election."""

    election_type: str
    election_status: str
    total_ballots: int
    zones: list[ZoneTally]
