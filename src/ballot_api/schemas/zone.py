"""Pydantic v2 schemas for zone endpoints."""

import uuid

from pydantic import BaseModel, Field

from ballot_api.models.election import ElectionType


class ZoneCreateRequest(BaseModel):
    """Request body for creating a zone."""

    code: str = Field(min_length=1, max_length=50, pattern=r"^[A-Z0-9_]+$")
    name: str = Field(min_length=1, max_length=200)
    name_local: str | None = Field(default=None, max_length=200)
    election_type: ElectionType
    seats: int = Field(default=1, ge=1, le=50)
    is_active: bool = True
    is_open_for_voting: bool = True


class ZoneVotingUpdateRequest(BaseModel):
    """Request body for opening or closing a zone for voting."""

    is_open_for_voting: bool


class ZoneResponse(BaseModel):
    """Zone as exposed to API callers, with the derived frozen flag."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    code: str
    name: str
    name_local: str | None = None
    election_type: str
    seats: int
    is_active: bool
    is_open_for_voting: bool
    is_frozen: bool = Field(default=False, description="True when the zone currently accepts no new ballots")
