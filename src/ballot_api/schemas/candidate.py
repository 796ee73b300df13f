"""Pydantic v2 schemas for candidate nomination endpoints."""

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ballot_api.lib.ballot_layout import is_nota_position
from ballot_api.models.election import ElectionType, Jurisdiction


class CandidateCreateRequest(BaseModel):
    """Nomination request for a real (non-NOTA) candidate."""

    election_type: ElectionType
    zone_id: uuid.UUID
    name: str = Field(min_length=1, max_length=200)
    name_local: str | None = Field(default=None, max_length=200)
    party: str | None = Field(default=None, max_length=200)
    manifesto: str | None = None
    position: str | None = Field(
        default=None,
        max_length=100,
        description="Position label; defaults to the election type's member label",
    )
    status: Literal["PENDING", "SUBMITTED"] = "PENDING"
    age: int | None = Field(default=None, ge=0, le=150)
    date_of_birth: date | None = None
    jurisdiction: Jurisdiction = Jurisdiction.LOCAL

    @field_validator("position")
    @classmethod
    def reject_nota_position(cls, v: str | None) -> str | None:
        if v is not None and (is_nota_position(v) or "#" in v):
            msg = "position must be a real position label"
            raise ValueError(msg)
        return v


class CandidateRejectRequest(BaseModel):
    """Request body for rejecting a nomination."""

    reason: str = Field(min_length=1, max_length=1000)


class CandidateResponse(BaseModel):
    """Candidate record."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    election_type: str
    zone_id: uuid.UUID
    name: str
    name_local: str | None = None
    party: str | None = None
    manifesto: str | None = None
    position: str
    status: str
    rejection_reason: str | None = None
    is_nota: bool
    created_at: datetime | None = None
