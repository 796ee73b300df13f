"""Pydantic v2 schemas for election registry endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from ballot_api.models.election import ElectionStatus, ElectionType, Jurisdiction


class ElectionUpsertRequest(BaseModel):
    """Create-or-update payload for the single election of a type."""

    election_type: ElectionType
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    status: ElectionStatus = ElectionStatus.UPCOMING
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    voter_min_age: int | None = Field(default=None, ge=0, le=150)
    voter_max_age: int | None = Field(default=None, ge=0, le=150)
    candidate_min_age: int | None = Field(default=None, ge=0, le=150)
    candidate_max_age: int | None = Field(default=None, ge=0, le=150)
    voter_jurisdiction: Jurisdiction = Jurisdiction.ALL
    candidate_jurisdiction: Jurisdiction = Jurisdiction.ALL

    @model_validator(mode="after")
    def check_ranges(self) -> "ElectionUpsertRequest":
        if self.starts_at and self.ends_at and self.ends_at < self.starts_at:
            msg = "ends_at must not be before starts_at"
            raise ValueError(msg)
        for low, high, label in (
            (self.voter_min_age, self.voter_max_age, "voter"),
            (self.candidate_min_age, self.candidate_max_age, "candidate"),
        ):
            if low is not None and high is not None and high < low:
                msg = f"{label}_max_age must not be below {label}_min_age"
                raise ValueError(msg)
        return self


class ElectionStatusUpdateRequest(BaseModel):
    """Request body for changing an election's lifecycle status."""

    status: ElectionStatus


class ElectionResponse(BaseModel):
    """Election registry record."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    election_type: str
    title: str
    description: str | None = None
    status: str
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    voter_min_age: int | None = None
    voter_max_age: int | None = None
    candidate_min_age: int | None = None
    candidate_max_age: int | None = None
    voter_jurisdiction: str
    candidate_jurisdiction: str
    is_voting_open: bool = False
