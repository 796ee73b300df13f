"""Pydantic v2 schemas for voter directory endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from ballot_api.models.election import Jurisdiction


class VoterCreateRequest(BaseModel):
    """Roster entry for one voter. The phone is normalized on write."""

    voter_roll_id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    phone: str | None = Field(default=None, max_length=32)
    age: int | None = Field(default=None, ge=0, le=150)
    date_of_birth: date | None = None
    region: str | None = Field(default=None, max_length=100)
    jurisdiction: Jurisdiction = Jurisdiction.LOCAL
    zone_id: uuid.UUID | None = None
    karobari_zone_id: uuid.UUID | None = None
    trustee_zone_id: uuid.UUID | None = None
    yuva_pankh_zone_id: uuid.UUID | None = None


class VoterResponse(BaseModel):
    """Voter directory record. The phone is returned masked."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    voter_roll_id: str
    name: str
    age: int | None = None
    region: str | None = None
    jurisdiction: str
    zone_id: uuid.UUID | None = None
    karobari_zone_id: uuid.UUID | None = None
    trustee_zone_id: uuid.UUID | None = None
    yuva_pankh_zone_id: uuid.UUID | None = None
    is_active: bool
    has_voted: bool
    last_login_at: datetime | None = None


class VoterLookupResponse(VoterResponse):
    """Phone lookup result with the masked phone number."""

    phone_masked: str


class DashboardElectionCard(BaseModel):
    """Per-election summary shown on the voter dashboard."""

    election_type: str
    title: str | None = None
    election_status: str | None = None
    zone_id: uuid.UUID | None = None
    zone_code: str | None = None
    zone_name: str | None = None
    seats: int | None = None
    is_eligible: bool
    ineligibility_reason: str | None = None
    is_frozen: bool
    has_voted: bool


class VoterDashboardResponse(BaseModel):
    """Voter dashboard: one card per election type."""

    voter_id: uuid.UUID
    name: str
    has_voted: bool
    elections: list[DashboardElectionCard]
    generated_at: datetime
