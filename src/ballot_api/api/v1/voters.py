"""Voter API endpoints.

GET /voters/me/dashboard - the caller's per-election dashboard (voter, cached)
GET /voters/lookup?phone= - find a voter by phone number (admin)
DELETE /voters/{voter_id}/votes/{election_type} - revoke a ballot (admin)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.config import Settings, get_settings
from ballot_api.core.dependencies import Principal, get_async_session, get_current_voter_id, require_role
from ballot_api.core.errors import VoterNotFoundError
from ballot_api.core.logging import mask_phone
from ballot_api.core.security import ADMIN_ROLE
from ballot_api.models.election import ElectionType
from ballot_api.schemas.ballot import RevokeVotesResponse
from ballot_api.schemas.voter import VoterDashboardResponse, VoterLookupResponse, VoterResponse
from ballot_api.services import dashboard_service, vote_service, voter_service

voters_router = APIRouter(prefix="/voters", tags=["voters"])


@voters_router.get("/me/dashboard", response_model=VoterDashboardResponse)
async def get_my_dashboard(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    voter_id: Annotated[uuid.UUID, Depends(get_current_voter_id)],
) -> VoterDashboardResponse:
    """Per-election status cards for the caller. May be up to the cache TTL stale."""
    return await dashboard_service.get_voter_dashboard(
        session, voter_id, enforce_window=settings.enforce_election_window
    )


@voters_router.get("/lookup", response_model=VoterLookupResponse)
async def lookup_voter(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
    phone: str = Query(min_length=4, max_length=32, description="Phone number in any common format"),
) -> VoterLookupResponse:
    """Find a voter by phone number. Admin only."""
    voter = await voter_service.find_voter_by_phone(session, phone, settings.default_phone_region)
    if voter is None:
        raise VoterNotFoundError
    base = VoterResponse.model_validate(voter)
    return VoterLookupResponse(**base.model_dump(), phone_masked=mask_phone(voter.phone))


@voters_router.delete("/{voter_id}/votes/{election_type}", response_model=RevokeVotesResponse)
async def revoke_votes(
    voter_id: uuid.UUID,
    election_type: ElectionType,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> RevokeVotesResponse:
    """Delete a voter's ballot for one election and reset their voted state. Admin only."""
    return await vote_service.revoke_votes(
        session,
        voter_id,
        election_type,
        retry_attempts=settings.storage_retry_attempts,
        retry_base_delay=settings.storage_retry_base_delay,
    )
