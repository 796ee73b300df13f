"""Ballot API endpoints.

GET /ballots/{election_type} - assemble the caller's ballot (voter)
POST /ballots/{election_type}/votes - submit the full ballot (voter)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.api.middleware import get_client_ip
from ballot_api.core.config import Settings, get_settings
from ballot_api.core.dependencies import get_async_session, get_current_voter_id
from ballot_api.models.election import ElectionType
from ballot_api.schemas.ballot import BallotResponse, CastVotesRequest, CastVotesResponse
from ballot_api.schemas.common import ErrorResponse
from ballot_api.services import ballot_service, vote_service

ballots_router = APIRouter(prefix="/ballots", tags=["ballots"])

_ELIGIBILITY_ERRORS: dict[int | str, dict] = {
    403: {"model": ErrorResponse, "description": "Voting closed, zone frozen, no zone, or ineligible"},
    404: {"model": ErrorResponse, "description": "Voter or election not found"},
    503: {"model": ErrorResponse, "description": "Storage temporarily unavailable"},
}


@ballots_router.get("/{election_type}", response_model=BallotResponse, responses=_ELIGIBILITY_ERRORS)
async def get_ballot(
    election_type: ElectionType,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    voter_id: Annotated[uuid.UUID, Depends(get_current_voter_id)],
) -> BallotResponse:
    """Return the caller's ballot for an election."""
    return await ballot_service.assemble_ballot(
        session,
        voter_id,
        election_type,
        enforce_window=settings.enforce_election_window,
        retry_attempts=settings.storage_retry_attempts,
        retry_base_delay=settings.storage_retry_base_delay,
    )


@ballots_router.post(
    "/{election_type}/votes",
    response_model=CastVotesResponse,
    status_code=201,
    responses={
        **_ELIGIBILITY_ERRORS,
        400: {"model": ErrorResponse, "description": "Invalid selections"},
        409: {"model": ErrorResponse, "description": "Already voted"},
    },
)
async def cast_votes(
    election_type: ElectionType,
    body: CastVotesRequest,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    voter_id: Annotated[uuid.UUID, Depends(get_current_voter_id)],
) -> CastVotesResponse:
    """Submit the caller's full ballot. One submission per election."""
    return await vote_service.cast_votes(
        session,
        voter_id,
        election_type,
        body.selections,
        ip_address=get_client_ip(request, settings.trusted_proxy_header_list),
        user_agent=(request.headers.get("user-agent") or "")[:512] or None,
        enforce_window=settings.enforce_election_window,
        retry_attempts=settings.storage_retry_attempts,
        retry_base_delay=settings.storage_retry_base_delay,
    )
