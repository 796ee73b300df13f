"""Election registry API endpoints.

GET /elections - list elections (public)
GET /elections/{election_type} - election detail (public)
PATCH /elections/{election_type}/status - set lifecycle status (admin, idempotent)
GET /elections/{election_type}/results - vote tally (admin)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.config import Settings, get_settings
from ballot_api.core.dependencies import Principal, get_async_session, require_role
from ballot_api.core.security import ADMIN_ROLE
from ballot_api.models.election import ElectionType
from ballot_api.schemas.ballot import ElectionResultsResponse
from ballot_api.schemas.election import ElectionResponse, ElectionStatusUpdateRequest
from ballot_api.services import election_service, vote_service

elections_router = APIRouter(prefix="/elections", tags=["elections"])


@elections_router.get("", response_model=list[ElectionResponse])
async def list_elections(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[ElectionResponse]:
    """List all elections. Public endpoint."""
    elections = await election_service.list_elections(session)
    return [election_service.to_response(e, enforce_window=settings.enforce_election_window) for e in elections]


@elections_router.get("/{election_type}", response_model=ElectionResponse)
async def get_election(
    election_type: ElectionType,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ElectionResponse:
    """Get the election for a type. Public endpoint."""
    election = await election_service.require_election(session, election_type)
    return election_service.to_response(election, enforce_window=settings.enforce_election_window)


@elections_router.patch("/{election_type}/status", response_model=ElectionResponse)
async def set_election_status(
    election_type: ElectionType,
    request: ElectionStatusUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> ElectionResponse:
    """Set an election's status. Reapplying the current status is a no-op. Admin only."""
    election = await election_service.set_status(session, election_type, request.status)
    return election_service.to_response(election, enforce_window=settings.enforce_election_window)


@elections_router.get("/{election_type}/results", response_model=ElectionResultsResponse)
async def get_election_results(
    election_type: ElectionType,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> ElectionResultsResponse:
    """Tally votes per zone, position and candidate. Admin only."""
    return await vote_service.tally_results(session, election_type)
