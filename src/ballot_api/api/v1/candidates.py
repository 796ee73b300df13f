"""Candidate nomination API endpoints (admin only).

POST /candidates - record a nomination
POST /candidates/{candidate_id}/approve - approve a nomination
POST /candidates/{candidate_id}/reject - reject a nomination with a reason
GET /candidates - list candidates by zone and status
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.dependencies import Principal, get_async_session, require_role
from ballot_api.core.security import ADMIN_ROLE
from ballot_api.models.candidate import CandidateStatus
from ballot_api.models.election import ElectionType
from ballot_api.schemas.candidate import CandidateCreateRequest, CandidateRejectRequest, CandidateResponse
from ballot_api.services import candidate_service

candidates_router = APIRouter(prefix="/candidates", tags=["candidates"])


@candidates_router.get("", response_model=list[CandidateResponse])
async def list_candidates(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
    zone_id: uuid.UUID | None = Query(default=None, description="Filter by zone"),
    status: CandidateStatus | None = Query(default=None, description="Filter by nomination status"),
    election_type: ElectionType | None = Query(default=None, description="Filter by election type"),
) -> list[CandidateResponse]:
    """List candidates, NOTA entries included."""
    candidates = await candidate_service.list_candidates(
        session, zone_id=zone_id, status=status, election_type=election_type
    )
    return [CandidateResponse.model_validate(c) for c in candidates]


@candidates_router.post("", response_model=CandidateResponse, status_code=201)
async def create_candidate(
    request: CandidateCreateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> CandidateResponse:
    """Record a nomination after checking the election's candidate rules."""
    candidate = await candidate_service.create_nomination(session, request)
    return CandidateResponse.model_validate(candidate)


@candidates_router.post("/{candidate_id}/approve", response_model=CandidateResponse)
async def approve_candidate(
    candidate_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> CandidateResponse:
    candidate = await candidate_service.approve_candidate(session, candidate_id)
    return CandidateResponse.model_validate(candidate)


@candidates_router.post("/{candidate_id}/reject", response_model=CandidateResponse)
async def reject_candidate(
    candidate_id: uuid.UUID,
    request: CandidateRejectRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> CandidateResponse:
    candidate = await candidate_service.reject_candidate(session, candidate_id, request.reason)
    return CandidateResponse.model_validate(candidate)
