"""Zone registry API endpoints.

GET /zones - list zones with the derived frozen flag (public)
POST /zones - create a zone (admin)
PATCH /zones/{zone_id}/voting - open or close a zone for voting (admin)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.dependencies import Principal, get_async_session, require_role
from ballot_api.core.security import ADMIN_ROLE
from ballot_api.models.election import ElectionType
from ballot_api.schemas.zone import ZoneCreateRequest, ZoneResponse, ZoneVotingUpdateRequest
from ballot_api.services import zone_service

zones_router = APIRouter(prefix="/zones", tags=["zones"])


@zones_router.get("", response_model=list[ZoneResponse])
async def list_zones(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    election_type: ElectionType | None = Query(default=None, description="Filter by election type"),
    active_only: bool = Query(default=True, description="Exclude inactive zones"),
) -> list[ZoneResponse]:
    """List zones. Public endpoint."""
    return await zone_service.list_zone_views(session, election_type, active_only=active_only)


@zones_router.post("", response_model=ZoneResponse, status_code=201)
async def create_zone(
    request: ZoneCreateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> ZoneResponse:
    """Create a zone. Admin only."""
    zone = await zone_service.create_zone(session, request)
    return await zone_service.zone_view(session, zone)


@zones_router.patch("/{zone_id}/voting", response_model=ZoneResponse)
async def set_zone_voting(
    zone_id: uuid.UUID,
    request: ZoneVotingUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _admin: Annotated[Principal, Depends(require_role(ADMIN_ROLE))],
) -> ZoneResponse:
    """Open or close a zone for voting. Idempotent. Admin only."""
    zone = await zone_service.set_zone_open(session, zone_id, request.is_open_for_voting)
    return await zone_service.zone_view(session, zone)
