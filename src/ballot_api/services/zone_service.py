"""Zone registry service: zone lookup, listing and administrative open/close.

The registry returns raw zone records. Whether a zone is frozen for a given
ballot is decided by the ballot assembler, not stored here.
"""

import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import DuplicateZoneError, ZoneNotFoundError
from ballot_api.core.logging import audit_logger
from ballot_api.lib.eligibility import is_zone_frozen
from ballot_api.models.election import Election, ElectionStatus
from ballot_api.models.zone import Zone
from ballot_api.schemas.zone import ZoneCreateRequest, ZoneResponse


async def resolve_zone(session: AsyncSession, code: str, election_type: str) -> Zone | None:
    """Look up a zone by its code within an election type.

    Args:
        session: Async database session.
        code: Zone code (e.g. ``RAIGAD``).
        election_type: Election type the zone belongs to.

    Returns:
        The Zone, or None if not found.
    """
    result = await session.execute(select(Zone).where(Zone.code == code, Zone.election_type == election_type))
    return result.scalar_one_or_none()


async def get_zone(session: AsyncSession, zone_id: uuid.UUID) -> Zone | None:
    """Get a zone by primary key."""
    result = await session.execute(select(Zone).where(Zone.id == zone_id))
    return result.scalar_one_or_none()


async def list_zones(
    session: AsyncSession,
    election_type: str | None = None,
    *,
    active_only: bool = True,
) -> list[Zone]:
    """List zones ordered by election type and code.

    Args:
        session: Async database session.
        election_type: Optional election type filter.
        active_only: Exclude inactive zones when True.

    Returns:
        List of Zone instances.
    """
    query = select(Zone)
    if election_type is not None:
        query = query.where(Zone.election_type == election_type)
    if active_only:
        query = query.where(Zone.is_active.is_(True))
    query = query.order_by(Zone.election_type, Zone.code)
    result = await session.execute(query)
    return list(result.scalars().all())


async def list_zone_views(
    session: AsyncSession,
    election_type: str | None = None,
    *,
    active_only: bool = True,
) -> list[ZoneResponse]:
    """List zones with the derived ``is_frozen`` flag for public display."""
    zones = await list_zones(session, election_type, active_only=active_only)
    statuses = await _election_statuses(session)
    return [_to_view(zone, statuses) for zone in zones]


async def zone_view(session: AsyncSession, zone: Zone) -> ZoneResponse:
    """Single-zone version of :func:`list_zone_views`."""
    return _to_view(zone, await _election_statuses(session))


async def _election_statuses(session: AsyncSession) -> dict[str, str]:
    result = await session.execute(select(Election.election_type, Election.status))
    return {row.election_type: row.status for row in result.all()}


def _to_view(zone: Zone, statuses: dict[str, str]) -> ZoneResponse:
    view = ZoneResponse.model_validate(zone)
    view.is_frozen = is_zone_frozen(
        zone_active=zone.is_active,
        zone_open_for_voting=zone.is_open_for_voting,
        election_active=statuses.get(zone.election_type) == ElectionStatus.ACTIVE,
    )
    return view


async def create_zone(session: AsyncSession, request: ZoneCreateRequest) -> Zone:
    """Create a zone.

    Raises:
        DuplicateZoneError: If the (code, election_type) pair already exists.
    """
    if await resolve_zone(session, request.code, request.election_type) is not None:
        msg = f"Zone '{request.code}' already exists for {request.election_type}."
        raise DuplicateZoneError(msg)

    zone = Zone(
        code=request.code,
        name=request.name,
        name_local=request.name_local,
        election_type=request.election_type,
        seats=request.seats,
        is_active=request.is_active,
        is_open_for_voting=request.is_open_for_voting,
    )
    session.add(zone)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        msg = f"Zone '{request.code}' already exists for {request.election_type}."
        raise DuplicateZoneError(msg) from e
    await session.refresh(zone)
    logger.info("Created zone {} ({}, {} seat(s))", zone.code, zone.election_type, zone.seats)
    return zone


async def set_zone_open(session: AsyncSession, zone_id: uuid.UUID, open_for_voting: bool) -> Zone:
    """Open or close a zone for voting. Reapplying the current state is a no-op.

    Raises:
        ZoneNotFoundError: If the zone does not exist.
    """
    zone = await get_zone(session, zone_id)
    if zone is None:
        raise ZoneNotFoundError

    if zone.is_open_for_voting == open_for_voting:
        return zone

    zone.is_open_for_voting = open_for_voting
    await session.commit()
    await session.refresh(zone)
    audit_logger.info(
        "zone {} {} for voting",
        zone.code,
        "opened" if open_for_voting else "closed",
        action="zone_voting_changed",
        zone_id=str(zone.id),
        election_type=zone.election_type,
        is_open_for_voting=open_for_voting,
    )
    return zone
