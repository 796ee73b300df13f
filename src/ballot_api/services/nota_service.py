"""NOTA provisioner: guarantees a "None of the above" option per zone seat.

Single-seat zones get one candidate with position ``NOTA``; multi-seat zones
get one per seat (``NOTA_SEAT_<i>``). The partial unique index on
(zone_id, position) over NOTA rows is the real guard: the lookup below is an
optimization, and a lost insert race resolves to the winner's row.
"""

import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import ZoneNotFoundError
from ballot_api.lib.ballot_layout import nota_position_label
from ballot_api.models.candidate import Candidate, CandidateStatus
from ballot_api.models.zone import Zone


def nota_display_name(zone_name: str, seats: int, seat_index: int | None) -> str:
    if seats > 1 and seat_index is not None:
        return f"NOTA - {zone_name} (Seat {seat_index})"
    return f"NOTA - {zone_name}"


async def _find_nota(session: AsyncSession, zone_id: uuid.UUID, position: str) -> Candidate | None:
    result = await session.execute(
        select(Candidate).where(
            Candidate.zone_id == zone_id,
            Candidate.position == position,
            Candidate.is_nota.is_(True),
        )
    )
    return result.scalar_one_or_none()


async def ensure_nota_candidate(
    session: AsyncSession,
    zone_id: uuid.UUID,
    seat_index: int | None = None,
) -> Candidate:
    """Return the zone's NOTA candidate for a seat, creating it if missing.

    Commits the session when a row is created. If a concurrent caller wins
    the insert, the session is rolled back and the existing row is
    returned, so callers must not hold unflushed changes.

    Args:
        session: Async database session.
        zone_id: Zone to provision.
        seat_index: 1-based seat number; ignored for single-seat zones.

    Returns:
        The APPROVED NOTA Candidate for that (zone, seat).

    Raises:
        ZoneNotFoundError: If the zone does not exist.
    """
    result = await session.execute(select(Zone).where(Zone.id == zone_id))
    zone = result.scalar_one_or_none()
    if zone is None:
        raise ZoneNotFoundError

    seats = zone.seats
    position = nota_position_label(seats, seat_index)
    existing = await _find_nota(session, zone_id, position)
    if existing is not None:
        return existing

    candidate = Candidate(
        election_type=zone.election_type,
        zone_id=zone_id,
        name=nota_display_name(zone.name, seats, seat_index),
        party=None,
        manifesto="None of the above",
        position=position,
        status=CandidateStatus.APPROVED,
        is_nota=True,
    )
    session.add(candidate)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        existing = await _find_nota(session, zone_id, position)
        if existing is None:
            raise
        logger.debug("NOTA {} for zone {} was provisioned concurrently", position, zone_id)
        return existing

    await session.refresh(candidate)
    logger.info("Provisioned {} for zone {}", position, zone_id)
    return candidate


async def provision_zone_notas(session: AsyncSession, zone_id: uuid.UUID) -> list[Candidate]:
    """Ensure every seat of a zone has its NOTA candidate."""
    result = await session.execute(select(Zone.seats).where(Zone.id == zone_id))
    seats = result.scalar_one_or_none()
    if seats is None:
        raise ZoneNotFoundError
    if seats <= 1:
        return [await ensure_nota_candidate(session, zone_id)]
    return [await ensure_nota_candidate(session, zone_id, seat_index) for seat_index in range(1, seats + 1)]


async def provision_election_notas(session: AsyncSession, election_type: str) -> int:
    """Provision NOTA candidates for every active zone of an election type.

    Returns:
        Number of NOTA candidates ensured.
    """
    result = await session.execute(
        select(Zone.id).where(Zone.election_type == election_type, Zone.is_active.is_(True)).order_by(Zone.code)
    )
    zone_ids = list(result.scalars().all())
    total = 0
    for zone_id in zone_ids:
        total += len(await provision_zone_notas(session, zone_id))
    return total
