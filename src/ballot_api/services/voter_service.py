"""Voter directory service: point lookups, phone matching and zone assignment."""

import uuid
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import VoterNotFoundError, ZoneNotFoundError
from ballot_api.core.logging import mask_phone
from ballot_api.lib.phone import NATIONAL_NUMBER_LENGTH, normalize_phone, phone_lookup_variants
from ballot_api.models.election import ElectionType
from ballot_api.models.vote import BallotReceipt
from ballot_api.models.voter import ZONE_COLUMN_BY_ELECTION_TYPE, Voter
from ballot_api.models.zone import Zone
from ballot_api.schemas.voter import VoterCreateRequest


async def get_voter(session: AsyncSession, voter_id: uuid.UUID) -> Voter | None:
    """Get a voter by primary key."""
    result = await session.execute(select(Voter).where(Voter.id == voter_id))
    return result.scalar_one_or_none()


async def require_voter(session: AsyncSession, voter_id: uuid.UUID) -> Voter:
    """Return the voter, treating inactive voters as absent.

    Raises:
        VoterNotFoundError: If the voter does not exist or is inactive.
    """
    voter = await get_voter(session, voter_id)
    if voter is None or not voter.is_active:
        raise VoterNotFoundError
    return voter


async def get_voter_by_roll_id(session: AsyncSession, voter_roll_id: str) -> Voter | None:
    result = await session.execute(select(Voter).where(Voter.voter_roll_id == voter_roll_id))
    return result.scalar_one_or_none()


async def find_voter_by_phone(session: AsyncSession, phone: str, default_region: str = "IN") -> Voter | None:
    """Find a voter by phone number, tolerating country-code and trunk-prefix variants.

    Tries the raw input and its stored-shape variants (bare, ``+91``, ``91``,
    ``0``) as exact matches first, in that priority order. If none match,
    falls back to a suffix match on the normalized number, but only when
    it is a full 10-digit national number.

    Args:
        session: Async database session.
        phone: Phone number as typed.
        default_region: Region assumed when no country code is given.

    Returns:
        The matching Voter, or None.
    """
    variants = phone_lookup_variants(phone, default_region)
    if not variants:
        return None

    result = await session.execute(select(Voter).where(Voter.phone.in_(variants)))
    by_phone = {voter.phone: voter for voter in result.scalars().all()}
    for variant in variants:
        if variant in by_phone:
            return by_phone[variant]

    normalized = normalize_phone(phone, default_region)
    # suffix matching needs a full national number; fragments match nobody
    if len(normalized) != NATIONAL_NUMBER_LENGTH:
        return None

    result = await session.execute(
        select(Voter).where(Voter.phone.like(f"%{normalized}")).order_by(Voter.voter_roll_id).limit(2)
    )
    matches = list(result.scalars().all())
    if len(matches) > 1:
        logger.warning("Ambiguous suffix match for phone {}; using {}", mask_phone(phone), matches[0].voter_roll_id)
    return matches[0] if matches else None


async def create_voter(session: AsyncSession, request: VoterCreateRequest, default_region: str = "IN") -> Voter:
    """Add a voter to the directory, storing the normalized phone number."""
    values = request.model_dump()
    values["phone"] = normalize_phone(request.phone, default_region) or None
    voter = Voter(**values)
    session.add(voter)
    await session.commit()
    await session.refresh(voter)
    logger.info("Created voter {} (phone {})", voter.voter_roll_id, mask_phone(voter.phone))
    return voter


async def assign_zone(
    session: AsyncSession,
    voter_id: uuid.UUID,
    election_type: ElectionType,
    zone_id: uuid.UUID | None,
) -> Voter:
    """Set (or clear, with ``zone_id=None``) the voter's zone for an election type.

    Raises:
        VoterNotFoundError: If the voter does not exist.
        ZoneNotFoundError: If the zone does not exist for that election type.
    """
    voter = await get_voter(session, voter_id)
    if voter is None:
        raise VoterNotFoundError

    if zone_id is not None:
        result = await session.execute(select(Zone).where(Zone.id == zone_id, Zone.election_type == election_type))
        if result.scalar_one_or_none() is None:
            msg = f"Zone {zone_id} not found for {election_type}."
            raise ZoneNotFoundError(msg)

    setattr(voter, ZONE_COLUMN_BY_ELECTION_TYPE[election_type], zone_id)
    await session.commit()
    await session.refresh(voter)
    return voter


async def record_login(session: AsyncSession, voter_id: uuid.UUID) -> Voter:
    """Stamp the voter's last login time."""
    voter = await require_voter(session, voter_id)
    voter.last_login_at = datetime.now(UTC)
    await session.commit()
    await session.refresh(voter)
    return voter


async def get_voting_status(session: AsyncSession, voter_id: uuid.UUID) -> dict[str, bool]:
    """Return, per election type, whether the voter has submitted a ballot."""
    result = await session.execute(select(BallotReceipt.election_type).where(BallotReceipt.voter_id == voter_id))
    voted = set(result.scalars().all())
    return {election_type.value: election_type.value in voted for election_type in ElectionType}
