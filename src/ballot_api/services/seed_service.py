"""Seed service: provision the default zones and elections idempotently."""

from dataclasses import dataclass

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.lib.seed_defaults import DEFAULT_ELECTIONS, DEFAULT_ZONES, ElectionSeed, ZoneSeed
from ballot_api.schemas.election import ElectionUpsertRequest
from ballot_api.schemas.zone import ZoneCreateRequest
from ballot_api.services import election_service, zone_service


@dataclass
class SeedResult:
    zones_created: int = 0
    zones_existing: int = 0
    elections_created: int = 0
    elections_updated: int = 0
    elections_existing: int = 0


async def seed_defaults(
    session: AsyncSession,
    *,
    zones: tuple[ZoneSeed, ...] = DEFAULT_ZONES,
    elections: tuple[ElectionSeed, ...] = DEFAULT_ELECTIONS,
    overwrite_elections: bool = False,
) -> SeedResult:
    """Create missing zones and elections.

    Existing zones are left untouched. Existing elections are only updated
    when ``overwrite_elections`` is set, which also resets their status.

    Args:
        session: Async database session.
        zones: Zone definitions to provision.
        elections: Election definitions to provision.
        overwrite_elections: Replace existing election definitions.

    Returns:
        SeedResult with created/existing counts.
    """
    result = SeedResult()

    for seed in zones:
        if await zone_service.resolve_zone(session, seed.code, seed.election_type) is not None:
            result.zones_existing += 1
            continue
        await zone_service.create_zone(
            session,
            ZoneCreateRequest(
                code=seed.code,
                name=seed.name,
                name_local=seed.name_local,
                election_type=seed.election_type,
                seats=seed.seats,
                is_open_for_voting=seed.open_for_voting,
            ),
        )
        result.zones_created += 1

    for seed in elections:
        existing = await election_service.get_election(session, seed.election_type)
        if existing is not None and not overwrite_elections:
            result.elections_existing += 1
            continue
        await election_service.upsert_election(
            session,
            ElectionUpsertRequest(
                election_type=seed.election_type,
                title=seed.title,
                description=seed.description,
                starts_at=seed.starts_at,
                ends_at=seed.ends_at,
                voter_min_age=seed.voter_min_age,
                voter_max_age=seed.voter_max_age,
                candidate_min_age=seed.candidate_min_age,
                candidate_max_age=seed.candidate_max_age,
                voter_jurisdiction=seed.voter_jurisdiction,
                candidate_jurisdiction=seed.candidate_jurisdiction,
            ),
        )
        if existing is None:
            result.elections_created += 1
        else:
            result.elections_updated += 1

    logger.info(
        "Seed complete: {} zone(s) created, {} election(s) created, {} updated",
        result.zones_created,
        result.elections_created,
        result.elections_updated,
    )
    return result
