"""Tests for seeding the default zones and elections."""

from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.lib.seed_defaults import DEFAULT_ELECTIONS, DEFAULT_ZONES, ElectionSeed, ZoneSeed
from ballot_api.models import Election, ElectionStatus, Zone
from ballot_api.services.election_service import get_election, set_status
from ballot_api.services.seed_service import seed_defaults

_ZONES = (
    ZoneSeed("BHUJ", "Bhuj", "ભુજ", "KAROBARI_MEMBERS", 3),
    ZoneSeed("MUMBAI", "Mumbai", "મુંબઈ", "TRUSTEES", 2),
)
_ELECTIONS = (
    ElectionSeed(
        election_type="TRUSTEES",
        title="Trustees 2024",
        description="Trustee election",
        starts_at=datetime(2024, 12, 1, tzinfo=UTC),
        ends_at=datetime(2024, 12, 15, tzinfo=UTC),
        candidate_min_age=45,
    ),
)


class TestSeedDefaults:
    """Tests for seed_defaults."""

    async def test_full_default_seed(self, async_session: AsyncSession) -> None:
        result = await seed_defaults(async_session)

        assert result.zones_created == len(DEFAULT_ZONES)
        assert result.elections_created == len(DEFAULT_ELECTIONS)
        assert await async_session.scalar(select(func.count()).select_from(Zone)) == len(DEFAULT_ZONES)
        assert await async_session.scalar(select(func.count()).select_from(Election)) == len(DEFAULT_ELECTIONS)

    async def test_rerun_is_idempotent(self, async_session: AsyncSession) -> None:
        await seed_defaults(async_session, zones=_ZONES, elections=_ELECTIONS)

        result = await seed_defaults(async_session, zones=_ZONES, elections=_ELECTIONS)

        assert result.zones_created == 0
        assert result.zones_existing == 2
        assert result.elections_existing == 1

    async def test_existing_election_kept_unless_overwritten(self, async_session: AsyncSession) -> None:
        await seed_defaults(async_session, zones=(), elections=_ELECTIONS)
        await set_status(async_session, "TRUSTEES", ElectionStatus.ACTIVE)

        await seed_defaults(async_session, zones=(), elections=_ELECTIONS)
        assert (await get_election(async_session, "TRUSTEES")).status == ElectionStatus.ACTIVE

        result = await seed_defaults(async_session, zones=(), elections=_ELECTIONS, overwrite_elections=True)
        assert result.elections_updated == 1
        assert (await get_election(async_session, "TRUSTEES")).status == ElectionStatus.UPCOMING
