"""Tests for the voter dashboard and its cache."""

import uuid
from collections.abc import Awaitable, Callable
from typing import Any
from unittest.mock import patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import VoterNotFoundError
from ballot_api.lib.dashboard_cache import DashboardCache
from ballot_api.models import ElectionStatus, ElectionType
from ballot_api.services import dashboard_service
from ballot_api.services.dashboard_service import build_voter_dashboard, get_voter_dashboard
from ballot_api.services.vote_service import cast_votes

Factory = Callable[..., Awaitable[Any]]


class TestBuildVoterDashboard:
    """Tests for build_voter_dashboard."""

    async def test_card_per_election_type(
        self,
        async_session: AsyncSession,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        karobari = await make_zone()
        yuva = await make_zone(code="BHUJ", election_type=ElectionType.YUVA_PANK)
        await make_election()
        await make_election(election_type=ElectionType.YUVA_PANK, title="Yuva", voter_max_age=40)
        voter = await make_voter(karobari_zone_id=karobari.id, yuva_pankh_zone_id=yuva.id, age=55)

        dashboard = await build_voter_dashboard(async_session, voter.id)
        cards = {c.election_type: c for c in dashboard.elections}

        assert set(cards) == {"YUVA_PANK", "KAROBARI_MEMBERS", "TRUSTEES"}
        assert cards["KAROBARI_MEMBERS"].is_eligible
        assert not cards["KAROBARI_MEMBERS"].is_frozen
        assert cards["KAROBARI_MEMBERS"].zone_code == "RAIGAD"
        assert cards["YUVA_PANK"].ineligibility_reason == "too_old"
        assert cards["TRUSTEES"].ineligibility_reason == "election_not_found"
        assert cards["TRUSTEES"].is_frozen

    async def test_unassigned_zone_reported(
        self, async_session: AsyncSession, make_election: Factory, make_voter: Factory
    ) -> None:
        await make_election(election_type=ElectionType.TRUSTEES, title="Trustees")
        voter = await make_voter()

        dashboard = await build_voter_dashboard(async_session, voter.id)
        card = next(c for c in dashboard.elections if c.election_type == "TRUSTEES")

        assert card.ineligibility_reason == "no_zone_assigned"
        assert card.is_frozen

    async def test_upcoming_election_frozen(
        self, async_session: AsyncSession, make_zone: Factory, make_election: Factory, make_voter: Factory
    ) -> None:
        zone = await make_zone()
        await make_election(status=ElectionStatus.UPCOMING)
        voter = await make_voter(karobari_zone_id=zone.id)

        dashboard = await build_voter_dashboard(async_session, voter.id)
        card = next(c for c in dashboard.elections if c.election_type == "KAROBARI_MEMBERS")

        assert card.is_eligible
        assert card.is_frozen

    async def test_unknown_voter(self, async_session: AsyncSession) -> None:
        with pytest.raises(VoterNotFoundError):
            await build_voter_dashboard(async_session, uuid.uuid4())


class TestGetVoterDashboard:
    """Tests for the cached dashboard path."""

    async def test_second_call_served_from_cache(
        self, async_session: AsyncSession, dashboard_cache: DashboardCache, make_voter: Factory
    ) -> None:
        voter = await make_voter()

        first = await get_voter_dashboard(async_session, voter.id)
        with patch.object(dashboard_service, "build_voter_dashboard") as mock_build:
            second = await get_voter_dashboard(async_session, voter.id)

        mock_build.assert_not_called()
        assert second is first
        assert dashboard_cache.stats().hits == 1

    async def test_bypass_cache(self, async_session: AsyncSession, dashboard_cache: DashboardCache, make_voter: Factory) -> None:
        voter = await make_voter()

        await get_voter_dashboard(async_session, voter.id, use_cache=False)

        assert len(dashboard_cache) == 0

    async def test_vote_refreshes_dashboard(
        self,
        async_session: AsyncSession,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id)

        before = await get_voter_dashboard(async_session, voter.id)
        await cast_votes(async_session, voter.id, ElectionType.KAROBARI_MEMBERS, {"Karobari Member": "NOTA"})
        after = await get_voter_dashboard(async_session, voter.id)

        card_before = next(c for c in before.elections if c.election_type == "KAROBARI_MEMBERS")
        card_after = next(c for c in after.elections if c.election_type == "KAROBARI_MEMBERS")
        assert not card_before.has_voted
        assert card_after.has_voted
        assert card_after.is_frozen
        assert after.has_voted

    def test_cache_created_lazily_from_settings(self, settings: Any) -> None:
        dashboard_service._dashboard_cache = None
        with patch("ballot_api.core.config.get_settings", return_value=settings):
            cache = dashboard_service.get_dashboard_cache()

        assert cache.stats().max_entries == settings.dashboard_cache_max_entries
        assert dashboard_service.get_dashboard_cache() is cache

    def test_invalidate_without_cache_is_noop(self) -> None:
        dashboard_service._dashboard_cache = None
        dashboard_service.invalidate_voter_dashboard(uuid.uuid4())
