"""Voter dashboard: per-election summary cards served from a bounded TTL cache.

The cache is a display optimization only. Vote casting never reads it; it
only invalidates a voter's entry after that voter's ballots change.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.lib.dashboard_cache import DashboardCache
from ballot_api.lib.eligibility import AgeBounds, check_eligibility, effective_age, is_zone_frozen
from ballot_api.models.election import ElectionType
from ballot_api.models.vote import BallotReceipt
from ballot_api.models.voter import zone_id_for
from ballot_api.models.zone import Zone
from ballot_api.schemas.voter import DashboardElectionCard, VoterDashboardResponse
from ballot_api.services.election_service import election_accepts_votes, list_elections
from ballot_api.services.voter_service import require_voter

_dashboard_cache: DashboardCache | None = None


def get_dashboard_cache() -> DashboardCache:
    """Return the process-wide dashboard cache, creating it from settings on first use."""
    global _dashboard_cache  # noqa: PLW0603
    if _dashboard_cache is None:
        from ballot_api.core.config import get_settings

        settings = get_settings()
        _dashboard_cache = DashboardCache(
            ttl_seconds=settings.dashboard_cache_ttl_seconds,
            max_entries=settings.dashboard_cache_max_entries,
        )
    return _dashboard_cache


def configure_dashboard_cache(ttl_seconds: float, max_entries: int) -> DashboardCache:
    """Replace the process-wide dashboard cache (used at startup and in tests)."""
    global _dashboard_cache  # noqa: PLW0603
    _dashboard_cache = DashboardCache(ttl_seconds=ttl_seconds, max_entries=max_entries)
    return _dashboard_cache


def invalidate_voter_dashboard(voter_id: uuid.UUID) -> None:
    if _dashboard_cache is not None:
        _dashboard_cache.invalidate(voter_id)


async def build_voter_dashboard(
    session: AsyncSession,
    voter_id: uuid.UUID,
    *,
    enforce_window: bool = False,
) -> VoterDashboardResponse:
    """Compute the dashboard for a voter without consulting the cache.

    Raises:
        VoterNotFoundError: If the voter does not exist or is inactive.
    """
    voter = await require_voter(session, voter_id)
    elections = {election.election_type: election for election in await list_elections(session)}

    result = await session.execute(select(BallotReceipt.election_type).where(BallotReceipt.voter_id == voter_id))
    voted_types = set(result.scalars().all())

    zone_ids = {zone_id_for(voter, t) for t in ElectionType} - {None}
    zones: dict[uuid.UUID, Zone] = {}
    if zone_ids:
        result = await session.execute(select(Zone).where(Zone.id.in_(zone_ids)))
        zones = {zone.id: zone for zone in result.scalars().all()}

    age = effective_age(voter.age, voter.date_of_birth)
    cards: list[DashboardElectionCard] = []
    for election_type in ElectionType:
        election = elections.get(election_type)
        zone_id = zone_id_for(voter, election_type)
        zone = zones.get(zone_id) if zone_id is not None else None
        has_voted = election_type.value in voted_types

        reason: str | None = None
        if election is None:
            reason = "election_not_found"
        elif zone is None:
            reason = "no_zone_assigned"
        else:
            outcome = check_eligibility(
                age=age,
                jurisdiction=voter.jurisdiction,
                bounds=AgeBounds(election.voter_min_age, election.voter_max_age),
                required_jurisdiction=election.voter_jurisdiction,
            )
            if not outcome.eligible and outcome.reason is not None:
                reason = outcome.reason.value

        frozen = (
            has_voted
            or election is None
            or zone is None
            or is_zone_frozen(
                zone_active=zone.is_active,
                zone_open_for_voting=zone.is_open_for_voting,
                election_active=election_accepts_votes(election, enforce_window=enforce_window),
            )
        )
        cards.append(
            DashboardElectionCard(
                election_type=election_type.value,
                title=election.title if election else None,
                election_status=election.status if election else None,
                zone_id=zone.id if zone else None,
                zone_code=zone.code if zone else None,
                zone_name=zone.name if zone else None,
                seats=zone.seats if zone else None,
                is_eligible=reason is None,
                ineligibility_reason=reason,
                is_frozen=frozen,
                has_voted=has_voted,
            )
        )

    return VoterDashboardResponse(
        voter_id=voter.id,
        name=voter.name,
        has_voted=voter.has_voted,
        elections=cards,
        generated_at=datetime.now(UTC),
    )


async def get_voter_dashboard(
    session: AsyncSession,
    voter_id: uuid.UUID,
    *,
    enforce_window: bool = False,
    use_cache: bool = True,
) -> VoterDashboardResponse:
    """Return the voter's dashboard, from cache when fresh."""
    cache = get_dashboard_cache() if use_cache else None
    if cache is not None:
        cached = cache.get(voter_id)
        if cached is not None:
            return cached

    dashboard = await build_voter_dashboard(session, voter_id, enforce_window=enforce_window)
    if cache is not None:
        cache.set(voter_id, dashboard)
    return dashboard
