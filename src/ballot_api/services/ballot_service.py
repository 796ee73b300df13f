"""Eligibility and ballot assembly.

Given a voter and an election type, decides whether the voter may vote and
builds the ballot of positions and approved candidates for the voter's zone.
Checks run in a fixed order and the first failure is raised verbatim:

1. voter exists and is active
2. election exists and accepts votes
3. voter is assigned a zone for the election type
4. voter passes the election's jurisdiction and age rules
5. the zone is not frozen (a voter who already voted still sees the ballot)
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import (
    AgeIneligibleError,
    ElectionNotFoundError,
    JurisdictionIneligibleError,
    NoZoneAssignedError,
    VoterNotFoundError,
    VotingClosedError,
    ZoneFrozenError,
)
from ballot_api.core.retry import with_storage_retry
from ballot_api.lib.ballot_layout import PositionSlot, build_position_slots
from ballot_api.lib.eligibility import (
    AgeBounds,
    IneligibilityReason,
    check_eligibility,
    effective_age,
    is_zone_frozen,
)
from ballot_api.models.candidate import Candidate, CandidateStatus
from ballot_api.models.election import Election
from ballot_api.models.vote import BallotReceipt
from ballot_api.models.voter import Voter, zone_id_for
from ballot_api.models.zone import Zone
from ballot_api.schemas.ballot import BallotCandidate, BallotPosition, BallotResponse
from ballot_api.services.election_service import election_accepts_votes, get_election
from ballot_api.services.nota_service import ensure_nota_candidate
from ballot_api.services.voter_service import get_voter


@dataclass(frozen=True)
class VotingContext:
    """Everything ballot assembly and vote casting need, as plain values.

    Attributes:
        voter_id: The voter.
        election_id: The election being voted in.
        election_type: Election type discriminator.
        zone_id: The voter's zone for this election type.
        zone_code: Zone code.
        zone_name: Zone display name.
        seats: Seats elected from the zone.
        zone_frozen: True if the zone accepts no new ballots.
        has_voted: True if the voter already submitted a ballot for this election.
    """

    voter_id: uuid.UUID
    election_id: uuid.UUID
    election_type: str
    zone_id: uuid.UUID
    zone_code: str
    zone_name: str
    seats: int
    zone_frozen: bool
    has_voted: bool

    @property
    def is_frozen(self) -> bool:
        return self.zone_frozen or self.has_voted


@dataclass
class BallotLayout:
    """Ballot slots with the approved candidates and NOTA options per slot."""

    slots: list[PositionSlot]
    candidates_by_label: dict[str, list[Candidate]] = field(default_factory=dict)
    nota_by_position: dict[str, Candidate] = field(default_factory=dict)

    def options_for(self, slot: PositionSlot) -> list[Candidate]:
        options = list(self.candidates_by_label.get(slot.label, []))
        nota = self.nota_by_position.get(slot.nota_position)
        if nota is not None:
            options.append(nota)
        return options


async def _load_participants(
    session: AsyncSession,
    voter_id: uuid.UUID,
    election_type: str,
) -> tuple[Voter | None, Election | None, Zone | None, bool]:
    try:
        voter = await get_voter(session, voter_id)
        if voter is None:
            return None, None, None, False
        election = await get_election(session, election_type)
        zone = None
        zone_id = zone_id_for(voter, election_type)
        if zone_id is not None:
            result = await session.execute(select(Zone).where(Zone.id == zone_id))
            zone = result.scalar_one_or_none()
        has_voted = False
        if election is not None:
            result = await session.execute(
                select(BallotReceipt.id).where(
                    BallotReceipt.voter_id == voter_id,
                    BallotReceipt.election_id == election.id,
                )
            )
            has_voted = result.first() is not None
    except DBAPIError:
        await session.rollback()
        raise
    return voter, election, zone, has_voted


async def resolve_voting_context(
    session: AsyncSession,
    voter_id: uuid.UUID,
    election_type: str,
    *,
    now: datetime | None = None,
    enforce_window: bool = False,
    retry_attempts: int = 3,
    retry_base_delay: float = 0.5,
) -> VotingContext:
    """Run the eligibility checks for a voter and election type.

    Args:
        session: Async database session.
        voter_id: The voter requesting a ballot.
        election_type: Election type being voted in.
        now: Reference time for the optional voting window.
        enforce_window: Also require ``starts_at <= now <= ends_at``.
        retry_attempts: Attempts for transient storage failures on the reads.
        retry_base_delay: Backoff base delay in seconds.

    Returns:
        The VotingContext for the voter and election.

    Raises:
        VoterNotFoundError: Voter missing or inactive.
        ElectionNotFoundError: No election of that type.
        VotingClosedError: Election not ACTIVE (or outside its window when enforced).
        NoZoneAssignedError: Voter has no zone for this election type.
        JurisdictionIneligibleError: Election admits local voters only.
        AgeIneligibleError: Age unknown or outside the voter age bounds.
        ZoneFrozenError: Zone closed and the voter has not voted yet.
        StorageUnavailableError: Storage kept failing transiently.
    """
    voter, election, zone, has_voted = await with_storage_retry(
        lambda: _load_participants(session, voter_id, election_type),
        attempts=retry_attempts,
        base_delay=retry_base_delay,
        description="ballot eligibility lookup",
    )

    if voter is None or not voter.is_active:
        raise VoterNotFoundError
    if election is None:
        msg = f"No election found for type {election_type}."
        raise ElectionNotFoundError(msg)
    if not election_accepts_votes(election, now=now, enforce_window=enforce_window):
        raise VotingClosedError
    if zone is None or zone.election_type != election.election_type:
        raise NoZoneAssignedError

    outcome = check_eligibility(
        age=effective_age(voter.age, voter.date_of_birth),
        jurisdiction=voter.jurisdiction,
        bounds=AgeBounds(election.voter_min_age, election.voter_max_age),
        required_jurisdiction=election.voter_jurisdiction,
    )
    if not outcome.eligible:
        if outcome.reason == IneligibilityReason.JURISDICTION:
            raise JurisdictionIneligibleError(outcome.message)
        raise AgeIneligibleError(outcome.message)

    zone_frozen = is_zone_frozen(
        zone_active=zone.is_active,
        zone_open_for_voting=zone.is_open_for_voting,
        election_active=True,
    )
    if zone_frozen and not has_voted:
        raise ZoneFrozenError

    return VotingContext(
        voter_id=voter.id,
        election_id=election.id,
        election_type=election.election_type,
        zone_id=zone.id,
        zone_code=zone.code,
        zone_name=zone.name,
        seats=zone.seats,
        zone_frozen=zone_frozen,
        has_voted=has_voted,
    )


async def _approved_candidates(session: AsyncSession, context: VotingContext) -> list[Candidate]:
    result = await session.execute(
        select(Candidate)
        .where(
            Candidate.zone_id == context.zone_id,
            Candidate.election_type == context.election_type,
            Candidate.status == CandidateStatus.APPROVED,
        )
        .order_by(Candidate.position, Candidate.name)
    )
    return list(result.scalars().all())


async def load_ballot_layout(session: AsyncSession, context: VotingContext) -> BallotLayout:
    """Lay out the zone's ballot, provisioning any missing NOTA candidates.

    Args:
        session: Async database session. May be committed or rolled back
            by NOTA provisioning.
        context: Resolved voting context.

    Returns:
        The BallotLayout for the voter's zone.
    """
    existing = await _approved_candidates(session, context)
    labels = [c.position for c in existing if not c.is_nota]
    slots = build_position_slots(labels, context.seats, context.election_type)

    present = {c.position for c in existing if c.is_nota}
    seat_indexes = sorted({slot.seat_index for slot in slots if slot.nota_position not in present})
    for seat_index in seat_indexes:
        await ensure_nota_candidate(session, context.zone_id, seat_index if context.seats > 1 else None)

    layout = BallotLayout(slots=slots)
    candidates = await _approved_candidates(session, context) if seat_indexes else existing
    for candidate in candidates:
        if candidate.is_nota:
            layout.nota_by_position[candidate.position] = candidate
        else:
            layout.candidates_by_label.setdefault(candidate.position, []).append(candidate)
    return layout


async def assemble_ballot(
    session: AsyncSession,
    voter_id: uuid.UUID,
    election_type: str,
    *,
    now: datetime | None = None,
    enforce_window: bool = False,
    retry_attempts: int = 3,
    retry_base_delay: float = 0.5,
) -> BallotResponse:
    """Build the ballot a voter may fill for an election.

    Positions without nominees are still returned with their NOTA option.

    Raises:
        BallotError: Any eligibility failure from :func:`resolve_voting_context`.
    """
    context = await resolve_voting_context(
        session,
        voter_id,
        election_type,
        now=now,
        enforce_window=enforce_window,
        retry_attempts=retry_attempts,
        retry_base_delay=retry_base_delay,
    )
    layout = await load_ballot_layout(session, context)

    positions = [
        BallotPosition(
            position_id=slot.position_id,
            label=slot.label,
            seat_index=slot.seat_index,
            candidates=[BallotCandidate.model_validate(c) for c in layout.options_for(slot)],
        )
        for slot in layout.slots
    ]
    return BallotResponse(
        election_id=context.election_id,
        election_type=context.election_type,
        zone_id=context.zone_id,
        zone_code=context.zone_code,
        zone_name=context.zone_name,
        seats=context.seats,
        is_frozen=context.is_frozen,
        has_voted=context.has_voted,
        positions=positions,
    )
