"""Candidate nomination service: nominate, approve, reject and list candidates.

Nominees are checked against the election's candidate age and jurisdiction
rules with the same rule engine used for voters. NOTA candidates are never
created here; see ``nota_service``.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import (
    AgeIneligibleError,
    CandidateNotFoundError,
    JurisdictionIneligibleError,
    NominationDecisionError,
    ZoneNotFoundError,
)
from ballot_api.core.logging import audit_logger
from ballot_api.lib.ballot_layout import default_position_label
from ballot_api.lib.eligibility import AgeBounds, IneligibilityReason, check_eligibility, effective_age
from ballot_api.models.candidate import Candidate, CandidateStatus
from ballot_api.models.zone import Zone
from ballot_api.schemas.candidate import CandidateCreateRequest
from ballot_api.services.election_service import get_election

_UNDECIDED = {CandidateStatus.PENDING, CandidateStatus.SUBMITTED}


async def get_candidate(session: AsyncSession, candidate_id: uuid.UUID) -> Candidate | None:
    result = await session.execute(select(Candidate).where(Candidate.id == candidate_id))
    return result.scalar_one_or_none()


async def list_candidates(
    session: AsyncSession,
    *,
    zone_id: uuid.UUID | None = None,
    status: CandidateStatus | None = None,
    election_type: str | None = None,
    include_nota: bool = True,
) -> list[Candidate]:
    """List candidates filtered by zone, status and election type."""
    query = select(Candidate)
    if zone_id is not None:
        query = query.where(Candidate.zone_id == zone_id)
    if status is not None:
        query = query.where(Candidate.status == status)
    if election_type is not None:
        query = query.where(Candidate.election_type == election_type)
    if not include_nota:
        query = query.where(Candidate.is_nota.is_(False))
    query = query.order_by(Candidate.position, Candidate.name)
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_nomination(session: AsyncSession, request: CandidateCreateRequest) -> Candidate:
    """Record a nomination after checking the election's candidate rules.

    Args:
        session: Async database session.
        request: Nomination details, including the nominee's age facts.

    Returns:
        The created Candidate (PENDING or SUBMITTED).

    Raises:
        ZoneNotFoundError: If the zone does not exist for the election type.
        JurisdictionIneligibleError: If the election admits local nominees only.
        AgeIneligibleError: If the nominee's age is unknown or out of bounds.
    """
    result = await session.execute(
        select(Zone).where(Zone.id == request.zone_id, Zone.election_type == request.election_type)
    )
    if result.scalar_one_or_none() is None:
        msg = f"Zone {request.zone_id} not found for {request.election_type}."
        raise ZoneNotFoundError(msg)

    election = await get_election(session, request.election_type)
    if election is not None:
        outcome = check_eligibility(
            age=effective_age(request.age, request.date_of_birth),
            jurisdiction=request.jurisdiction,
            bounds=AgeBounds(election.candidate_min_age, election.candidate_max_age),
            required_jurisdiction=election.candidate_jurisdiction,
            role="candidate",
        )
        if not outcome.eligible:
            if outcome.reason == IneligibilityReason.JURISDICTION:
                raise JurisdictionIneligibleError(outcome.message)
            raise AgeIneligibleError(outcome.message)

    candidate = Candidate(
        election_type=request.election_type,
        zone_id=request.zone_id,
        name=request.name,
        name_local=request.name_local,
        party=request.party,
        manifesto=request.manifesto,
        position=request.position or default_position_label(request.election_type),
        status=request.status,
        is_nota=False,
    )
    session.add(candidate)
    await session.commit()
    await session.refresh(candidate)
    return candidate


async def _decide(
    session: AsyncSession,
    candidate_id: uuid.UUID,
    decision: CandidateStatus,
    reason: str | None = None,
) -> Candidate:
    candidate = await get_candidate(session, candidate_id)
    if candidate is None or candidate.is_nota:
        raise CandidateNotFoundError

    if candidate.status == decision:
        return candidate
    if candidate.status not in _UNDECIDED:
        msg = f"Nomination is already {candidate.status}."
        raise NominationDecisionError(msg)

    candidate.status = decision
    candidate.rejection_reason = reason
    await session.commit()
    await session.refresh(candidate)
    audit_logger.info(
        "candidate {} {}",
        candidate.id,
        decision.lower(),
        action="nomination_decided",
        candidate_id=str(candidate.id),
        zone_id=str(candidate.zone_id),
        election_type=candidate.election_type,
        status=str(decision),
    )
    return candidate


async def approve_candidate(session: AsyncSession, candidate_id: uuid.UUID) -> Candidate:
    """Approve a pending or submitted nomination. Re-approving is a no-op."""
    return await _decide(session, candidate_id, CandidateStatus.APPROVED)


async def reject_candidate(session: AsyncSession, candidate_id: uuid.UUID, reason: str) -> Candidate:
    """Reject a pending or submitted nomination with a reason. Re-rejecting is a no-op."""
    return await _decide(session, candidate_id, CandidateStatus.REJECTED, reason)
