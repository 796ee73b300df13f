"""Election registry service: one logical election per election type.

Status transitions are unconstrained: any status may be set at any time and
reapplying the current status is a no-op. Only ACTIVE permits voting; the
start/end timestamps additionally gate voting only when window enforcement
is configured.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import ElectionNotFoundError
from ballot_api.core.logging import audit_logger
from ballot_api.lib.eligibility import voting_window_open
from ballot_api.models.election import Election, ElectionStatus
from ballot_api.schemas.election import ElectionResponse, ElectionUpsertRequest


def election_accepts_votes(
    election: Election,
    *,
    now: datetime | None = None,
    enforce_window: bool = False,
) -> bool:
    """Return True iff the election is ACTIVE (and inside its window when enforced)."""
    if election.status != ElectionStatus.ACTIVE:
        return False
    if enforce_window:
        return voting_window_open(election.starts_at, election.ends_at, now)
    return True


def to_response(election: Election, *, enforce_window: bool = False) -> ElectionResponse:
    response = ElectionResponse.model_validate(election)
    response.is_voting_open = election_accepts_votes(election, enforce_window=enforce_window)
    return response


async def get_election(session: AsyncSession, election_type: str) -> Election | None:
    """Return the election for ``election_type`` (first match), or None."""
    result = await session.execute(
        select(Election).where(Election.election_type == election_type).order_by(Election.created_at).limit(1)
    )
    return result.scalar_one_or_none()


async def require_election(session: AsyncSession, election_type: str) -> Election:
    """Return the election for ``election_type``.

    Raises:
        ElectionNotFoundError: If no election of that type exists.
    """
    election = await get_election(session, election_type)
    if election is None:
        msg = f"No election found for type {election_type}."
        raise ElectionNotFoundError(msg)
    return election


async def list_elections(session: AsyncSession) -> list[Election]:
    result = await session.execute(select(Election).order_by(Election.election_type))
    return list(result.scalars().all())


async def is_voting_open(
    session: AsyncSession,
    election_type: str,
    *,
    now: datetime | None = None,
    enforce_window: bool = False,
) -> bool:
    """Return True iff an election of this type exists and accepts votes."""
    election = await get_election(session, election_type)
    if election is None:
        return False
    return election_accepts_votes(election, now=now, enforce_window=enforce_window)


async def upsert_election(session: AsyncSession, request: ElectionUpsertRequest) -> Election:
    """Create the election for a type, or update it in place if it exists.

    Args:
        session: Async database session.
        request: Full election definition.

    Returns:
        The created or updated Election.
    """
    election = await get_election(session, request.election_type)
    values = request.model_dump()
    created = election is None
    if election is None:
        election = Election(**values)
        session.add(election)
    else:
        for field, value in values.items():
            setattr(election, field, value)

    await session.commit()
    await session.refresh(election)
    audit_logger.info(
        "election {} {}",
        election.election_type,
        "created" if created else "updated",
        action="election_upserted",
        election_id=str(election.id),
        status=election.status,
    )
    return election


async def set_status(session: AsyncSession, election_type: str, status: ElectionStatus) -> Election:
    """Set an election's lifecycle status. Idempotent.

    Args:
        session: Async database session.
        election_type: Election type to update.
        status: New status.

    Returns:
        The Election after the change.

    Raises:
        ElectionNotFoundError: If no election of that type exists.
    """
    election = await require_election(session, election_type)
    previous = election.status
    if previous == status:
        return election

    election.status = status
    await session.commit()
    await session.refresh(election)
    audit_logger.info(
        "election {} status {} -> {}",
        election_type,
        previous,
        status,
        action="election_status_changed",
        election_id=str(election.id),
        previous_status=previous,
        status=str(status),
    )
    return election
