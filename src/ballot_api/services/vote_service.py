"""Vote ledger service: atomic ballot submission, revocation and tallying.

A submission is all or nothing: the ballot receipt, one vote per position
and the voter's has-voted flag commit in one transaction. The unique
constraints on ``ballot_receipts (voter_id, election_id)`` and
``votes (voter_id, election_id, position_id)`` are the real guard against
double voting; a violation from a concurrent submission surfaces as
``AlreadyVotedError``.
"""

import uuid
from collections import defaultdict
from datetime import UTC, datetime

from sqlalchemy import delete, distinct, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.errors import AlreadyVotedError, InvalidCandidateError, VoterNotFoundError
from ballot_api.core.logging import audit_logger
from ballot_api.core.retry import with_storage_retry
from ballot_api.lib.ballot_layout import NOTA_SELECTION, build_position_slots
from ballot_api.models.candidate import Candidate, CandidateStatus
from ballot_api.models.vote import BallotReceipt, Vote
from ballot_api.models.voter import Voter
from ballot_api.models.zone import Zone
from ballot_api.schemas.ballot import (
    CandidateTally,
    CastVotesResponse,
    ElectionResultsResponse,
    PositionTally,
    RevokeVotesResponse,
    ZoneTally,
)
from ballot_api.services.ballot_service import BallotLayout, VotingContext, load_ballot_layout, resolve_voting_context
from ballot_api.services.dashboard_service import invalidate_voter_dashboard
from ballot_api.services.election_service import require_election
from ballot_api.services.voter_service import get_voter

_DUPLICATE_BALLOT_CONSTRAINTS = ("uq_ballot_receipt_voter_election", "uq_vote_voter_election_position")


async def _is_duplicate_ballot(session: AsyncSession, context: VotingContext, error: IntegrityError) -> bool:
    """Tell a lost double-vote race apart from other integrity failures.

    PostgreSQL names the violated constraint; SQLite only names its columns,
    so an existing receipt for the (voter, election) pair also counts.
    """
    if any(name in str(error.orig) for name in _DUPLICATE_BALLOT_CONSTRAINTS):
        return True
    result = await session.execute(
        select(BallotReceipt.id).where(
            BallotReceipt.voter_id == context.voter_id,
            BallotReceipt.election_id == context.election_id,
        )
    )
    return result.first() is not None


def resolve_selections(layout: BallotLayout, selections: dict[str, str]) -> list[tuple[str, Candidate, bool]]:
    """Validate a submission against the ballot layout.

    Every slot gets exactly one choice. Slots the voter left out, and slots
    marked ``NOTA``, resolve to that seat's NOTA candidate.

    Args:
        layout: The voter's ballot layout.
        selections: Map of position id to candidate id or ``NOTA``.

    Returns:
        ``(position_id, candidate, auto_filled)`` for every slot, in layout order.

    Raises:
        InvalidCandidateError: Empty submission, unknown position, malformed or
            ineligible candidate id, or the same candidate picked twice.
    """
    if not selections:
        msg = "At least one selection is required."
        raise InvalidCandidateError(msg)

    known = {slot.position_id for slot in layout.slots}
    unknown = sorted(set(selections) - known)
    if unknown:
        msg = f"Unknown position(s): {', '.join(unknown)}."
        raise InvalidCandidateError(msg)

    resolved: list[tuple[str, Candidate, bool]] = []
    picked: set[uuid.UUID] = set()
    for slot in layout.slots:
        nota = layout.nota_by_position.get(slot.nota_position)
        raw = selections.get(slot.position_id)
        if raw is None or raw.strip().upper() == NOTA_SELECTION:
            if nota is None:
                msg = f"No NOTA option is available for {slot.position_id}."
                raise InvalidCandidateError(msg)
            resolved.append((slot.position_id, nota, raw is None))
            continue

        try:
            candidate_id = uuid.UUID(raw.strip())
        except ValueError as e:
            msg = f"Invalid candidate id for {slot.position_id}."
            raise InvalidCandidateError(msg) from e

        if nota is not None and candidate_id == nota.id:
            resolved.append((slot.position_id, nota, False))
            continue

        candidate = next((c for c in layout.candidates_by_label.get(slot.label, []) if c.id == candidate_id), None)
        if candidate is None or candidate.status != CandidateStatus.APPROVED:
            msg = f"Candidate is not eligible for {slot.position_id}."
            raise InvalidCandidateError(msg)
        if candidate_id in picked:
            msg = f"Candidate {candidate.name} was selected for more than one seat."
            raise InvalidCandidateError(msg)
        picked.add(candidate_id)
        resolved.append((slot.position_id, candidate, False))
    return resolved


async def cast_votes(
    session: AsyncSession,
    voter_id: uuid.UUID,
    election_type: str,
    selections: dict[str, str],
    *,
    ip_address: str | None = None,
    user_agent: str | None = None,
    now: datetime | None = None,
    enforce_window: bool = False,
    retry_attempts: int = 3,
    retry_base_delay: float = 0.5,
) -> CastVotesResponse:
    """Record a voter's full ballot for an election in one transaction.

    Args:
        session: Async database session.
        voter_id: The submitting voter.
        election_type: Election being voted in.
        selections: Map of position id to candidate id or ``NOTA``.
        ip_address: Submitting client IP, stored for audit.
        user_agent: Submitting client user agent, stored for audit.
        now: Reference time for the optional voting window.
        enforce_window: Also require the election's start/end window.
        retry_attempts: Attempts for transient storage failures on commit.
        retry_base_delay: Backoff base delay in seconds.

    Returns:
        The ballot receipt.

    Raises:
        BallotError: Any eligibility failure from ballot assembly.
        AlreadyVotedError: The voter already submitted a ballot for this election.
        IntegrityError: Any other constraint violation on commit, re-raised.
        InvalidCandidateError: The selections do not fit the voter's ballot.
        StorageUnavailableError: The commit kept failing transiently.
    """
    context: VotingContext = await resolve_voting_context(
        session,
        voter_id,
        election_type,
        now=now,
        enforce_window=enforce_window,
        retry_attempts=retry_attempts,
        retry_base_delay=retry_base_delay,
    )
    if context.has_voted:
        raise AlreadyVotedError

    layout = await load_ballot_layout(session, context)
    resolved = resolve_selections(layout, selections)
    nota_count = sum(1 for _, candidate, _ in resolved if candidate.is_nota)
    auto_filled = sum(1 for _, _, filled in resolved if filled)

    async def _commit_ballot() -> BallotReceipt:
        submitted_at = datetime.now(UTC)
        receipt = BallotReceipt(
            voter_id=context.voter_id,
            election_id=context.election_id,
            election_type=context.election_type,
            votes_count=len(resolved),
            nota_count=nota_count,
            submitted_at=submitted_at,
        )
        try:
            session.add(receipt)
            session.add_all(
                [
                    Vote(
                        voter_id=context.voter_id,
                        election_id=context.election_id,
                        election_type=context.election_type,
                        candidate_id=candidate.id,
                        zone_id=context.zone_id,
                        position_id=position_id,
                        ip_address=ip_address,
                        user_agent=user_agent,
                        cast_at=submitted_at,
                    )
                    for position_id, candidate, _ in resolved
                ]
            )
            await session.execute(update(Voter).where(Voter.id == context.voter_id).values(has_voted=True))
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        return receipt

    try:
        receipt = await with_storage_retry(
            _commit_ballot,
            attempts=retry_attempts,
            base_delay=retry_base_delay,
            description="ballot commit",
        )
    except IntegrityError as e:
        if await _is_duplicate_ballot(session, context, e):
            raise AlreadyVotedError from e
        raise

    invalidate_voter_dashboard(context.voter_id)
    audit_logger.info(
        "ballot cast for {} in zone {}",
        context.election_type,
        context.zone_code,
        action="ballot_cast",
        voter_id=str(context.voter_id),
        election_id=str(context.election_id),
        receipt_id=str(receipt.id),
        votes_count=len(resolved),
        nota_count=nota_count,
        auto_filled=auto_filled,
        ip_address=ip_address,
    )
    return CastVotesResponse(
        receipt_id=receipt.id,
        election_type=context.election_type,
        votes_count=receipt.votes_count,
        nota_count=receipt.nota_count,
        submitted_at=receipt.submitted_at,
    )


async def revoke_votes(
    session: AsyncSession,
    voter_id: uuid.UUID,
    election_type: str,
    *,
    retry_attempts: int = 3,
    retry_base_delay: float = 0.5,
) -> RevokeVotesResponse:
    """Administrative override: delete a voter's ballot for one election.

    The votes and the receipt are removed together; the voter's has-voted
    flag is reset once no receipts remain for any election.

    Raises:
        VoterNotFoundError: If the voter does not exist.
        ElectionNotFoundError: If no election of that type exists.
    """
    voter = await get_voter(session, voter_id)
    if voter is None:
        raise VoterNotFoundError
    election = await require_election(session, election_type)
    election_id = election.id

    async def _delete_ballot() -> tuple[int, bool]:
        try:
            result = await session.execute(
                delete(Vote).where(Vote.voter_id == voter_id, Vote.election_id == election_id)
            )
            deleted = result.rowcount or 0
            await session.execute(
                delete(BallotReceipt).where(BallotReceipt.voter_id == voter_id, BallotReceipt.election_id == election_id)
            )
            remaining = await session.execute(
                select(func.count()).select_from(BallotReceipt).where(BallotReceipt.voter_id == voter_id)
            )
            still_voted = remaining.scalar_one() > 0
            await session.execute(update(Voter).where(Voter.id == voter_id).values(has_voted=still_voted))
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        return deleted, still_voted

    deleted, still_voted = await with_storage_retry(
        _delete_ballot,
        attempts=retry_attempts,
        base_delay=retry_base_delay,
        description="ballot revocation",
    )
    invalidate_voter_dashboard(voter_id)
    audit_logger.info(
        "ballot revoked for {}",
        election_type,
        action="ballot_revoked",
        voter_id=str(voter_id),
        election_id=str(election_id),
        votes_deleted=deleted,
    )
    return RevokeVotesResponse(
        voter_id=voter_id,
        election_type=str(election_type),
        votes_deleted=deleted,
        has_voted=still_voted,
    )


async def tally_results(session: AsyncSession, election_type: str) -> ElectionResultsResponse:
    """Count votes per zone, position and candidate (NOTA included).

    Raises:
        ElectionNotFoundError: If no election of that type exists.
    """
    election = await require_election(session, election_type)

    zones_result = await session.execute(
        select(Zone).where(Zone.election_type == election.election_type).order_by(Zone.code)
    )
    zones = list(zones_result.scalars().all())

    candidates_result = await session.execute(
        select(Candidate).where(Candidate.election_type == election.election_type)
    )
    candidates = {c.id: c for c in candidates_result.scalars().all()}

    counts_result = await session.execute(
        select(Vote.zone_id, Vote.position_id, Vote.candidate_id, func.count())
        .where(Vote.election_id == election.id)
        .group_by(Vote.zone_id, Vote.position_id, Vote.candidate_id)
    )
    counts: dict[uuid.UUID, dict[str, dict[uuid.UUID, int]]] = defaultdict(lambda: defaultdict(dict))
    for zone_id, position_id, candidate_id, count in counts_result.all():
        counts[zone_id][position_id][candidate_id] = count

    ballots_result = await session.execute(
        select(Vote.zone_id, func.count(distinct(Vote.voter_id)))
        .where(Vote.election_id == election.id)
        .group_by(Vote.zone_id)
    )
    ballots_by_zone = dict(ballots_result.all())

    total_result = await session.execute(
        select(func.count()).select_from(BallotReceipt).where(BallotReceipt.election_id == election.id)
    )

    zone_tallies: list[ZoneTally] = []
    for zone in zones:
        zone_candidates = [c for c in candidates.values() if c.zone_id == zone.id]
        labels = [c.position for c in zone_candidates if not c.is_nota and c.status == CandidateStatus.APPROVED]
        slots = build_position_slots(labels, zone.seats, election.election_type)
        zone_counts = counts.get(zone.id, {})

        position_ids = [slot.position_id for slot in slots]
        position_ids += sorted(set(zone_counts) - set(position_ids))
        slot_by_id = {slot.position_id: slot for slot in slots}

        positions: list[PositionTally] = []
        for position_id in position_ids:
            slot = slot_by_id.get(position_id)
            listed: list[uuid.UUID] = []
            if slot is not None:
                listed = [
                    c.id
                    for c in zone_candidates
                    if c.status == CandidateStatus.APPROVED
                    and (c.position == slot.nota_position if c.is_nota else c.position == slot.label)
                ]
            position_counts = zone_counts.get(position_id, {})
            listed += [cid for cid in position_counts if cid not in listed]
            tallies = [
                CandidateTally(
                    candidate_id=cid,
                    name=candidates[cid].name if cid in candidates else str(cid),
                    is_nota=candidates[cid].is_nota if cid in candidates else False,
                    votes=position_counts.get(cid, 0),
                )
                for cid in listed
            ]
            tallies.sort(key=lambda t: (-t.votes, t.is_nota, t.name))
            positions.append(PositionTally(position_id=position_id, candidates=tallies))

        zone_tallies.append(
            ZoneTally(
                zone_id=zone.id,
                zone_code=zone.code,
                zone_name=zone.name,
                seats=zone.seats,
                ballots_cast=ballots_by_zone.get(zone.id, 0),
                positions=positions,
            )
        )

    return ElectionResultsResponse(
        election_type=election.election_type,
        election_status=election.status,
        total_ballots=total_result.scalar_one(),
        zones=zone_tallies,
    )
