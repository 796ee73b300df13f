"""Vote ledger ORM models.

Provides Vote (one row per filled ballot position) and BallotReceipt (one row
per completed voter submission for an election). Both are append-only;
rows are only ever removed by an administrative revocation.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from ballot_api.models.base import Base, UUIDMixin


class Vote(Base, UUIDMixin):
    """A single cast selection for one ballot position.

    ``election_type`` discriminates the contest and ``candidate_id`` is the
    single reference to the chosen candidate (NOTA included).
    """

    __tablename__ = "votes"

    voter_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("voters.id", ondelete="CASCADE"),
        nullable=False,
    )
    election_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("elections.id", ondelete="RESTRICT"),
        nullable=False,
    )
    election_type: Mapped[str] = mapped_column(String(30), nullable=False)
    candidate_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("candidates.id", ondelete="RESTRICT"),
        nullable=False,
    )
    zone_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("zones.id", ondelete="RESTRICT"),
        nullable=False,
    )
    position_id: Mapped[str] = mapped_column(String(120), nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    cast_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("voter_id", "election_id", "position_id", name="uq_vote_voter_election_position"),
        Index("idx_votes_election_candidate", "election_id", "candidate_id"),
        Index("idx_votes_voter_id", "voter_id"),
    )


class BallotReceipt(Base, UUIDMixin):
    """Completion record for a voter's submitted ballot in one election.

    The unique (voter_id, election_id) pair is what serializes concurrent
    submissions by the same voter.
    """

    __tablename__ = "ballot_receipts"

    voter_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("voters.id", ondelete="CASCADE"),
        nullable=False,
    )
    election_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("elections.id", ondelete="RESTRICT"),
        nullable=False,
    )
    election_type: Mapped[str] = mapped_column(String(30), nullable=False)
    votes_count: Mapped[int] = mapped_column(Integer, nullable=False)
    nota_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("voter_id", "election_id", name="uq_ballot_receipt_voter_election"),
        Index("idx_ballot_receipts_election_type", "election_type"),
    )
