"""Candidate model: nominees and synthetic NOTA entries, one table for every election type."""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text, false, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ballot_api.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from ballot_api.models.zone import Zone


class CandidateStatus(enum.StrEnum):
    """Nomination approval status. Only APPROVED candidates appear on ballots."""

    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Candidate(Base, UUIDMixin, TimestampMixin):
    """A nominee (or NOTA pseudo-candidate) contesting a position in one zone.

    NOTA rows carry ``is_nota=True`` and a ``position`` of ``NOTA`` or
    ``NOTA_SEAT_<n>``; a partial unique index on (zone_id, position) over
    NOTA rows keeps provisioning idempotent under concurrency.
    """

    __tablename__ = "candidates"

    election_type: Mapped[str] = mapped_column(String(30), nullable=False)
    zone_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("zones.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    name_local: Mapped[str | None] = mapped_column(String(200), nullable=True)
    party: Mapped[str | None] = mapped_column(String(200), nullable=True)
    manifesto: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CandidateStatus.PENDING, server_default=CandidateStatus.PENDING.value
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_nota: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    zone: Mapped["Zone"] = relationship(lazy="raise")

    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'SUBMITTED', 'APPROVED', 'REJECTED')",
            name="ck_candidate_status",
        ),
        Index("idx_candidates_zone_status", "zone_id", "status"),
        Index("idx_candidates_election_type", "election_type"),
        Index(
            "uq_candidates_nota_zone_position",
            "zone_id",
            "position",
            unique=True,
            postgresql_where=text("is_nota"),
            sqlite_where=text("is_nota = 1"),
        ),
    )
