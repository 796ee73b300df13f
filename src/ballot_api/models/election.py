"""Election model: one logical election per election type."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ballot_api.models.base import Base, TimestampMixin, UUIDMixin


class ElectionType(enum.StrEnum):
    """The fixed set of contests run by the community."""

    YUVA_PANK = "YUVA_PANK"
    KAROBARI_MEMBERS = "KAROBARI_MEMBERS"
    TRUSTEES = "TRUSTEES"


class ElectionStatus(enum.StrEnum):
    """Election lifecycle status. Only ACTIVE permits voting."""

    UPCOMING = "UPCOMING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class Jurisdiction(enum.StrEnum):
    """Who may participate: local residents only, or everyone."""

    LOCAL = "LOCAL"
    ALL = "ALL"


class Election(Base, UUIDMixin, TimestampMixin):
    """An election for one election type with its eligibility bounds."""

    __tablename__ = "elections"

    election_type: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ElectionStatus.UPCOMING, server_default=ElectionStatus.UPCOMING.value
    )
    starts_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ends_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    voter_min_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    voter_max_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    candidate_min_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    candidate_max_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    voter_jurisdiction: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Jurisdiction.ALL, server_default=Jurisdiction.ALL.value
    )
    candidate_jurisdiction: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Jurisdiction.ALL, server_default=Jurisdiction.ALL.value
    )

    __table_args__ = (
        CheckConstraint("status IN ('UPCOMING', 'ACTIVE', 'COMPLETED')", name="ck_election_status"),
        CheckConstraint(
            "election_type IN ('YUVA_PANK', 'KAROBARI_MEMBERS', 'TRUSTEES')",
            name="ck_election_type",
        ),
        CheckConstraint("voter_jurisdiction IN ('LOCAL', 'ALL')", name="ck_election_voter_jurisdiction"),
        CheckConstraint("candidate_jurisdiction IN ('LOCAL', 'ALL')", name="ck_election_candidate_jurisdiction"),
    )
