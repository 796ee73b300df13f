"""Voter model: canonical roll of eligible people with per-election zone assignments."""

import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, false, true
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ballot_api.models.base import Base, TimestampMixin, UUIDMixin
from ballot_api.models.election import ElectionType, Jurisdiction

if TYPE_CHECKING:
    from ballot_api.models.zone import Zone


class Voter(Base, UUIDMixin, TimestampMixin):
    """Individual voter loaded from the community roster.

    ``phone`` holds the normalized national number (last 10 digits), which is
    the unique login key. Each election type has its own optional zone link.
    """

    __tablename__ = "voters"

    voter_roll_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True, index=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    jurisdiction: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Jurisdiction.LOCAL, server_default=Jurisdiction.LOCAL.value
    )

    # Zone assignments
    zone_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("zones.id", ondelete="SET NULL"), nullable=True
    )
    karobari_zone_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("zones.id", ondelete="SET NULL"), nullable=True, index=True
    )
    trustee_zone_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("zones.id", ondelete="SET NULL"), nullable=True, index=True
    )
    yuva_pankh_zone_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("zones.id", ondelete="SET NULL"), nullable=True, index=True
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    has_voted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    zone: Mapped["Zone | None"] = relationship(foreign_keys=[zone_id], lazy="raise")
    karobari_zone: Mapped["Zone | None"] = relationship(foreign_keys=[karobari_zone_id], lazy="raise")
    trustee_zone: Mapped["Zone | None"] = relationship(foreign_keys=[trustee_zone_id], lazy="raise")
    yuva_pankh_zone: Mapped["Zone | None"] = relationship(foreign_keys=[yuva_pankh_zone_id], lazy="raise")


# Which voter column holds the zone assignment for each election type.
ZONE_COLUMN_BY_ELECTION_TYPE: dict[str, str] = {
    ElectionType.YUVA_PANK: "yuva_pankh_zone_id",
    ElectionType.KAROBARI_MEMBERS: "karobari_zone_id",
    ElectionType.TRUSTEES: "trustee_zone_id",
}


def zone_id_for(voter: Voter, election_type: str) -> uuid.UUID | None:
    """Return the voter's zone id for ``election_type``, or None if unassigned."""
    column = ZONE_COLUMN_BY_ELECTION_TYPE.get(election_type)
    if column is None:
        return None
    return getattr(voter, column)
