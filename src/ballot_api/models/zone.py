"""Zone model: election-type-scoped grouping of voters and candidates."""

from sqlalchemy import Boolean, CheckConstraint, Index, Integer, String, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column

from ballot_api.models.base import Base, TimestampMixin, UUIDMixin


class Zone(Base, UUIDMixin, TimestampMixin):
    """A geographic/organizational zone contested within one election type.

    Attributes:
        code: Short code, unique per election type (e.g. ``RAIGAD``).
        name: Display name.
        name_local: Optional regional-language display name.
        election_type: The election type this zone belongs to.
        seats: Number of seats elected from this zone.
        is_active: Inactive zones are hidden from listings.
        is_open_for_voting: Administrative open/close switch for the zone.
    """

    __tablename__ = "zones"

    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    name_local: Mapped[str | None] = mapped_column(String(200), nullable=True)
    election_type: Mapped[str] = mapped_column(String(30), nullable=False)
    seats: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    is_open_for_voting: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (
        UniqueConstraint("code", "election_type", name="uq_zone_code_election_type"),
        CheckConstraint("seats >= 1", name="ck_zone_seats_positive"),
        Index("idx_zones_election_type", "election_type"),
    )
