"""Default zones and elections for the community's three contests."""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class ZoneSeed:
    """One zone to provision.

    Attributes:
        code: Zone code, unique within the election type.
        name: English display name.
        name_local: Gujarati display name.
        election_type: Election type the zone belongs to.
        seats: Seats elected from the zone.
        open_for_voting: Initial administrative open/close state.
    """

    code: str
    name: str
    name_local: str
    election_type: str
    seats: int
    open_for_voting: bool = True


@dataclass(frozen=True)
class ElectionSeed:
    election_type: str
    title: str
    description: str
    starts_at: datetime
    ends_at: datetime
    voter_min_age: int | None = None
    voter_max_age: int | None = None
    candidate_min_age: int | None = None
    candidate_max_age: int | None = None
    voter_jurisdiction: str = "ALL"
    candidate_jurisdiction: str = "ALL"


_STARTS = datetime(2024, 12, 1, tzinfo=UTC)
_ENDS = datetime(2024, 12, 15, 23, 59, 59, tzinfo=UTC)

DEFAULT_ZONES: tuple[ZoneSeed, ...] = (
    # Yuva Pankh
    ZoneSeed("RAIGAD", "Raigad", "રાયગઢ", "YUVA_PANK", 3),
    ZoneSeed("KARNATAKA_GOA", "Karnataka & Goa", "કર્ણાટક અને ગોવા", "YUVA_PANK", 1),
    # Karobari Samiti (21 seats)
    ZoneSeed("RAIGAD", "Raigad", "રાયગઢ", "KAROBARI_MEMBERS", 4),
    ZoneSeed("MUMBAI", "Mumbai", "મુંબઈ", "KAROBARI_MEMBERS", 6),
    ZoneSeed("KARNATAKA_GOA", "Karnataka & Goa", "કર્ણાટક અને ગોવા", "KAROBARI_MEMBERS", 1),
    ZoneSeed("ABDASA", "Abdasa", "અબડાસા", "KAROBARI_MEMBERS", 1),
    ZoneSeed("GARADA", "Garada", "ગરડા", "KAROBARI_MEMBERS", 2),
    ZoneSeed("BHUJ", "Bhuj", "ભુજ", "KAROBARI_MEMBERS", 3),
    ZoneSeed("ANJAR", "Anjar", "અંજાર", "KAROBARI_MEMBERS", 1),
    ZoneSeed("ANYA_GUJARAT", "Anya Gujarat", "અન્ય ગુજરાત", "KAROBARI_MEMBERS", 3),
    # Trustees (7 seats)
    ZoneSeed("MUMBAI", "Mumbai", "મુંબઈ", "TRUSTEES", 2),
    ZoneSeed("RAIGAD", "Raigad", "રાયગઢ", "TRUSTEES", 1),
    ZoneSeed("ABDASA_GARDA", "Abdasa & Garda", "અબડાસા અને ગરડા", "TRUSTEES", 1),
    ZoneSeed("KARNATAKA_GOA", "Karnataka & Goa", "કર્ણાટક અને ગોવા", "TRUSTEES", 1),
    ZoneSeed("ANJAR_ANYA_GUJARAT", "Anjar & Anya Gujarat", "અંજાર અને અન્ય ગુજરાત", "TRUSTEES", 1),
    ZoneSeed("BHUJ", "Bhuj", "ભુજ", "TRUSTEES", 1),
)

DEFAULT_ELECTIONS: tuple[ElectionSeed, ...] = (
    ElectionSeed(
        election_type="YUVA_PANK",
        title="Yuva Pankh Elections 2024",
        description="Youth leadership positions for the future of our community",
        starts_at=_STARTS,
        ends_at=_ENDS,
        voter_min_age=18,
        voter_max_age=40,
        candidate_min_age=18,
        candidate_max_age=40,
        voter_jurisdiction="LOCAL",
        candidate_jurisdiction="LOCAL",
    ),
    ElectionSeed(
        election_type="KAROBARI_MEMBERS",
        title="Karobari Members Election 2024",
        description="Business committee members for community development",
        starts_at=_STARTS,
        ends_at=_ENDS,
        candidate_min_age=25,
        voter_jurisdiction="LOCAL",
        candidate_jurisdiction="LOCAL",
    ),
    ElectionSeed(
        election_type="TRUSTEES",
        title="Trustees Election 2024",
        description="All Samaj members are eligible to be elected as trustees",
        starts_at=_STARTS,
        ends_at=_ENDS,
        candidate_min_age=45,
        voter_jurisdiction="ALL",
        candidate_jurisdiction="LOCAL",
    ),
)
