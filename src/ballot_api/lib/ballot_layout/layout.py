"""Ballot slot layout for single-seat and multi-seat zones.

A zone with ``seats = N`` elects N members per position label. Each
(label, seat) pair is one ballot slot, and every slot has its own NOTA
option so a voter can decline any seat independently.
"""

from dataclasses import dataclass

NOTA_POSITION = "NOTA"
NOTA_SEAT_PREFIX = "NOTA_SEAT_"
NOTA_SELECTION = "NOTA"
SEAT_SEPARATOR = "#"

DEFAULT_POSITION_LABELS: dict[str, str] = {
    "YUVA_PANK": "Yuva Pankh Member",
    "KAROBARI_MEMBERS": "Karobari Member",
    "TRUSTEES": "Trustee",
}


@dataclass(frozen=True)
class PositionSlot:
    """One fillable slot on a ballot.

    Attributes:
        position_id: Stable key used in vote submissions.
        label: Candidate position label contested by this slot.
        seat_index: 1-based seat number within the zone.
        nota_position: Position tag of the NOTA candidate for this seat.
    """

    position_id: str
    label: str
    seat_index: int
    nota_position: str


def default_position_label(election_type: str) -> str:
    """Label used when a zone has no approved nominees yet."""
    return DEFAULT_POSITION_LABELS.get(election_type, "Member")


def nota_position_label(seats: int, seat_index: int | None = None) -> str:
    """Return the NOTA position tag for a seat.

    Single-seat zones share one ``NOTA`` candidate; multi-seat zones get
    ``NOTA_SEAT_<i>`` per seat.
    """
    if seats <= 1 or seat_index is None:
        return NOTA_POSITION
    return f"{NOTA_SEAT_PREFIX}{seat_index}"


def is_nota_position(position: str) -> bool:
    return position == NOTA_POSITION or position.startswith(NOTA_SEAT_PREFIX)


def make_position_id(label: str, seats: int, seat_index: int) -> str:
    if seats <= 1:
        return label
    return f"{label}{SEAT_SEPARATOR}{seat_index}"


def build_position_slots(labels: list[str], seats: int, election_type: str) -> list[PositionSlot]:
    """Lay out the ballot slots for a zone.

    Args:
        labels: Distinct position labels of approved, non-NOTA candidates.
        seats: Number of seats in the zone (values below 1 are treated as 1).
        election_type: Used to pick a default label when ``labels`` is empty.

    Returns:
        Slots ordered by label, then seat index.
    """
    seats = max(1, seats)
    ordered_labels = sorted(set(labels)) or [default_position_label(election_type)]
    return [
        PositionSlot(
            position_id=make_position_id(label, seats, seat_index),
            label=label,
            seat_index=seat_index,
            nota_position=nota_position_label(seats, seat_index),
        )
        for label in ordered_labels
        for seat_index in range(1, seats + 1)
    ]
