"""Ballot layout library: position slots and NOTA tags for zone ballots."""

from ballot_api.lib.ballot_layout.layout import (
    DEFAULT_POSITION_LABELS,
    NOTA_POSITION,
    NOTA_SEAT_PREFIX,
    NOTA_SELECTION,
    PositionSlot,
    build_position_slots,
    default_position_label,
    is_nota_position,
    make_position_id,
    nota_position_label,
)

__all__ = [
    "DEFAULT_POSITION_LABELS",
    "NOTA_POSITION",
    "NOTA_SEAT_PREFIX",
    "NOTA_SELECTION",
    "PositionSlot",
    "build_position_slots",
    "default_position_label",
    "is_nota_position",
    "make_position_id",
    "nota_position_label",
]
