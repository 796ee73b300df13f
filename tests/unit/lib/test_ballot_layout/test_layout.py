"""Unit tests for ballot slot layout."""

from ballot_api.lib.ballot_layout import (
    NOTA_POSITION,
    build_position_slots,
    default_position_label,
    is_nota_position,
    make_position_id,
    nota_position_label,
)


class TestNotaLabels:
    """Tests for NOTA position tags."""

    def test_single_seat_shares_one_nota(self) -> None:
        assert nota_position_label(1, 1) == NOTA_POSITION
        assert nota_position_label(1) == NOTA_POSITION

    def test_multi_seat_gets_one_nota_per_seat(self) -> None:
        assert nota_position_label(3, 2) == "NOTA_SEAT_2"

    def test_is_nota_position(self) -> None:
        assert is_nota_position("NOTA")
        assert is_nota_position("NOTA_SEAT_4")
        assert not is_nota_position("Trustee")


class TestPositionIds:
    """Tests for make_position_id and default_position_label."""

    def test_single_seat_uses_label(self) -> None:
        assert make_position_id("Trustee", 1, 1) == "Trustee"

    def test_multi_seat_appends_seat_index(self) -> None:
        assert make_position_id("Trustee", 2, 2) == "Trustee#2"

    def test_default_labels(self) -> None:
        assert default_position_label("YUVA_PANK") == "Yuva Pankh Member"
        assert default_position_label("UNKNOWN") == "Member"


class TestBuildPositionSlots:
    """Tests for build_position_slots."""

    def test_empty_labels_use_default(self) -> None:
        slots = build_position_slots([], 1, "KAROBARI_MEMBERS")
        assert [s.position_id for s in slots] == ["Karobari Member"]
        assert slots[0].nota_position == "NOTA"

    def test_multi_seat_expands_each_label(self) -> None:
        slots = build_position_slots(["Trustee", "Secretary", "Trustee"], 2, "TRUSTEES")
        assert [s.position_id for s in slots] == ["Secretary#1", "Secretary#2", "Trustee#1", "Trustee#2"]
        assert [s.nota_position for s in slots] == ["NOTA_SEAT_1", "NOTA_SEAT_2"] * 2
        assert {s.seat_index for s in slots} == {1, 2}

    def test_non_positive_seats_treated_as_one(self) -> None:
        slots = build_position_slots(["Trustee"], 0, "TRUSTEES")
        assert len(slots) == 1
        assert slots[0].position_id == "Trustee"
