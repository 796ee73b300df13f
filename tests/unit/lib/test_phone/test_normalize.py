"""Unit tests for phone normalization and lookup variants."""

import pytest

from ballot_api.lib.phone import digits_only, normalize_phone, phone_lookup_variants


class TestDigitsOnly:
    """Tests for digits_only."""

    def test_strips_formatting(self) -> None:
        assert digits_only("+91 (982) 021-6044") == "919820216044"

    def test_empty(self) -> None:
        assert digits_only("") == ""


class TestNormalizePhone:
    """Tests for normalize_phone."""

    @pytest.mark.parametrize(
        "raw",
        ["+919820216044", "9820216044", "09820216044", "+91 98202 16044", "919820216044"],
    )
    def test_common_shapes_reduce_to_national_number(self, raw: str) -> None:
        """Every stored or typed shape collapses to the same ten digits."""
        assert normalize_phone(raw) == "9820216044"

    @pytest.mark.parametrize("raw", [None, "", "   ", "no digits"])
    def test_empty_or_non_numeric_returns_empty(self, raw: str | None) -> None:
        assert normalize_phone(raw) == ""

    def test_overlong_input_keeps_last_ten_digits(self) -> None:
        assert normalize_phone("+91 98202 16044 12345") == "1604412345"


class TestPhoneLookupVariants:
    """Tests for phone_lookup_variants."""

    def test_raw_input_comes_first(self) -> None:
        variants = phone_lookup_variants(" +919820216044 ")
        assert variants[0] == "+919820216044"

    def test_includes_prefixed_spellings(self) -> None:
        variants = phone_lookup_variants("9820216044")
        assert variants == ["9820216044", "+919820216044", "919820216044", "09820216044"]

    def test_no_duplicates(self) -> None:
        variants = phone_lookup_variants("09820216044")
        assert len(variants) == len(set(variants))

    def test_empty_input(self) -> None:
        assert phone_lookup_variants("") == []
        assert phone_lookup_variants(None) == []
