"""Phone number normalization for voter login lookups.

Voter rosters store phone numbers in mixed shapes (``+919820216044``,
``09820216044``, ``9820216044``, ``91 98202 16044``). Everything is reduced
to the bare national significant number so a single indexed column can be
matched, with a few stored-shape variants kept for legacy rows.
"""

import re

import phonenumbers
from phonenumbers import NumberParseException

NATIONAL_NUMBER_LENGTH = 10

_NON_DIGITS = re.compile(r"\D")


def digits_only(raw: str) -> str:
    """Strip everything except ASCII digits."""
    return _NON_DIGITS.sub("", raw or "")


def normalize_phone(raw: str | None, default_region: str = "IN") -> str:
    """Return the national significant number for ``raw``.

    Uses libphonenumber parsing so country codes and trunk prefixes are
    removed correctly; falls back to the last ten digits when the input
    cannot be parsed.

    Args:
        raw: Phone number as typed or as stored in the roster.
        default_region: ISO region assumed when no ``+<country>`` prefix is given.

    Returns:
        Normalized digits, or an empty string for empty/non-numeric input.
    """
    if not raw:
        return ""
    digits = digits_only(raw)
    if not digits:
        return ""

    try:
        parsed = phonenumbers.parse(raw, default_region)
        national = str(parsed.national_number)
    except NumberParseException:
        national = digits

    if len(national) > NATIONAL_NUMBER_LENGTH:
        national = national[-NATIONAL_NUMBER_LENGTH:]
    return national


def phone_lookup_variants(raw: str | None, default_region: str = "IN") -> list[str]:
    """Return the exact stored shapes to try, most specific first.

    The raw input comes first (exact match), then the normalized number and
    the usual prefixed spellings (``+91``, ``91``, ``0``).

    Args:
        raw: Phone number as typed.
        default_region: ISO region assumed when no country prefix is given.

    Returns:
        De-duplicated candidate strings in lookup order.
    """
    variants: list[str] = []
    if raw and raw.strip():
        variants.append(raw.strip())

    normalized = normalize_phone(raw, default_region)
    if normalized:
        country_code = phonenumbers.country_code_for_region(default_region)
        variants.append(normalized)
        if country_code:
            variants.append(f"+{country_code}{normalized}")
            variants.append(f"{country_code}{normalized}")
        variants.append(f"0{normalized}")

    seen: set[str] = set()
    ordered: list[str] = []
    for value in variants:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered
