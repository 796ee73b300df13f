"""Phone library: normalization and lookup variants for voter phone numbers."""

from ballot_api.lib.phone.normalize import (
    NATIONAL_NUMBER_LENGTH,
    digits_only,
    normalize_phone,
    phone_lookup_variants,
)

__all__ = [
    "NATIONAL_NUMBER_LENGTH",
    "digits_only",
    "normalize_phone",
    "phone_lookup_variants",
]
