"""Eligibility library: age, jurisdiction, freeze and voting-window rules.

Pure functions with no database access, shared by ballot assembly and
candidate nomination.
"""

from ballot_api.lib.eligibility.rules import (
    calculate_age,
    check_eligibility,
    effective_age,
    is_zone_frozen,
    voting_window_open,
)
from ballot_api.lib.eligibility.types import AgeBounds, EligibilityResult, IneligibilityReason

__all__ = [
    "AgeBounds",
    "EligibilityResult",
    "IneligibilityReason",
    "calculate_age",
    "check_eligibility",
    "effective_age",
    "is_zone_frozen",
    "voting_window_open",
]
