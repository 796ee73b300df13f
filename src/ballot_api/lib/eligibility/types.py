"""Data types for the eligibility library."""

from dataclasses import dataclass
from enum import StrEnum


class IneligibilityReason(StrEnum):
    """Why a person failed an election's participation rules."""

    JURISDICTION = "jurisdiction"
    AGE_UNKNOWN = "age_unknown"
    TOO_YOUNG = "too_young"
    TOO_OLD = "too_old"


@dataclass(frozen=True)
class AgeBounds:
    """Inclusive age limits; ``None`` means unbounded on that side."""

    min_age: int | None = None
    max_age: int | None = None

    @property
    def is_bounded(self) -> bool:
        return self.min_age is not None or self.max_age is not None


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of checking one person against an election's rules.

    Attributes:
        eligible: True if every rule passed.
        reason: The first failed rule, or None when eligible.
        message: Human-readable explanation suitable for API callers.
        age: The age used for the check, if known.
    """

    eligible: bool
    reason: IneligibilityReason | None = None
    message: str | None = None
    age: int | None = None
