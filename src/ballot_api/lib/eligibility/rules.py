"""Participation rules shared by voters and candidate nominees.

An election restricts who may take part by jurisdiction (local residents
only, or everyone) and by an optional inclusive age range. The same rules
apply to voters (``voter_*`` bounds) and nominees (``candidate_*`` bounds).
When an age bound exists and the person's age cannot be determined, the
person is ineligible.
"""

from datetime import UTC, date, datetime

from ballot_api.lib.eligibility.types import AgeBounds, EligibilityResult, IneligibilityReason

LOCAL = "LOCAL"


def calculate_age(date_of_birth: date, today: date | None = None) -> int:
    """Return completed years between ``date_of_birth`` and ``today``."""
    today = today or datetime.now(UTC).date()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def effective_age(age: int | None, date_of_birth: date | None, today: date | None = None) -> int | None:
    """Prefer an age derived from date of birth, falling back to the stored age."""
    if date_of_birth is not None:
        return calculate_age(date_of_birth, today)
    return age


def check_eligibility(
    *,
    age: int | None,
    jurisdiction: str | None,
    bounds: AgeBounds,
    required_jurisdiction: str,
    role: str = "voter",
) -> EligibilityResult:
    """Check one person against an election's jurisdiction and age rules.

    Args:
        age: Effective age in years, or None if unknown.
        jurisdiction: The person's jurisdiction (``LOCAL`` or ``ALL``).
        bounds: Inclusive age limits for the role.
        required_jurisdiction: ``LOCAL`` restricts participation to local
            residents; anything else admits everyone.
        role: ``voter`` or ``candidate``, used in messages.

    Returns:
        EligibilityResult describing the first failed rule, if any.
    """
    if required_jurisdiction == LOCAL and (jurisdiction or LOCAL) != LOCAL:
        return EligibilityResult(
            eligible=False,
            reason=IneligibilityReason.JURISDICTION,
            message=f"Only local residents can take part in this election as a {role}.",
            age=age,
        )

    if bounds.is_bounded and age is None:
        return EligibilityResult(
            eligible=False,
            reason=IneligibilityReason.AGE_UNKNOWN,
            message=f"Age is required to determine {role} eligibility for this election.",
        )

    if bounds.min_age is not None and age is not None and age < bounds.min_age:
        return EligibilityResult(
            eligible=False,
            reason=IneligibilityReason.TOO_YOUNG,
            message=f"A {role} must be at least {bounds.min_age} years old (age: {age}).",
            age=age,
        )

    if bounds.max_age is not None and age is not None and age > bounds.max_age:
        return EligibilityResult(
            eligible=False,
            reason=IneligibilityReason.TOO_OLD,
            message=f"A {role} must be at most {bounds.max_age} years old (age: {age}).",
            age=age,
        )

    return EligibilityResult(eligible=True, age=age)


def is_zone_frozen(*, zone_active: bool, zone_open_for_voting: bool, election_active: bool) -> bool:
    """A zone accepts new ballots only while it is active, open, and its election is ACTIVE."""
    return not (zone_active and zone_open_for_voting and election_active)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def voting_window_open(starts_at: datetime | None, ends_at: datetime | None, now: datetime | None = None) -> bool:
    """Return True if ``now`` falls within the optional [starts_at, ends_at] window."""
    now = _as_utc(now or datetime.now(UTC))
    if starts_at is not None and now < _as_utc(starts_at):
        return False
    return not (ends_at is not None and now > _as_utc(ends_at))
