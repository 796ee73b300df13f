"""Domain error taxonomy for ballot assembly, vote casting, and administration.

Every error carries a stable machine-readable ``code`` and an HTTP
``status_code``; the exception message is the human-readable text returned
to callers. :class:`StorageUnavailableError` is what a transient storage
failure becomes once its retries run out.
"""


class BallotError(Exception):
    """Base class for all errors surfaced to API callers."""

    code: str = "BALLOT_ERROR"
    status_code: int = 400
    default_message: str = "The request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# --- Eligibility (terminal for ballot assembly) ---


class VoterNotFoundError(BallotError):
    code = "VOTER_NOT_FOUND"
    status_code = 404
    default_message = "Voter not found."


class ElectionNotFoundError(BallotError):
    code = "ELECTION_NOT_FOUND"
    status_code = 404
    default_message = "Election not found."


class VotingClosedError(BallotError):
    code = "VOTING_CLOSED"
    status_code = 403
    default_message = "Voting is not open for this election."


class ZoneFrozenError(BallotError):
    code = "ZONE_FROZEN"
    status_code = 403
    default_message = "Voting is closed for your zone."


class NoZoneAssignedError(BallotError):
    code = "NO_ZONE_ASSIGNED"
    status_code = 403
    default_message = "You are not assigned to a zone for this election."


class EligibilityError(BallotError):
    """A voter or nominee fails an election's age or jurisdiction rule."""

    status_code = 403


class AgeIneligibleError(EligibilityError):
    code = "AGE_INELIGIBLE"
    default_message = "You do not meet the age requirement for this election."


class JurisdictionIneligibleError(EligibilityError):
    code = "JURISDICTION_INELIGIBLE"
    default_message = "Only local residents can participate in this election."


# --- Vote casting (terminal, never retried with the same payload) ---


class AlreadyVotedError(BallotError):
    code = "ALREADY_VOTED"
    status_code = 409
    default_message = "You have already voted in this election."


class InvalidCandidateError(BallotError):
    code = "INVALID_CANDIDATE"
    status_code = 400
    default_message = "One or more selected candidates are invalid."


# --- Infrastructure (the only retryable kind) ---


class StorageUnavailableError(BallotError):
    code = "STORAGE_UNAVAILABLE"
    status_code = 503
    default_message = "The service is temporarily unavailable. Please retry later."


# --- Administration ---


class ZoneNotFoundError(BallotError):
    code = "ZONE_NOT_FOUND"
    status_code = 404
    default_message = "Zone not found."


class DuplicateZoneError(BallotError):
    code = "DUPLICATE_ZONE"
    status_code = 409
    default_message = "A zone with this code already exists for the election type."


class CandidateNotFoundError(BallotError):
    code = "CANDIDATE_NOT_FOUND"
    status_code = 404
    default_message = "Candidate not found."


class NominationDecisionError(BallotError):
    code = "INVALID_NOMINATION_STATE"
    status_code = 409
    default_message = "The nomination has already been decided."
