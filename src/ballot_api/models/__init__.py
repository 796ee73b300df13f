"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from ballot_api.models.candidate import Candidate, CandidateStatus
from ballot_api.models.election import Election, ElectionStatus, ElectionType, Jurisdiction
from ballot_api.models.vote import BallotReceipt, Vote
from ballot_api.models.voter import Voter
from ballot_api.models.zone import Zone

__all__ = [
    "BallotReceipt",
    "Candidate",
    "CandidateStatus",
    "Election",
    "ElectionStatus",
    "ElectionType",
    "Jurisdiction",
    "Vote",
    "Voter",
    "Zone",
]
