"""Tests for request schema validation."""

import uuid

import pytest
from pydantic import ValidationError

from ballot_api.schemas.ballot import CastVotesRequest
from ballot_api.schemas.candidate import CandidateCreateRequest
from ballot_api.schemas.election import ElectionUpsertRequest
from ballot_api.schemas.voter import VoterCreateRequest
from ballot_api.schemas.zone import ZoneCreateRequest


class TestZoneCreateRequest:
    """Tests for ZoneCreateRequest."""

    def test_defaults(self) -> None:
        req = ZoneCreateRequest(code="BHUJ", name="Bhuj", election_type="KAROBARI_MEMBERS")
        assert req.seats == 1
        assert req.is_open_for_voting is True

    @pytest.mark.parametrize("seats", [0, 51])
    def test_seat_bounds(self, seats: int) -> None:
        with pytest.raises(ValidationError):
            ZoneCreateRequest(code="BHUJ", name="Bhuj", election_type="KAROBARI_MEMBERS", seats=seats)

    def test_unknown_election_type(self) -> None:
        with pytest.raises(ValidationError):
            ZoneCreateRequest(code="BHUJ", name="Bhuj", election_type="MAYOR")


class TestElectionUpsertRequest:
    """Tests for ElectionUpsertRequest."""

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ElectionUpsertRequest(
                election_type="TRUSTEES",
                title="Trustees",
                starts_at="2024-12-15T00:00:00Z",
                ends_at="2024-12-01T00:00:00Z",
            )

    def test_inverted_candidate_ages_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ElectionUpsertRequest(election_type="TRUSTEES", title="Trustees", candidate_min_age=60, candidate_max_age=45)

    def test_open_bounds_allowed(self) -> None:
        req = ElectionUpsertRequest(election_type="TRUSTEES", title="Trustees", candidate_min_age=45)
        assert req.candidate_max_age is None
        assert req.status == "UPCOMING"


class TestCandidateCreateRequest:
    """Tests for CandidateCreateRequest."""

    def test_decided_status_not_accepted(self) -> None:
        with pytest.raises(ValidationError):
            CandidateCreateRequest(election_type="TRUSTEES", zone_id=uuid.uuid4(), name="A", status="APPROVED")

    def test_default_jurisdiction_is_local(self) -> None:
        req = CandidateCreateRequest(election_type="TRUSTEES", zone_id=uuid.uuid4(), name="A")
        assert req.jurisdiction == "LOCAL"
        assert req.position is None


class TestOtherRequests:
    """Tests for vote and voter requests."""

    def test_cast_votes_needs_a_selection(self) -> None:
        with pytest.raises(ValidationError):
            CastVotesRequest(selections={})

    def test_voter_age_bounds(self) -> None:
        with pytest.raises(ValidationError):
            VoterCreateRequest(voter_roll_id="KV-1", name="A", age=-1)
