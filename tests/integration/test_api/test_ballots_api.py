"""Integration tests for the ballot and vote submission endpoints."""

from collections.abc import Awaitable, Callable
from typing import Any

from httpx import AsyncClient

from ballot_api.models import ElectionStatus

Factory = Callable[..., Awaitable[Any]]
BALLOT_URL = "/api/v1/ballots/KAROBARI_MEMBERS"


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestGetBallot:
    """Tests for GET /api/v1/ballots/{election_type}."""

    async def test_returns_ballot(
        self,
        client: AsyncClient,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
        make_candidate: Factory,
    ) -> None:
        zone = await make_zone(seats=2)
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id)
        await make_candidate(zone, name="Bhavna Mehta")

        resp = await client.get(BALLOT_URL, headers=_auth(voter_token_for(voter.id)))

        assert resp.status_code == 200
        body = resp.json()
        assert body["zone_code"] == "RAIGAD"
        assert body["is_frozen"] is False
        assert [p["position_id"] for p in body["positions"]] == ["Karobari Member#1", "Karobari Member#2"]
        assert resp.headers["Cache-Control"] == "no-store"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"

    async def test_requires_token(self, client: AsyncClient) -> None:
        resp = await client.get(BALLOT_URL)
        assert resp.status_code == 401

    async def test_admin_token_forbidden(self, client: AsyncClient, admin_token: str) -> None:
        resp = await client.get(BALLOT_URL, headers=_auth(admin_token))
        assert resp.status_code == 403

    async def test_unknown_election_type(self, client: AsyncClient, voter_token_for: Callable, make_voter: Factory) -> None:
        voter = await make_voter()
        resp = await client.get("/api/v1/ballots/PRESIDENT", headers=_auth(voter_token_for(voter.id)))
        assert resp.status_code == 422

    async def test_closed_election_error_body(
        self,
        client: AsyncClient,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election(status=ElectionStatus.COMPLETED)
        voter = await make_voter(karobari_zone_id=zone.id)

        resp = await client.get(BALLOT_URL, headers=_auth(voter_token_for(voter.id)))

        assert resp.status_code == 403
        assert resp.json()["code"] == "VOTING_CLOSED"

    async def test_underage_voter(
        self,
        client: AsyncClient,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election(voter_min_age=18)
        voter = await make_voter(karobari_zone_id=zone.id, age=17)

        resp = await client.get(BALLOT_URL, headers=_auth(voter_token_for(voter.id)))

        assert resp.status_code == 403
        assert resp.json()["code"] == "AGE_INELIGIBLE"


class TestCastVotes:
    """Tests for POST /api/v1/ballots/{election_type}/votes."""

    async def test_cast_then_duplicate(
        self,
        client: AsyncClient,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
        make_candidate: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id)
        candidate = await make_candidate(zone)
        headers = {**_auth(voter_token_for(voter.id)), "X-Forwarded-For": "198.51.100.4, 10.0.0.1"}

        first = await client.post(
            f"{BALLOT_URL}/votes", json={"selections": {"Karobari Member": str(candidate.id)}}, headers=headers
        )
        second = await client.post(f"{BALLOT_URL}/votes", json={"selections": {"Karobari Member": "NOTA"}}, headers=headers)

        assert first.status_code == 201
        assert first.json()["votes_count"] == 1
        assert second.status_code == 409
        assert second.json()["code"] == "ALREADY_VOTED"

    async def test_voted_ballot_is_frozen(
        self,
        client: AsyncClient,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id)
        headers = _auth(voter_token_for(voter.id))

        await client.post(f"{BALLOT_URL}/votes", json={"selections": {"Karobari Member": "NOTA"}}, headers=headers)
        resp = await client.get(BALLOT_URL, headers=headers)

        assert resp.status_code == 200
        assert resp.json()["has_voted"] is True
        assert resp.json()["is_frozen"] is True

    async def test_invalid_candidate(
        self,
        client: AsyncClient,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id)

        resp = await client.post(
            f"{BALLOT_URL}/votes",
            json={"selections": {"Treasurer": "NOTA"}},
            headers=_auth(voter_token_for(voter.id)),
        )

        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_CANDIDATE"

    async def test_empty_selections_rejected(self, client: AsyncClient, voter_token_for: Callable, make_voter: Factory) -> None:
        voter = await make_voter()
        resp = await client.post(
            f"{BALLOT_URL}/votes", json={"selections": {}}, headers=_auth(voter_token_for(voter.id))
        )
        assert resp.status_code == 422
