"""Integration tests for voter endpoints."""

import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from httpx import AsyncClient

Factory = Callable[..., Awaitable[Any]]


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestDashboard:
    """Tests for GET /api/v1/voters/me/dashboard."""

    async def test_dashboard(
        self, client: AsyncClient, voter_token_for: Callable, make_zone: Factory, make_election: Factory, make_voter: Factory
    ) -> None:
        zone = await make_zone()
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id, name="Nisha Gala")

        resp = await client.get("/api/v1/voters/me/dashboard", headers=_auth(voter_token_for(voter.id)))

        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Nisha Gala"
        assert len(body["elections"]) == 3

    async def test_unknown_voter(self, client: AsyncClient, voter_token_for: Callable) -> None:
        resp = await client.get("/api/v1/voters/me/dashboard", headers=_auth(voter_token_for(uuid.uuid4())))
        assert resp.status_code == 404


class TestLookup:
    """Tests for GET /api/v1/voters/lookup."""

    async def test_lookup_masks_phone(self, client: AsyncClient, admin_token: str, make_voter: Factory) -> None:
        voter = await make_voter(phone="9820216044")

        resp = await client.get("/api/v1/voters/lookup", params={"phone": "+91 98202 16044"}, headers=_auth(admin_token))

        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == str(voter.id)
        assert body["phone_masked"] == "******6044"
        assert "phone" not in body

    async def test_not_found(self, client: AsyncClient, admin_token: str) -> None:
        resp = await client.get("/api/v1/voters/lookup", params={"phone": "9000000000"}, headers=_auth(admin_token))
        assert resp.status_code == 404
        assert resp.json()["code"] == "VOTER_NOT_FOUND"


class TestRevoke:
    """Tests for DELETE /api/v1/voters/{voter_id}/votes/{election_type}."""

    async def test_revoke_ballot(
        self,
        client: AsyncClient,
        admin_token: str,
        voter_token_for: Callable,
        make_zone: Factory,
        make_election: Factory,
        make_voter: Factory,
    ) -> None:
        zone = await make_zone()
        await make_election()
        voter = await make_voter(karobari_zone_id=zone.id)
        await client.post(
            "/api/v1/ballots/KAROBARI_MEMBERS/votes",
            json={"selections": {"Karobari Member": "NOTA"}},
            headers=_auth(voter_token_for(voter.id)),
        )

        resp = await client.delete(f"/api/v1/voters/{voter.id}/votes/KAROBARI_MEMBERS", headers=_auth(admin_token))

        assert resp.status_code == 200
        assert resp.json() == {
            "voter_id": str(voter.id),
            "election_type": "KAROBARI_MEMBERS",
            "votes_deleted": 1,
            "has_voted": False,
        }

    async def test_voter_cannot_revoke(self, client: AsyncClient, voter_token_for: Callable) -> None:
        voter_id = uuid.uuid4()
        resp = await client.delete(
            f"/api/v1/voters/{voter_id}/votes/KAROBARI_MEMBERS", headers=_auth(voter_token_for(voter_id))
        )
        assert resp.status_code == 403
