"""Contract tests for the published OpenAPI document."""

from unittest.mock import patch

import pytest

from ballot_api.core.config import Settings
from ballot_api.main import create_app


@pytest.fixture(scope="module")
def openapi() -> dict:
    settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key="test-secret-key-not-for-production",
    )
    with patch("ballot_api.main.get_settings", return_value=settings):
        return create_app().openapi()


class TestPaths:
    """The route surface operators and the voter app depend on."""

    @pytest.mark.parametrize(
        ("path", "method"),
        [
            ("/api/v1/health", "get"),
            ("/api/v1/zones", "get"),
            ("/api/v1/zones", "post"),
            ("/api/v1/zones/{zone_id}/voting", "patch"),
            ("/api/v1/elections", "get"),
            ("/api/v1/elections/{election_type}", "get"),
            ("/api/v1/elections/{election_type}/status", "patch"),
            ("/api/v1/elections/{election_type}/results", "get"),
            ("/api/v1/ballots/{election_type}", "get"),
            ("/api/v1/ballots/{election_type}/votes", "post"),
            ("/api/v1/voters/me/dashboard", "get"),
            ("/api/v1/voters/lookup", "get"),
            ("/api/v1/voters/{voter_id}/votes/{election_type}", "delete"),
            ("/api/v1/candidates", "get"),
            ("/api/v1/candidates", "post"),
            ("/api/v1/candidates/{candidate_id}/approve", "post"),
            ("/api/v1/candidates/{candidate_id}/reject", "post"),
        ],
    )
    def test_path_exists(self, openapi: dict, path: str, method: str) -> None:
        assert method in openapi["paths"][path]


class TestVoteSubmission:
    """Contract for POST /ballots/{election_type}/votes."""

    def test_documents_error_responses(self, openapi: dict) -> None:
        responses = openapi["paths"]["/api/v1/ballots/{election_type}/votes"]["post"]["responses"]
        assert {"201", "400", "403", "404", "409", "503"} <= set(responses)
        assert responses["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")

    def test_election_type_is_enumerated(self, openapi: dict) -> None:
        params = openapi["paths"]["/api/v1/ballots/{election_type}"]["get"]["parameters"]
        schema = next(p for p in params if p["name"] == "election_type")["schema"]
        ref = schema["$ref"].rsplit("/", 1)[-1]
        assert openapi["components"]["schemas"][ref]["enum"] == ["YUVA_PANK", "KAROBARI_MEMBERS", "TRUSTEES"]
