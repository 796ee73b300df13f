"""Tests for the `ballot-api token` CLI command."""

import uuid
from collections.abc import Generator
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from ballot_api.cli.app import app
from ballot_api.core.config import Settings
from ballot_api.core.security import decode_token

runner = CliRunner()


@pytest.fixture
def patched_settings(settings: Settings) -> Generator[Settings]:
    with (
        patch("ballot_api.cli.app.get_settings", return_value=settings),
        patch("ballot_api.core.config.get_settings", return_value=settings),
    ):
        yield settings


class TestTokenCommand:
    """Tests for the token command."""

    def test_admin_token(self, patched_settings: Settings) -> None:
        result = runner.invoke(app, ["token", "returning-officer"])

        assert result.exit_code == 0, result.output
        payload = decode_token(result.output.strip(), patched_settings.jwt_secret_key)
        assert payload["sub"] == "returning-officer"
        assert payload["role"] == "admin"

    def test_voter_token(self, patched_settings: Settings) -> None:
        voter_id = str(uuid.uuid4())

        result = runner.invoke(app, ["token", voter_id, "--role", "voter", "--expires-minutes", "5"])

        assert result.exit_code == 0, result.output
        assert decode_token(result.output.strip(), patched_settings.jwt_secret_key)["sub"] == voter_id

    def test_voter_token_needs_uuid(self, patched_settings: Settings) -> None:
        result = runner.invoke(app, ["token", "asha", "--role", "voter"])
        assert result.exit_code != 0

    def test_unknown_role(self, patched_settings: Settings) -> None:
        result = runner.invoke(app, ["token", "asha", "--role", "root"])
        assert result.exit_code != 0
