"""Integration tests for the `ballot-api seed` CLI command."""

from typer.testing import CliRunner

from ballot_api.cli.app import app
from ballot_api.core.config import Settings
from ballot_api.lib.seed_defaults import DEFAULT_ELECTIONS, DEFAULT_ZONES

runner = CliRunner()


class TestSeedCommand:
    """Tests for the seed command."""

    def test_seed_then_rerun(self, cli_settings: Settings) -> None:
        first = runner.invoke(app, ["seed"])
        second = runner.invoke(app, ["seed"])

        assert first.exit_code == 0, first.output
        assert f"Zones: {len(DEFAULT_ZONES)} created" in first.output
        assert f"Elections: {len(DEFAULT_ELECTIONS)} created" in first.output
        assert second.exit_code == 0, second.output
        assert f"Zones: 0 created, {len(DEFAULT_ZONES)} existing" in second.output

    def test_overwrite_elections(self, cli_settings: Settings) -> None:
        runner.invoke(app, ["seed"])

        result = runner.invoke(app, ["seed", "--overwrite-elections"])

        assert result.exit_code == 0, result.output
        assert f"{len(DEFAULT_ELECTIONS)} updated" in result.output
