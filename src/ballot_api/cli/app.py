"""Typer CLI root application with serve command."""

import typer

from ballot_api.core.config import get_settings
from ballot_api.core.logging import setup_logging

app = typer.Typer(name="ballot-api", help="Community election ballot and vote ledger CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "ballot_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from ballot_api.cli.db_cmd import db_app
    from ballot_api.cli.election_cmd import election_app
    from ballot_api.cli.seed_cmd import seed
    from ballot_api.cli.token_cmd import token
    from ballot_api.cli.zone_cmd import zone_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(election_app, name="election", help="Election registry commands")
    app.add_typer(zone_app, name="zone", help="Zone registry commands")
    app.command("seed")(seed)
    app.command("token")(token)


_register_subcommands()
