"""Database migration CLI commands using Alembic programmatically."""

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from loguru import logger

if TYPE_CHECKING:
    from alembic.config import Config

db_app = typer.Typer()

_config_path = Path("alembic.ini")


@db_app.callback()
def db_callback(
    config: Path = typer.Option(Path("alembic.ini"), "--config", "-c", help="Path to alembic.ini"),
) -> None:
    """Select the Alembic configuration used by the migration commands."""
    global _config_path  # noqa: PLW0603
    _config_path = config


def _alembic_config() -> "Config":
    from alembic.config import Config

    if not _config_path.is_file():
        typer.echo(f"Alembic config not found: {_config_path}", err=True)
        raise typer.Exit(code=1)
    return Config(str(_config_path))


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    sql: bool = typer.Option(False, "--sql", help="Emit SQL instead of running it"),
) -> None:
    """Apply ballot schema migrations up to the target revision."""
    from alembic import command

    config = _alembic_config()
    logger.info("Upgrading ballot schema to {}{}", revision, " (offline SQL)" if sql else "")
    command.upgrade(config, revision, sql=sql)
    if not sql:
        logger.info("Ballot schema at {}", revision)


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
) -> None:
    """Roll the ballot schema back to the target revision."""
    from alembic import command

    logger.warning("Downgrading ballot schema to {}; cast votes in dropped tables are lost", revision)
    command.downgrade(_alembic_config(), revision)


@db_app.command()
def current() -> None:
    """Show the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)


@db_app.command()
def history() -> None:
    """List known migration revisions."""
    from alembic import command

    command.history(_alembic_config())
