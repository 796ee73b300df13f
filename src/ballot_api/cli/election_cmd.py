"""CLI commands for the election registry.

List elections, change an election's status, and provision NOTA candidates
for every zone of an election type.
"""

import asyncio
from typing import Annotated

import typer

from ballot_api.models.election import ElectionStatus, ElectionType

election_app = typer.Typer()


@election_app.command("list")
def list_elections() -> None:
    """List elections with their status and eligibility bounds."""
    asyncio.run(_list_impl())


async def _list_impl() -> None:
    from ballot_api.core.config import get_settings
    from ballot_api.core.database import dispose_engine, get_session_factory, init_engine
    from ballot_api.services import election_service

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            elections = await election_service.list_elections(session)
            if not elections:
                typer.echo("No elections found. Run 'ballot-api seed' first.")
                return
            for election in elections:
                age = f"{election.voter_min_age or '-'}..{election.voter_max_age or '-'}"
                typer.echo(
                    f"{election.election_type:<18} {election.status:<10} voter age {age:<8} "
                    f"jurisdiction {election.voter_jurisdiction:<5} {election.title}"
                )
    finally:
        await dispose_engine()


@election_app.command("set-status")
def set_status(
    election_type: Annotated[ElectionType, typer.Argument(help="Election type")],
    status: Annotated[ElectionStatus, typer.Argument(help="New status: UPCOMING, ACTIVE or COMPLETED")],
) -> None:
    """Set an election's lifecycle status (idempotent)."""
    asyncio.run(_set_status_impl(election_type, status))


async def _set_status_impl(election_type: ElectionType, status: ElectionStatus) -> None:
    from ballot_api.core.config import get_settings
    from ballot_api.core.database import dispose_engine, get_session_factory, init_engine
    from ballot_api.core.errors import ElectionNotFoundError
    from ballot_api.services import election_service

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            election = await election_service.set_status(session, election_type, status)
            typer.echo(f"{election.election_type} is now {election.status}")
    except ElectionNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None
    finally:
        await dispose_engine()


@election_app.command("provision-nota")
def provision_nota(
    election_type: Annotated[ElectionType, typer.Argument(help="Election type")],
) -> None:
    """Ensure every active zone of an election type has its NOTA candidates."""
    asyncio.run(_provision_nota_impl(election_type))


async def _provision_nota_impl(election_type: ElectionType) -> None:
    from ballot_api.core.config import get_settings
    from ballot_api.core.database import dispose_engine, get_session_factory, init_engine
    from ballot_api.services.nota_service import provision_election_notas

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            count = await provision_election_notas(session, election_type)
            typer.echo(f"{count} NOTA candidate(s) ensured for {election_type}")
    finally:
        await dispose_engine()
