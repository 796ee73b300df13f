"""CLI commands for opening and closing zones for voting."""

import asyncio
from typing import Annotated

import typer

from ballot_api.models.election import ElectionType

zone_app = typer.Typer()


@zone_app.command("open")
def open_zone(
    election_type: Annotated[ElectionType, typer.Argument(help="Election type")],
    code: Annotated[str, typer.Argument(help="Zone code, e.g. RAIGAD")],
) -> None:
    """Open a zone for voting."""
    asyncio.run(_set_open_impl(election_type, code, open_for_voting=True))


@zone_app.command("close")
def close_zone(
    election_type: Annotated[ElectionType, typer.Argument(help="Election type")],
    code: Annotated[str, typer.Argument(help="Zone code, e.g. RAIGAD")],
) -> None:
    """Close (freeze) a zone for voting."""
    asyncio.run(_set_open_impl(election_type, code, open_for_voting=False))


async def _set_open_impl(election_type: ElectionType, code: str, *, open_for_voting: bool) -> None:
    from ballot_api.core.config import get_settings
    from ballot_api.core.database import dispose_engine, get_session_factory, init_engine
    from ballot_api.services import zone_service

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            zone = await zone_service.resolve_zone(session, code.upper(), election_type)
            if zone is None:
                typer.echo(f"Error: zone {code} not found for {election_type}", err=True)
                raise typer.Exit(code=1)
            zone = await zone_service.set_zone_open(session, zone.id, open_for_voting)
            state = "open" if zone.is_open_for_voting else "closed"
            typer.echo(f"{zone.election_type}/{zone.code} is {state} for voting")
    finally:
        await dispose_engine()
