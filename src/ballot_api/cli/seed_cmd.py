"""CLI command for provisioning the default zones and elections."""

import asyncio

import typer


def seed(
    overwrite_elections: bool = typer.Option(
        False,
        "--overwrite-elections",
        help="Replace existing election definitions (resets their status to UPCOMING)",
    ),
) -> None:
    """Create the default zones and elections if they are missing."""
    asyncio.run(_seed_impl(overwrite_elections=overwrite_elections))


async def _seed_impl(*, overwrite_elections: bool) -> None:
    from ballot_api.core.config import get_settings
    from ballot_api.core.database import dispose_engine, get_session_factory, init_engine
    from ballot_api.services.seed_service import seed_defaults

    settings = get_settings()
    init_engine(settings.database_url, schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            result = await seed_defaults(session, overwrite_elections=overwrite_elections)
            typer.echo(
                f"Zones: {result.zones_created} created, {result.zones_existing} existing. "
                f"Elections: {result.elections_created} created, {result.elections_updated} updated, "
                f"{result.elections_existing} existing."
            )
    finally:
        await dispose_engine()
