"""CLI command for minting operator access tokens."""

import uuid

import typer

from ballot_api.core.security import ADMIN_ROLE, VOTER_ROLE


def token(
    subject: str = typer.Argument(..., help="Admin name, or the voter id for --role voter"),
    role: str = typer.Option(ADMIN_ROLE, "--role", help="Token role: admin or voter"),
    expires_minutes: int | None = typer.Option(
        None,
        "--expires-minutes",
        min=1,
        help="Lifetime in minutes (default: JWT_ACCESS_TOKEN_EXPIRE_MINUTES)",
    ),
) -> None:
    """Mint a signed access token and print it."""
    from ballot_api.core.config import get_settings
    from ballot_api.core.security import create_access_token

    if role not in (ADMIN_ROLE, VOTER_ROLE):
        raise typer.BadParameter("role must be 'admin' or 'voter'")
    if role == VOTER_ROLE:
        try:
            uuid.UUID(subject)
        except ValueError:
            raise typer.BadParameter("voter tokens need the voter id (UUID) as subject") from None

    settings = get_settings()
    typer.echo(
        create_access_token(
            subject,
            role,
            settings.jwt_secret_key,
            settings.jwt_algorithm,
            expires_minutes or settings.jwt_access_token_expire_minutes,
        )
    )
