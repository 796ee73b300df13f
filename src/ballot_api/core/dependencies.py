"""FastAPI dependency injection for database sessions, auth, and access control.

Tokens are issued by the login/OTP service; here they are only decoded.
A token's ``sub`` is the voter id for ``voter`` tokens and an operator
name for ``admin`` tokens.
"""

import uuid
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.core.config import Settings, get_settings
from ballot_api.core.database import get_session_factory
from ballot_api.core.security import ADMIN_ROLE, VOTER_ROLE, decode_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller decoded from a bearer token."""

    subject: str
    role: str


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def get_current_principal(
    token: Annotated[str, Depends(oauth2_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Principal:
    """Decode the bearer JWT into a Principal.

    Raises:
        HTTPException: 401 if the token is invalid, expired, or lacks a subject/role.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    except Exception as exc:
        raise credentials_exception from exc

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or role not in (VOTER_ROLE, ADMIN_ROLE):
        raise credentials_exception
    return Principal(subject=subject, role=role)


def require_role(*roles: str) -> Callable[..., Any]:
    """Factory that creates a dependency requiring specific roles.

    Args:
        *roles: Allowed role names (``voter``, ``admin``).

    Returns:
        A FastAPI dependency function that validates the caller's role.
    """

    async def role_checker(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if principal.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{principal.role}' does not have access to this resource",
            )
        return principal

    return role_checker


async def get_current_voter_id(
    principal: Annotated[Principal, Depends(require_role(VOTER_ROLE))],
) -> uuid.UUID:
    """Return the voter id carried by a voter token.

    Raises:
        HTTPException: 401 if the subject is not a valid voter id.
    """
    try:
        return uuid.UUID(principal.subject)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
