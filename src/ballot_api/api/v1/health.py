"""Liveness endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ballot_api import __version__
from ballot_api.core.config import Settings, get_settings
from ballot_api.schemas.common import HealthResponse

health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(status="healthy", version=__version__, environment=settings.environment)
