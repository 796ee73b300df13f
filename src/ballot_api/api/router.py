"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from ballot_api.api.middleware import SecurityHeadersMiddleware, setup_cors
from ballot_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from ballot_api.api.v1.ballots import ballots_router
    from ballot_api.api.v1.candidates import candidates_router
    from ballot_api.api.v1.elections import elections_router
    from ballot_api.api.v1.health import health_router
    from ballot_api.api.v1.voters import voters_router
    from ballot_api.api.v1.zones import zones_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(health_router)
    root_router.include_router(zones_router)
    root_router.include_router(elections_router)
    root_router.include_router(ballots_router)
    root_router.include_router(voters_router)
    root_router.include_router(candidates_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app."""
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
