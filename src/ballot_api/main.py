"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ballot_api import __version__
from ballot_api.core.config import get_settings
from ballot_api.core.database import dispose_engine, init_engine
from ballot_api.core.errors import BallotError
from ballot_api.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: init engine and caches on startup, dispose on shutdown."""
    from ballot_api.services.dashboard_service import configure_dashboard_cache

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    init_engine(settings.database_url, echo=False, schema=settings.database_schema)
    configure_dashboard_cache(settings.dashboard_cache_ttl_seconds, settings.dashboard_cache_max_entries)

    yield

    await dispose_engine()


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to ``{"detail", "code"}`` bodies and hide unexpected failures."""

    @app.exception_handler(BallotError)
    async def ballot_error_handler(request: Request, exc: BallotError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("{} {} failed: {} ({})", request.method, request.url.path, exc.code, exc.__cause__)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on {} {}", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Ballot API",
        description="Zone-scoped community elections: eligibility, ballots, NOTA and the vote ledger",
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Register middleware and routers
    from ballot_api.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
