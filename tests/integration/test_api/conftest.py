"""Fixtures wiring the API routers to the per-test SQLite session."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from ballot_api.api.router import create_router, setup_middleware
from ballot_api.core.config import Settings, get_settings
from ballot_api.core.dependencies import get_async_session
from ballot_api.main import register_exception_handlers


@pytest.fixture
def app(settings: Settings, async_session: AsyncSession) -> FastAPI:
    """Create a FastAPI app backed by the test session and settings."""
    app = FastAPI()
    register_exception_handlers(app)
    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    async def _session_override() -> AsyncGenerator[AsyncSession]:
        yield async_session

    app.dependency_overrides[get_async_session] = _session_override
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
