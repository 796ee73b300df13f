"""Fixtures running CLI commands against a file-backed SQLite database."""

import asyncio
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from ballot_api.core.config import Settings
from ballot_api.models.base import Base


async def _create_schema(database_url: str) -> None:
    engine = create_async_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


@pytest.fixture
def cli_settings(tmp_path: Path) -> Generator[Settings]:
    """Settings pointing at a fresh database, patched into every settings lookup."""
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}",
        jwt_secret_key="test-secret-key-not-for-production",
        storage_retry_base_delay=0,
    )
    asyncio.run(_create_schema(settings.database_url))
    with (
        patch("ballot_api.cli.app.get_settings", return_value=settings),
        patch("ballot_api.core.config.get_settings", return_value=settings),
    ):
        yield settings
