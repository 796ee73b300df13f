"""Tests for the database engine and session management module."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import text

import ballot_api.core.database as db_module
from ballot_api.core.database import dispose_engine, get_engine, get_session_factory, init_engine


class TestGetEngine:
    """Tests for get_engine."""

    def test_raises_when_not_initialized(self) -> None:
        original_engine = db_module._engine
        db_module._engine = None
        try:
            with pytest.raises(RuntimeError, match="Database engine not initialized"):
                get_engine()
        finally:
            db_module._engine = original_engine

    @pytest.mark.asyncio
    async def test_returns_engine_when_initialized(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert get_engine() is engine
        finally:
            await dispose_engine()


class TestGetSessionFactory:
    """Tests for get_session_factory."""

    def test_raises_when_not_initialized(self) -> None:
        original_factory = db_module._session_factory
        db_module._session_factory = None
        try:
            with pytest.raises(RuntimeError, match="Session factory not initialized"):
                get_session_factory()
        finally:
            db_module._session_factory = original_factory


class TestInitEngine:
    """Tests for init_engine."""

    @pytest.mark.asyncio
    async def test_sqlite_enforces_foreign_keys(self) -> None:
        init_engine("sqlite+aiosqlite:///:memory:")
        try:
            async with get_session_factory()() as session:
                result = await session.execute(text("PRAGMA foreign_keys"))
                assert result.scalar_one() == 1
        finally:
            await dispose_engine()

    def test_schema_sets_search_path(self) -> None:
        with patch.object(db_module, "create_async_engine", return_value=MagicMock()) as mock_create:
            init_engine("postgresql+asyncpg://u:p@localhost/db", schema="pr_42")

        kwargs = mock_create.call_args.kwargs
        assert kwargs["connect_args"]["server_settings"] == {"search_path": "pr_42,public"}
        assert kwargs["pool_size"] == 10
        assert kwargs["pool_pre_ping"] is True
        db_module._engine = None
        db_module._session_factory = None

    def test_non_dict_connect_args_rejected(self) -> None:
        with pytest.raises(TypeError, match="connect_args must be a dict"):
            init_engine("postgresql+asyncpg://u:p@localhost/db", schema="pr_42", connect_args="bad")


class TestDisposeEngine:
    """Tests for dispose_engine."""

    @pytest.mark.asyncio
    async def test_clears_module_state(self) -> None:
        init_engine("sqlite+aiosqlite:///:memory:")
        await dispose_engine()
        assert db_module._engine is None
        assert db_module._session_factory is None

    @pytest.mark.asyncio
    async def test_noop_when_not_initialized(self) -> None:
        db_module._engine = None
        await dispose_engine()
