"""Shared test fixtures for async database, sessions, domain records, and auth tokens."""

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ballot_api.core.config import Settings
from ballot_api.core.database import enable_sqlite_foreign_keys
from ballot_api.core.security import ADMIN_ROLE, VOTER_ROLE, create_access_token
from ballot_api.models import Candidate, CandidateStatus, Election, ElectionStatus, ElectionType, Voter, Zone
from ballot_api.models.base import Base
from ballot_api.services import dashboard_service


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key="test-secret-key-not-for-production",
        jwt_algorithm="HS256",
        jwt_access_token_expire_minutes=30,
        storage_retry_base_delay=0,
    )


@pytest.fixture(autouse=True)
def dashboard_cache() -> Any:
    """Give every test a fresh dashboard cache."""
    cache = dashboard_service.configure_dashboard_cache(ttl_seconds=60, max_entries=100)
    yield cache
    dashboard_service._dashboard_cache = None


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine with foreign keys enforced."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def file_session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory over a file-backed SQLite database.

    Each session gets its own connection, so concurrent sessions contend on
    the database's real locks and constraints.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ballot.db'}",
        connect_args={"timeout": 30},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


# --- Domain record factories ---


async def create_zone(session: AsyncSession, **overrides: Any) -> Zone:
    values: dict[str, Any] = {
        "code": "RAIGAD",
        "name": "Raigad",
        "election_type": ElectionType.KAROBARI_MEMBERS,
        "seats": 1,
        "is_active": True,
        "is_open_for_voting": True,
    }
    values.update(overrides)
    zone = Zone(**values)
    session.add(zone)
    await session.commit()
    await session.refresh(zone)
    return zone


async def create_election(session: AsyncSession, **overrides: Any) -> Election:
    values: dict[str, Any] = {
        "election_type": ElectionType.KAROBARI_MEMBERS,
        "title": "Karobari Members Election",
        "status": ElectionStatus.ACTIVE,
    }
    values.update(overrides)
    election = Election(**values)
    session.add(election)
    await session.commit()
    await session.refresh(election)
    return election


async def create_voter(session: AsyncSession, **overrides: Any) -> Voter:
    values: dict[str, Any] = {
        "voter_roll_id": f"V-{uuid.uuid4().hex[:8]}",
        "name": "Asha Patel",
        "phone": None,
        "age": 30,
        "jurisdiction": "LOCAL",
    }
    values.update(overrides)
    voter = Voter(**values)
    session.add(voter)
    await session.commit()
    await session.refresh(voter)
    return voter


async def create_candidate(session: AsyncSession, zone: Zone, **overrides: Any) -> Candidate:
    values: dict[str, Any] = {
        "election_type": zone.election_type,
        "zone_id": zone.id,
        "name": "Ramesh Shah",
        "position": "Karobari Member",
        "status": CandidateStatus.APPROVED,
        "is_nota": False,
    }
    values.update(overrides)
    candidate = Candidate(**values)
    session.add(candidate)
    await session.commit()
    await session.refresh(candidate)
    return candidate


@pytest.fixture
def make_zone(async_session: AsyncSession) -> Callable[..., Awaitable[Zone]]:
    return lambda **kw: create_zone(async_session, **kw)


@pytest.fixture
def make_election(async_session: AsyncSession) -> Callable[..., Awaitable[Election]]:
    return lambda **kw: create_election(async_session, **kw)


@pytest.fixture
def make_voter(async_session: AsyncSession) -> Callable[..., Awaitable[Voter]]:
    return lambda **kw: create_voter(async_session, **kw)


@pytest.fixture
def make_candidate(async_session: AsyncSession) -> Callable[..., Awaitable[Candidate]]:
    return lambda zone, **kw: create_candidate(async_session, zone, **kw)


# --- Tokens ---


@pytest.fixture
def admin_token(settings: Settings) -> str:
    """Generate a JWT access token for an admin operator."""
    return create_access_token(
        subject="election-admin",
        role=ADMIN_ROLE,
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


@pytest.fixture
def voter_token_for(settings: Settings) -> Callable[[uuid.UUID], str]:
    """Return a factory minting a voter token for a given voter id."""

    def _make(voter_id: uuid.UUID) -> str:
        return create_access_token(
            subject=str(voter_id),
            role=VOTER_ROLE,
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

    return _make


@pytest.fixture
def records() -> SimpleNamespace:
    """Record factories taking an explicit session, for multi-session tests."""
    return SimpleNamespace(
        zone=create_zone,
        election=create_election,
        voter=create_voter,
        candidate=create_candidate,
    )
