"""Shared fixtures: isolated SQLite database, session, repository and HTTP client."""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.config import DatabaseSettings, ObservabilitySettings, Settings
from songlib.infrastructure.persistence import Database, SongRepository
from songlib.main import create_app


# Hey future me - every test gets its OWN SQLite file under tmp_path, so tests never see
# each other's songs and there's nothing to clean up.
@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        log_level="DEBUG",
        database=DatabaseSettings(
            url=f"sqlite+aiosqlite:///{tmp_path / 'songlib-test.db'}",
            create_tables=True,
        ),
        observability=ObservabilitySettings(log_json_format=False),
    )


@pytest.fixture
async def db(settings: Settings) -> AsyncGenerator[Database, None]:
    """Database with all tables created."""
    database = Database(settings)
    await database.create_tables()
    yield database
    await database.close()


@pytest.fixture
async def session(db: Database) -> AsyncGenerator[AsyncSession, None]:
    """A session scope that commits when the test finishes cleanly."""
    async with db.session_scope() as session:
        yield session


@pytest.fixture
def repository(session: AsyncSession) -> SongRepository:
    """Song repository bound to the test session."""
    return SongRepository(session)


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """HTTP client for a fully wired app (lifespan runs on enter)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
