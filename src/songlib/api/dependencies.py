"""Dependency injection for API endpoints."""

import logging
from collections.abc import AsyncGenerator
from typing import cast

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.application.services.song_service import SongService
from songlib.config import Settings, get_settings
from songlib.domain.exceptions import ConfigurationError
from songlib.infrastructure.persistence.database import Database
from songlib.infrastructure.persistence.repositories import SongRepository

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings = getattr(request.app.state, "settings", None)
    return cast(Settings, settings) if settings is not None else get_settings()


def get_database(request: Request) -> Database:
    """Get the Database attached to app.state during startup."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ConfigurationError("Database not initialized")
    return cast(Database, db)


# Hey future me, ONE session per request (FastAPI caches it, so the repository and the endpoint
# get the same object). Writing endpoints MUST await session.commit() themselves before returning:
# this dependency only exits after the response went out, so a commit failing HERE would hit a
# client that was already told 201. The scope still rolls back if anything raised.
async def get_db_session(
    db: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get a transactional database session for the request."""
    async with db.session_scope() as session:
        yield session


def get_song_repository(
    session: AsyncSession = Depends(get_db_session),
) -> SongRepository:
    """Get song repository instance."""
    return SongRepository(session)


def get_song_service(
    repository: SongRepository = Depends(get_song_repository),
) -> SongService:
    """Get song service instance."""
    return SongService(repository)
