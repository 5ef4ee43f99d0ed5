"""Async engine and session scope for the song catalog."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from songlib.config import Settings

logger = logging.getLogger(__name__)

# Seconds a SQLite connection waits on a locked database before giving up
SQLITE_BUSY_TIMEOUT = 30


def _unicode_lower(value: str | None) -> str | None:
    return None if value is None else value.lower()


def _engine_options(settings: Settings) -> dict[str, Any]:
    """Build create_async_engine kwargs for the configured backend."""
    db = settings.database
    options: dict[str, Any] = {"echo": db.echo, "pool_pre_ping": db.pool_pre_ping}

    if db.url.startswith("postgresql"):
        options.update(
            pool_size=db.pool_size,
            max_overflow=db.max_overflow,
            pool_timeout=db.pool_timeout,
            pool_recycle=db.pool_recycle,
        )
    elif db.url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": SQLITE_BUSY_TIMEOUT,
        }
    return options


class Database:
    """Owns the engine and hands out per-request sessions."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._engine = create_async_engine(
            settings.database.url, **_engine_options(settings)
        )

        if settings.database.url.startswith("sqlite"):
            self._register_sqlite_functions()

        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    # Hey future me - the song filters use icontains(), which compiles to lower(col) LIKE lower(?).
    # SQLite's built-in lower() only folds ASCII, so "кино" would never find "Кино". Every new
    # connection gets a Python lower() instead, which folds the whole of Unicode like
    # PostgreSQL's ILIKE does.
    def _register_sqlite_functions(self) -> None:
        @event.listens_for(self._engine.sync_engine, "connect")
        def on_connect(dbapi_conn: Any, _connection_record: Any) -> None:
            dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

    # The transaction boundary of a request: commit on clean exit, rollback and re-raise on error.
    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for database operations."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Run SELECT 1 to check the database answers."""
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def create_tables(self) -> None:
        """Create the schema from the ORM metadata (alembic is used in production)."""
        from songlib.infrastructure.persistence.models import Base

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Schema ensured on %s", self._engine.url.render_as_string())

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        await self._engine.dispose()
