"""Repository implementations for domain entities."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy import exists as sql_exists
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.domain.entities import NO_SONG_ID, Song, SongFilter, SongsPage
from songlib.domain.exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
    PersistenceError,
)
from songlib.domain.pagination import paginate
from songlib.domain.ports import ISongRepository

from .models import SONG_UNIQUE_CONSTRAINT, SongModel, ensure_utc_aware

logger = logging.getLogger(__name__)


# Hey future me, every repository method runs inside this. Raw SQLAlchemy/driver errors become
# PersistenceError (-> 500 with a generic message), the original stays chained as __cause__ so
# the exception handler can log the real thing. OperationalError is the exception: it goes out
# unwrapped so the API can tell a locked/busy database (503 + Retry-After) from a broken one.
# Domain exceptions pass through untouched.
@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except OperationalError:
        raise
    except SQLAlchemyError as exc:
        raise PersistenceError(operation) from exc


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Check if an IntegrityError comes from the (group_name, song_name) constraint."""
    message = str(exc.orig).lower()
    # PostgreSQL names the constraint, SQLite lists the columns
    return SONG_UNIQUE_CONSTRAINT in message or (
        "unique" in message and "song_name" in message
    )


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def _song_key(group_name: str, song_name: str) -> str:
    return f"{group_name} - {song_name}"


class SongRepository(ISongRepository):
    """SQLAlchemy implementation of Song repository."""

    # Hey future me, the session is injected per request and NOT committed here - the session
    # scope commits when the request succeeds. flush() is used where we need generated ids or
    # need the unique constraint to fire NOW instead of at commit time.
    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    def _model_to_entity(self, model: SongModel) -> Song:
        return Song(
            id=model.id,
            group_name=model.group_name,
            song_name=model.song_name,
            release_date=ensure_utc_aware(model.release_date),
            text=model.text,
            link=model.link,
            created_at=ensure_utc_aware(model.created_at),
            updated_at=ensure_utc_aware(model.updated_at),
        )

    # Yo, count and page queries MUST share this predicate list. If they drift apart, total_items
    # stops matching the rows you can actually page through.
    def _filter_conditions(self, song_filter: SongFilter) -> list[ColumnElement[bool]]:
        """Translate a SongFilter into WHERE conditions.

        Empty strings and None dates leave the field unconstrained. Text
        fields match case-insensitively anywhere in the value; LIKE
        wildcards typed by the user are escaped and match literally.
        """
        conditions: list[ColumnElement[bool]] = []

        text_filters = (
            (SongModel.group_name, song_filter.group_name),
            (SongModel.song_name, song_filter.song_name),
            (SongModel.text, song_filter.text),
            (SongModel.link, song_filter.link),
        )
        for column, value in text_filters:
            if value:
                conditions.append(column.icontains(value, autoescape=True))

        if song_filter.from_date is not None:
            conditions.append(
                SongModel.release_date >= _start_of_day(song_filter.from_date)
            )
        if song_filter.to_date is not None:
            # Inclusive: anything released during to_date itself still matches
            conditions.append(
                SongModel.release_date
                < _start_of_day(song_filter.to_date + timedelta(days=1))
            )

        return conditions

    async def _count(self, conditions: list[ColumnElement[bool]]) -> int:
        stmt = select(func.count()).select_from(SongModel).where(*conditions)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def _flush_guarded(self, song: Song) -> None:
        """Flush pending changes, turning a unique violation into a domain error."""
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            if _is_unique_violation(exc):
                logger.info(
                    "Unique constraint rejected song %s",
                    _song_key(song.group_name, song.song_name),
                )
                raise DuplicateEntityException(
                    "Song", _song_key(song.group_name, song.song_name)
                ) from exc
            raise PersistenceError("write song") from exc

    async def exists(
        self, group_name: str, song_name: str, excluded_id: int = NO_SONG_ID
    ) -> bool:
        """Check if another song already uses (group_name, song_name).

        Matching is exact. excluded_id lets an update keep its own pair;
        the default sentinel matches no stored song.
        """
        with _storage_errors("check song existence"):
            stmt = select(
                sql_exists().where(
                    SongModel.group_name == group_name,
                    SongModel.song_name == song_name,
                    SongModel.id != excluded_id,
                )
            )
            result = await self.session.execute(stmt)
            return bool(result.scalar())

    async def count(self, song_filter: SongFilter) -> int:
        """Count songs matching the filter (paging fields are ignored)."""
        with _storage_errors("count songs"):
            return await self._count(self._filter_conditions(song_filter))

    async def list_songs(self, song_filter: SongFilter) -> SongsPage:
        """Get one filtered page of songs, most recently created first.

        Args:
            song_filter: Filter values plus page and page_size

        Returns:
            SongsPage with the songs of the requested page and paging totals

        Raises:
            PageNotFoundException: If the page lies beyond the last page
            PersistenceError: If a query fails
        """
        with _storage_errors("query songs"):
            conditions = self._filter_conditions(song_filter)
            total_items = await self._count(conditions)

            window = paginate(total_items, song_filter.page, song_filter.page_size)

            stmt = (
                select(SongModel)
                .where(*conditions)
                .order_by(SongModel.created_at.desc(), SongModel.id.desc())
                .limit(window.limit)
                .offset(window.offset)
            )
            result = await self.session.execute(stmt)
            songs = [self._model_to_entity(model) for model in result.scalars().all()]

        return SongsPage(
            songs=songs,
            page=window.page,
            page_size=window.page_size,
            total_items=total_items,
            total_pages=window.total_pages,
        )

    async def get_by_id(self, song_id: int) -> Song:
        """Get a song by ID."""
        with _storage_errors("get song"):
            stmt = select(SongModel).where(SongModel.id == song_id)
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()

        if not model:
            raise EntityNotFoundException("Song", song_id)

        return self._model_to_entity(model)

    async def add(self, song: Song) -> Song:
        """Add a new song and return it with generated id and timestamps."""
        if await self.exists(song.group_name, song.song_name):
            raise DuplicateEntityException(
                "Song", _song_key(song.group_name, song.song_name)
            )

        with _storage_errors("insert song"):
            model = SongModel(
                group_name=song.group_name,
                song_name=song.song_name,
                release_date=song.release_date,
                text=song.text,
                link=song.link,
                created_at=song.created_at,
                updated_at=song.updated_at,
            )
            self.session.add(model)
            await self._flush_guarded(song)
            return self._model_to_entity(model)

    async def update(self, song: Song) -> Song:
        """Update an existing song."""
        if await self.exists(song.group_name, song.song_name, excluded_id=song.id):
            raise DuplicateEntityException(
                "Song", _song_key(song.group_name, song.song_name)
            )

        with _storage_errors("update song"):
            stmt = select(SongModel).where(SongModel.id == song.id)
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()

            if not model:
                raise EntityNotFoundException("Song", song.id)

            model.group_name = song.group_name
            model.song_name = song.song_name
            model.release_date = song.release_date
            model.text = song.text
            model.link = song.link
            model.updated_at = song.updated_at

            await self._flush_guarded(song)
            return self._model_to_entity(model)

    async def delete(self, song_id: int) -> None:
        """Delete a song."""
        with _storage_errors("delete song"):
            stmt = delete(SongModel).where(SongModel.id == song_id)
            result = await self.session.execute(stmt)

        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise EntityNotFoundException("Song", song_id)
