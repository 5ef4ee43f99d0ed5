"""SQLAlchemy ORM models for songlib."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from songlib.domain.entities import utc_now

SONG_UNIQUE_CONSTRAINT = "uq_songs_group_song"


# Hey future me - SQLite doesn't preserve timezone info! When we store UTC datetimes, they come
# back as "naive" (no tzinfo). ALWAYS pass DB datetimes through this before handing them to the
# domain, otherwise comparing with utc_now() raises "can't compare offset-naive and offset-aware".
def ensure_utc_aware(dt: datetime) -> datetime:
    """Ensure datetime is UTC-aware, assuming naive datetimes are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Listen up, the unique constraint on (group_name, song_name) is the REAL duplicate guard. The
# repository's exists() pre-check only gives a nicer error for the common case; two concurrent
# creates can both pass it, and then this constraint makes one of the flushes fail.
class SongModel(Base):
    """SQLAlchemy model for the Song entity."""

    __tablename__ = "songs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_name: Mapped[str] = mapped_column(String(255), nullable=False)
    song_name: Mapped[str] = mapped_column(String(255), nullable=False)
    release_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        UniqueConstraint("group_name", "song_name", name=SONG_UNIQUE_CONSTRAINT),
        Index("ix_songs_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<SongModel(id={self.id}, group_name='{self.group_name}', song_name='{self.song_name}')>"
