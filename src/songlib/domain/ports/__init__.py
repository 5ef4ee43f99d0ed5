"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod

from songlib.domain.entities import NO_SONG_ID, Song, SongFilter, SongsPage


class ISongRepository(ABC):
    """Repository interface for Song entities."""

    @abstractmethod
    async def exists(
        self, group_name: str, song_name: str, excluded_id: int = NO_SONG_ID
    ) -> bool:
        """Check if another song already uses (group_name, song_name)."""
        pass

    @abstractmethod
    async def list_songs(self, song_filter: SongFilter) -> SongsPage:
        """Get one filtered page of songs, most recently created first."""
        pass

    @abstractmethod
    async def count(self, song_filter: SongFilter) -> int:
        """Count songs matching the filter (paging fields are ignored)."""
        pass

    @abstractmethod
    async def get_by_id(self, song_id: int) -> Song:
        """Get a song by ID, raising if it does not exist."""
        pass

    @abstractmethod
    async def add(self, song: Song) -> Song:
        """Insert a new song and return it with its generated id."""
        pass

    @abstractmethod
    async def update(self, song: Song) -> Song:
        """Persist changes of an existing song."""
        pass

    @abstractmethod
    async def delete(self, song_id: int) -> None:
        """Delete a song by ID, raising if it does not exist."""
        pass


__all__ = ["ISongRepository"]
