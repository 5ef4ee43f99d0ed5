"""Song Service - orchestrates song listing, lyrics and mutations.

Hey future me - this is the ONLY place that decides what a create/update
means. Routers parse HTTP and call in here, the repository only talks SQL.
Clean Architecture: Router → Service → Repository.

Every call is stateless: the service holds nothing but its repository, which
in turn holds the per-request session.
"""

import logging
from dataclasses import dataclass

from songlib.domain.entities import LyricsPage, Song, SongFilter, SongsPage, utc_now
from songlib.domain.exceptions import ValidationException
from songlib.domain.lyrics import paginate_lyrics
from songlib.domain.ports import ISongRepository

logger = logging.getLogger(__name__)


@dataclass
class SongRequest:
    """Input for creating or updating a song.

    On update, empty fields mean "keep the current value".
    """

    group_name: str = ""
    song_name: str = ""
    text: str = ""
    link: str = ""


def validate_filter(song_filter: SongFilter) -> None:
    """Reject filters that can never match."""
    if (
        song_filter.from_date is not None
        and song_filter.to_date is not None
        and song_filter.from_date > song_filter.to_date
    ):
        raise ValidationException("from_date cannot be after to_date")


def validate_song_request(request: SongRequest) -> None:
    """Require the fields a new song cannot live without."""
    if not request.song_name.strip():
        raise ValidationException("song name cannot be empty")
    if not request.group_name.strip():
        raise ValidationException("group name cannot be empty")


class SongService:
    """Application service for the song catalog."""

    def __init__(self, repository: ISongRepository) -> None:
        self.repository = repository

    async def get_songs(self, song_filter: SongFilter) -> SongsPage:
        """Get one filtered page of songs."""
        logger.info(
            "Getting songs with filter",
            extra={
                "group_name": song_filter.group_name,
                "song_name": song_filter.song_name,
                "from_date": str(song_filter.from_date) if song_filter.from_date else None,
                "to_date": str(song_filter.to_date) if song_filter.to_date else None,
                "text": song_filter.text,
                "link": song_filter.link,
                "page": song_filter.page,
                "page_size": song_filter.page_size,
            },
        )
        try:
            validate_filter(song_filter)
        except ValidationException as e:
            logger.warning("Invalid filter: %s", e.message)
            raise

        return await self.repository.list_songs(song_filter)

    async def get_lyrics(self, song_id: int, page: int, page_size: int) -> LyricsPage:
        """Get one verse page of a song's lyrics."""
        logger.info(
            "Getting lyrics",
            extra={"song_id": song_id, "page": page, "page_size": page_size},
        )
        song = await self.repository.get_by_id(song_id)
        return paginate_lyrics(song, page, page_size)

    # Yo, release_date is "now" for every new song - clients can't set it through the API.
    # Duplicate (group, song) pairs are rejected by the repository, not here.
    async def create_song(self, request: SongRequest) -> Song:
        """Create a new song."""
        logger.info(
            "Creating new song",
            extra={"group_name": request.group_name, "song_name": request.song_name},
        )
        validate_song_request(request)

        now = utc_now()
        song = Song(
            group_name=request.group_name,
            song_name=request.song_name,
            release_date=now,
            text=request.text,
            link=request.link,
            created_at=now,
            updated_at=now,
        )
        created = await self.repository.add(song)
        logger.info("Song created", extra={"song_id": created.id})
        return created

    async def update_song(self, song_id: int, request: SongRequest) -> Song:
        """Merge the non-empty request fields onto an existing song."""
        logger.info(
            "Updating song",
            extra={
                "song_id": song_id,
                "group_name": request.group_name,
                "song_name": request.song_name,
            },
        )
        song = await self.repository.get_by_id(song_id)
        song.apply_changes(
            group_name=request.group_name,
            song_name=request.song_name,
            text=request.text,
            link=request.link,
        )
        return await self.repository.update(song)

    async def delete_song(self, song_id: int) -> None:
        """Delete a song."""
        logger.info("Deleting song", extra={"song_id": song_id})
        await self.repository.delete(song_id)
