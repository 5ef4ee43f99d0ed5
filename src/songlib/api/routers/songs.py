"""Song catalog API endpoints.

Hey future me - this router is a thin shell over SongService!

ENDPOINTS:
- GET    /songs                   → Filtered, paginated song list (newest first)
- POST   /songs                   → Create a song
- PUT    /songs/{song_id}         → Partial update (empty fields are kept)
- DELETE /songs/{song_id}         → Delete a song
- GET    /songs/{song_id}/lyrics  → Paginated verses of a song's lyrics

Errors are NOT mapped here. Services raise domain exceptions and the handlers in
exception_handlers.py turn them into status codes. Writing endpoints commit before
returning, so a failed commit still reaches the client as an error response.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from songlib.api.dependencies import get_db_session, get_song_service
from songlib.api.schemas import (
    LyricsResponse,
    SongCreateRequest,
    SongResponse,
    SongsResponse,
    SongUpdateRequest,
)
from songlib.application.services import SongService
from songlib.domain.entities import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, SongFilter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SongsResponse)
async def list_songs(
    group_name: str = Query(default="", description="Substring of the group name"),
    song_name: str = Query(default="", description="Substring of the song name"),
    text: str = Query(default="", description="Substring of the lyrics"),
    link: str = Query(default="", description="Substring of the link"),
    from_date: date | None = Query(
        default=None, description="Released on or after this day (YYYY-MM-DD)"
    ),
    to_date: date | None = Query(
        default=None, description="Released on or before this day (YYYY-MM-DD)"
    ),
    page: int = Query(default=DEFAULT_PAGE, description="Page number, 1-based"),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, description="Songs per page"),
    service: SongService = Depends(get_song_service),
) -> SongsResponse:
    """List songs matching all given filters, most recently created first.

    Text filters are case-insensitive substring matches. Non-positive page or
    page_size fall back to the defaults. A page past the last one, or an empty
    result, is a 404.
    """
    song_filter = SongFilter(
        group_name=group_name,
        song_name=song_name,
        text=text,
        link=link,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
    )
    songs_page = await service.get_songs(song_filter)
    return SongsResponse.model_validate(songs_page)


@router.post("", response_model=SongResponse, status_code=status.HTTP_201_CREATED)
async def create_song(
    data: SongCreateRequest,
    service: SongService = Depends(get_song_service),
    session: AsyncSession = Depends(get_db_session),
) -> SongResponse:
    """Create a song.

    Both group and song are required; the (group, song) pair must be unique.
    """
    song = await service.create_song(data.to_song_request())
    await session.commit()
    return SongResponse.model_validate(song)


@router.put("/{song_id}", response_model=SongResponse)
async def update_song(
    song_id: int,
    data: SongUpdateRequest,
    service: SongService = Depends(get_song_service),
    session: AsyncSession = Depends(get_db_session),
) -> SongResponse:
    """Update a song. Fields left empty keep their stored value."""
    song = await service.update_song(song_id, data.to_song_request())
    await session.commit()
    return SongResponse.model_validate(song)


@router.delete("/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_song(
    song_id: int,
    service: SongService = Depends(get_song_service),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete a song."""
    await service.delete_song(song_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{song_id}/lyrics", response_model=LyricsResponse)
async def get_lyrics(
    song_id: int,
    page: int = Query(default=DEFAULT_PAGE, description="Page number, 1-based"),
    page_size: int = Query(
        default=DEFAULT_PAGE_SIZE, description="Verses per page"
    ),
    service: SongService = Depends(get_song_service),
) -> LyricsResponse:
    """Get one page of a song's verses.

    Verses are blocks of lyrics separated by a blank line.
    """
    lyrics_page = await service.get_lyrics(song_id, page, page_size)
    return LyricsResponse.model_validate(lyrics_page)
