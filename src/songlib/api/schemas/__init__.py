"""Pydantic request/response schemas."""

from songlib.api.schemas.songs import (
    LyricsResponse,
    SongCreateRequest,
    SongResponse,
    SongsResponse,
    SongUpdateRequest,
)

__all__ = [
    "LyricsResponse",
    "SongCreateRequest",
    "SongResponse",
    "SongUpdateRequest",
    "SongsResponse",
]
