"""Application services."""

from songlib.application.services.song_service import SongRequest, SongService

__all__ = ["SongRequest", "SongService"]
