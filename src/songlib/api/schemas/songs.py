"""API schemas for songs and lyrics."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from songlib.application.services.song_service import SongRequest


class SongCreateRequest(BaseModel):
    """Request schema for creating a song."""

    group: str = Field(..., description="Group or artist name", examples=["Muse"])
    song: str = Field(
        ..., description="Song name", examples=["Supermassive Black Hole"]
    )
    text: str = Field(
        default="", description="Lyrics, verses separated by a blank line"
    )
    link: str = Field(default="", description="Link to the song")

    def to_song_request(self) -> SongRequest:
        """Convert to the service input."""
        return SongRequest(
            group_name=self.group,
            song_name=self.song,
            text=self.text,
            link=self.link,
        )


class SongUpdateRequest(BaseModel):
    """Request schema for updating a song.

    Omitted or empty fields keep their current value.
    """

    group: str = Field(default="", description="New group or artist name")
    song: str = Field(default="", description="New song name")
    text: str = Field(default="", description="New lyrics")
    link: str = Field(default="", description="New link")

    def to_song_request(self) -> SongRequest:
        """Convert to the service input."""
        return SongRequest(
            group_name=self.group,
            song_name=self.song,
            text=self.text,
            link=self.link,
        )


class SongResponse(BaseModel):
    """Song as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    group_name: str
    song_name: str
    release_date: datetime
    text: str
    link: str
    created_at: datetime
    updated_at: datetime


class SongsResponse(BaseModel):
    """One page of songs plus paging totals."""

    model_config = ConfigDict(from_attributes=True)

    songs: list[SongResponse] = Field(
        default_factory=list, description="Songs, most recently created first"
    )
    page: int = Field(..., description="Current page (1-based)")
    total_pages: int = Field(..., description="Total number of pages")
    total_items: int = Field(..., description="Total number of matching songs")
    page_size: int = Field(..., description="Songs per page")


class LyricsResponse(BaseModel):
    """A page of verses from a song's lyrics."""

    model_config = ConfigDict(from_attributes=True)

    text: str = Field(..., description="Verses of this page joined by blank lines")
    current_page: int
    total_pages: int
    page_size: int = Field(..., description="Verses per page")
