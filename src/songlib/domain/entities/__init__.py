"""Domain entities."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

# Hey future me, page numbers are 1-based everywhere. Anything <= 0 coming from a client is
# coerced back to these defaults by the pagination engine, never rejected.
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

# Verses are separated by one blank line.
VERSE_SEPARATOR = "\n\n"

# id 0 never exists (identity columns start at 1), so it excludes nothing.
NO_SONG_ID = 0


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


# Yo, Song is THE entity of this service. id is 0 until the repository inserts it and reads the
# generated identity back. (group_name, song_name) is unique across the catalog - the repository
# enforces it, not this class.
@dataclass
class Song:
    """Song entity with metadata and lyrics."""

    group_name: str
    song_name: str
    id: int = NO_SONG_ID
    release_date: datetime = field(default_factory=utc_now)
    text: str = ""
    link: str = ""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def apply_changes(
        self,
        group_name: str = "",
        song_name: str = "",
        text: str = "",
        link: str = "",
    ) -> None:
        """Merge non-empty values onto the song and bump updated_at.

        Empty strings leave the corresponding field untouched.
        """
        if group_name:
            self.group_name = group_name
        if song_name:
            self.song_name = song_name
        if text:
            self.text = text
        if link:
            self.link = link
        self.updated_at = utc_now()

    @property
    def has_lyrics(self) -> bool:
        """Check if the song carries any lyric text."""
        return bool(self.text)


@dataclass
class SongFilter:
    """Filter and paging parameters for listing songs.

    String fields match as case-insensitive substrings, empty means
    unconstrained. Date bounds are inclusive on both ends.
    """

    group_name: str = ""
    song_name: str = ""
    text: str = ""
    link: str = ""
    from_date: date | None = None
    to_date: date | None = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class SongsPage:
    """One page of songs plus paging totals."""

    songs: list[Song]
    page: int
    page_size: int
    total_items: int
    total_pages: int


@dataclass
class LyricsPage:
    """A verse range of a song's lyrics."""

    text: str
    current_page: int
    total_pages: int
    page_size: int


__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "NO_SONG_ID",
    "VERSE_SEPARATOR",
    "LyricsPage",
    "Song",
    "SongFilter",
    "SongsPage",
    "utc_now",
]
