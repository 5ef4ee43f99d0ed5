"""Verse-based pagination of song lyrics."""

from songlib.domain.entities import VERSE_SEPARATOR, LyricsPage, Song
from songlib.domain.exceptions import LyricsNotFoundException
from songlib.domain.pagination import paginate


def split_verses(text: str) -> list[str]:
    """Split lyric text into verses on blank lines."""
    return text.split(VERSE_SEPARATOR)


# Yo, the pagination unit is a VERSE, not a line. A song with three verses and page_size=2 has
# two pages: verses 1-2, then verse 3. Verses are joined back with the same blank line.
def paginate_lyrics(song: Song, page: int, page_size: int) -> LyricsPage:
    """Return one page of a song's verses.

    Raises:
        LyricsNotFoundException: If the song has no text
        PageNotFoundException: If page lies beyond the last verse page
    """
    if not song.has_lyrics:
        raise LyricsNotFoundException(song.id)

    verses = split_verses(song.text)
    window = paginate(len(verses), page, page_size)

    return LyricsPage(
        text=VERSE_SEPARATOR.join(verses[window.offset : window.end]),
        current_page=window.page,
        total_pages=window.total_pages,
        page_size=window.page_size,
    )
