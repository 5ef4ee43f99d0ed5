"""Unit tests for verse-based lyrics pagination.

Hey future me - a verse is a block of lines separated by ONE blank line ("\\n\\n").
Single newlines stay inside a verse.
"""

import pytest

from songlib.domain.entities import Song
from songlib.domain.exceptions import LyricsNotFoundException, PageNotFoundException
from songlib.domain.lyrics import paginate_lyrics, split_verses

THREE_VERSES = "Verse 1 line 1\nVerse 1 line 2\n\nVerse 2\n\nVerse 3"


def make_song(text: str) -> Song:
    return Song(id=7, group_name="Muse", song_name="Supermassive Black Hole", text=text)


class TestSplitVerses:
    """Tests for split_verses."""

    def test_splits_on_blank_lines_only(self) -> None:
        assert split_verses(THREE_VERSES) == [
            "Verse 1 line 1\nVerse 1 line 2",
            "Verse 2",
            "Verse 3",
        ]

    def test_text_without_blank_line_is_one_verse(self) -> None:
        assert split_verses("just one\nverse") == ["just one\nverse"]


class TestPaginateLyrics:
    """Tests for paginate_lyrics."""

    def test_first_page_joins_verses_with_blank_line(self) -> None:
        page = paginate_lyrics(make_song(THREE_VERSES), 1, 2)

        assert page.text == "Verse 1 line 1\nVerse 1 line 2\n\nVerse 2"
        assert page.current_page == 1
        assert page.total_pages == 2
        assert page.page_size == 2

    def test_last_page_holds_remaining_verse(self) -> None:
        page = paginate_lyrics(make_song(THREE_VERSES), 2, 2)

        assert page.text == "Verse 3"
        assert page.current_page == 2

    def test_defaults_for_non_positive_params(self) -> None:
        page = paginate_lyrics(make_song(THREE_VERSES), 0, -1)

        assert page.current_page == 1
        assert page.page_size == 10
        assert page.total_pages == 1
        assert page.text == THREE_VERSES

    def test_page_beyond_last_raises(self) -> None:
        with pytest.raises(PageNotFoundException):
            paginate_lyrics(make_song(THREE_VERSES), 3, 2)

    def test_song_without_text_raises(self) -> None:
        with pytest.raises(LyricsNotFoundException) as exc_info:
            paginate_lyrics(make_song(""), 1, 10)

        assert exc_info.value.song_id == 7
        assert exc_info.value.message == "lyrics not found"

    def test_walking_all_pages_rebuilds_the_lyrics(self) -> None:
        text = "\n\n".join(f"verse {i}\nline" for i in range(7))
        song = make_song(text)

        first = paginate_lyrics(song, 1, 3)
        pages = [paginate_lyrics(song, p, 3).text for p in range(1, first.total_pages + 1)]

        assert first.total_pages == 3
        assert "\n\n".join(pages) == text
