"""Unit tests for Song and the listing value objects."""

from datetime import UTC, datetime

from songlib.domain.entities import NO_SONG_ID, Song, SongFilter


class TestSong:
    """Tests for the Song entity."""

    def test_new_song_has_no_id(self) -> None:
        song = Song(group_name="Queen", song_name="Bohemian Rhapsody")
        assert song.id == NO_SONG_ID
        assert song.text == ""
        assert song.link == ""
        assert song.created_at.tzinfo is not None

    def test_apply_changes_merges_non_empty_fields(self) -> None:
        before = datetime(2020, 1, 1, tzinfo=UTC)
        song = Song(
            id=1,
            group_name="Queen",
            song_name="Bohemian Rhapsody",
            text="old text",
            link="http://old",
            updated_at=before,
        )

        song.apply_changes(song_name="Innuendo", link="http://new")

        assert song.group_name == "Queen"
        assert song.song_name == "Innuendo"
        assert song.text == "old text"
        assert song.link == "http://new"
        assert song.updated_at > before

    def test_apply_changes_with_nothing_only_touches_updated_at(self) -> None:
        before = datetime(2020, 1, 1, tzinfo=UTC)
        song = Song(group_name="Queen", song_name="Innuendo", updated_at=before)

        song.apply_changes()

        assert song.group_name == "Queen"
        assert song.song_name == "Innuendo"
        assert song.updated_at > before

    def test_has_lyrics(self) -> None:
        assert Song(group_name="a", song_name="b", text="la la").has_lyrics
        assert not Song(group_name="a", song_name="b").has_lyrics


class TestSongFilter:
    """Tests for SongFilter defaults."""

    def test_defaults_are_unconstrained(self) -> None:
        song_filter = SongFilter()
        assert song_filter.group_name == ""
        assert song_filter.from_date is None
        assert song_filter.to_date is None
        assert song_filter.page == 1
        assert song_filter.page_size == 10
