"""Tests for the Plex record mappers."""

from unittest.mock import AsyncMock

import pytest

from src.mediaserver.enums import LibraryType
from src.mediaserver.models import ContentLoader
from src.plex.exceptions import MalformedRecordError
from src.plex.transform import (
    build_media_url,
    classify_library_type,
    collection_tags,
    directory_records,
    first_media_part,
    library_fields,
    metadata_records,
    to_album,
    to_collection,
    to_movie,
    to_simple_collection,
    to_song,
)


class TestClassifyLibraryType:
    """Tests for classify_library_type()."""

    @pytest.mark.parametrize(
        "type_string, expected",
        [
            ("movie", LibraryType.MOVIE),
            ("show", LibraryType.TV_SERIES),
            ("artist", LibraryType.MUSIC),
            ("photo", LibraryType.OTHER),
            ("", LibraryType.OTHER),
            (None, LibraryType.OTHER),
            ("Movie", LibraryType.OTHER),
        ],
    )
    def test_classification(self, type_string, expected):
        assert classify_library_type(type_string) is expected


class TestBuildMediaUrl:
    """Tests for build_media_url()."""

    def test_concatenates_server_path_and_token(self):
        assert build_media_url("http://h:32400", "/t.png", "X") == "http://h:32400/t.png?X"

    def test_path_is_not_revalidated(self):
        assert build_media_url("http://h:32400", "t.png", "X") == "http://h:32400t.png?X"

    def test_missing_path(self):
        assert build_media_url("http://h:32400", None, "X") is None


class TestCollectionTags:
    """Tests for collection_tags()."""

    def test_preserves_order_and_length(self):
        record = {"Collection": [{"tag": "b"}, {"tag": "a"}, {"tag": "b"}]}
        assert collection_tags(record) == ["b", "a", "b"]

    def test_missing_or_null(self):
        assert collection_tags({}) == []
        assert collection_tags({"Collection": None}) == []


class TestContainers:
    """Tests for metadata_records() and directory_records()."""

    def test_missing_lists_are_empty(self):
        assert metadata_records({}) == []
        assert metadata_records({"MediaContainer": {}}) == []
        assert directory_records({"MediaContainer": {"size": 0}}) == []
        assert directory_records(None) == []


class TestFirstMediaPart:
    """Tests for first_media_part()."""

    def test_empty_media_raises(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            first_media_part({"key": "/library/metadata/1", "Media": []})
        assert exc_info.value.key == "/library/metadata/1"

    def test_missing_media_raises(self):
        with pytest.raises(MalformedRecordError):
            first_media_part({"key": "/library/metadata/1"})

    def test_empty_part_raises(self):
        with pytest.raises(MalformedRecordError, match="Part"):
            first_media_part({"key": "/library/metadata/1", "Media": [{"Part": []}]})


class TestToMovie:
    """Tests for to_movie()."""

    def test_maps_first_rendition_only(self, fixtures, session):
        record = fixtures["movies"]["MediaContainer"]["Metadata"][0]

        movie = to_movie(record, session)

        assert movie.id == "/library/metadata/100"
        assert movie.title == "Blade Runner"
        assert movie.video_codec == "h264"
        assert movie.audio_codec == "dca"
        assert movie.bitrate == 10000
        assert (movie.width, movie.height) == (1920, 1080)
        assert movie.container == "mkv"
        assert movie.streaming_url == (
            "http://h:32400/library/parts/500/file.mkv?X-Plex-Token=X"
        )

    def test_maps_metadata_and_urls(self, fixtures, session):
        record = fixtures["movies"]["MediaContainer"]["Metadata"][0]

        movie = to_movie(record, session)

        assert movie.year == 1982
        assert movie.rating == 8.1
        assert movie.studio == "The Ladd Company"
        assert movie.view_count == 3
        assert movie.duration == 7020000
        assert movie.thumbnail == "http://h:32400/library/metadata/100/thumb/1?X-Plex-Token=X"
        assert movie.poster == "http://h:32400/library/metadata/100/art/1?X-Plex-Token=X"
        assert movie.collections == ["Sci-Fi", "Ridley Scott"]


class TestToAlbum:
    """Tests for to_album()."""

    def test_collections_in_source_order(self, fixtures, session):
        record = fixtures["albums"]["MediaContainer"]["Metadata"][0]

        album = to_album(record, session, AsyncMock())

        assert album.collections == ["Jazz", "1960s"]
        assert album.artist == "Miles Davis"
        assert album.year == 1959
        assert album.poster == "http://h:32400/library/metadata/200/art/1?X-Plex-Token=X"

    def test_binds_song_loader_to_album_key(self, fixtures, session):
        record = fixtures["albums"]["MediaContainer"]["Metadata"][0]
        fetch_songs = AsyncMock()

        album = to_album(record, session, fetch_songs)

        assert isinstance(album.get_songs, ContentLoader)
        assert album.get_songs.key == "/library/metadata/200/children"
        fetch_songs.assert_not_called()

    def test_optional_fields_missing(self, fixtures, session):
        record = fixtures["albums"]["MediaContainer"]["Metadata"][1]

        album = to_album(record, session, AsyncMock())

        assert album.collections == []
        assert album.thumbnail is None
        assert album.year is None


class TestToSong:
    """Tests for to_song()."""

    def test_maps_song(self, fixtures, session):
        record = fixtures["songs"]["MediaContainer"]["Metadata"][0]

        song = to_song(record, session)

        assert song.id == "/library/metadata/300"
        assert song.title == "So What"
        assert song.file_name == "01 So What.mp3"
        assert song.size == 22500000
        assert song.duration == 562000
        assert song.bitrate == 320
        assert song.audio_channels == 2
        assert song.audio_codec == "mp3"
        assert song.container == "mp3"
        assert song.streaming_url == "http://h:32400/library/parts/900/file.mp3?X-Plex-Token=X"

    def test_windows_file_name(self, session):
        record = {
            "key": "/library/metadata/1",
            "title": "t",
            "Media": [{"Part": [{"key": "/p", "file": "C:\\Music\\a\\track.flac"}]}],
        }
        assert to_song(record, session).file_name == "track.flac"

    def test_no_media_raises(self, session):
        with pytest.raises(MalformedRecordError):
            to_song({"key": "/library/metadata/1", "title": "t", "Media": []}, session)


class TestCollections:
    """Tests for the two collection mappers."""

    def test_full_collection(self, fixtures, session):
        record = fixtures["collections"]["MediaContainer"]["Metadata"][0]

        collection = to_collection(record, session)

        assert collection.id == "/library/collections/400/children"
        assert collection.title == "Sci-Fi"
        assert collection.sorting_title == "SciFi"
        assert collection.description == "Science fiction films."
        assert collection.thumbnail == (
            "http://h:32400/library/collections/400/thumb/1?X-Plex-Token=X"
        )

    def test_simple_collection_only_key_and_title(self, fixtures):
        record = fixtures["music_collections"]["MediaContainer"]["Directory"][0]

        collection = to_simple_collection(record)

        assert collection.id == "/library/sections/5/all?collection=11"
        assert collection.title == "Jazz"
        assert collection.sorting_title is None
        assert collection.description is None
        assert collection.thumbnail is None


class TestLibraryFields:
    """Tests for library_fields()."""

    def test_resolves_art_and_thumb(self, fixtures, session):
        directory = fixtures["libraries"]["MediaContainer"]["Directory"][1]

        fields = library_fields(directory, session)

        assert fields == {
            "id": "5",
            "title": "Music",
            "thumbnail": "http://h:32400/t.png?X-Plex-Token=X",
            "poster": "http://h:32400/a.png?X-Plex-Token=X",
        }
