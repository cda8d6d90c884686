"""Map raw Plex records to catalog entities.

Plex returns relative paths for artwork and media parts. Every URL field
is resolved as ``server_address + path + "?" + query_string_token``; the
path is used exactly as the server sent it.

Movies and songs are described by their first ``Media`` entry and that
entry's first ``Part``. Other renditions are ignored. A record with no
media or no part raises MalformedRecordError.
"""

import logging
import posixpath
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from ..mediaserver.enums import LibraryType
from ..mediaserver.models import Album, Collection, ContentLoader, Movie, Song
from .exceptions import MalformedRecordError
from .models import PlexSession

logger = logging.getLogger(__name__)

_LIBRARY_TYPES = {
    "movie": LibraryType.MOVIE,
    "show": LibraryType.TV_SERIES,
    "artist": LibraryType.MUSIC,
}


def classify_library_type(type_string: Optional[str]) -> LibraryType:
    """Convert a Plex section type to a LibraryType.

    Total over all inputs: anything unrecognised is OTHER.

    Examples:
        >>> classify_library_type("artist")
        <LibraryType.MUSIC: 'music'>
        >>> classify_library_type("photo")
        <LibraryType.OTHER: 'other'>
    """
    return _LIBRARY_TYPES.get(type_string, LibraryType.OTHER)


def build_media_url(server_address: str, path: Optional[str], query_string_token: str) -> Optional[str]:
    """Resolve a server-relative path to a full, tokenised URL.

    Args:
        server_address: Server address without trailing slash
        path: Server-relative path such as ``/library/metadata/1/thumb/2``
        query_string_token: Token query string, e.g. ``X-Plex-Token=abc``

    Returns:
        The full URL, or None when the record has no path

    Examples:
        >>> build_media_url("http://h:32400", "/t.png", "X")
        'http://h:32400/t.png?X'
        >>> build_media_url("http://h:32400", None, "X") is None
        True
    """
    if path is None:
        return None
    return f"{server_address}{path}?{query_string_token}"


def _url(session: PlexSession, path: Optional[str]) -> Optional[str]:
    return build_media_url(session.server_address, path, session.query_string_token)


def collection_tags(record: Dict[str, Any]) -> List[str]:
    """Project a record's ``Collection`` tags to their names, in order.

    Examples:
        >>> collection_tags({"Collection": [{"tag": "Jazz"}, {"tag": "1960s"}]})
        ['Jazz', '1960s']
        >>> collection_tags({})
        []
    """
    return [entry.get("tag") for entry in record.get("Collection") or []]


def first_media_part(record: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Return the first Media entry of a record and its first Part.

    Raises:
        MalformedRecordError: If either list is missing or empty
    """
    key = record.get("key", "<unknown>")
    media_list = record.get("Media") or []
    if not media_list:
        raise MalformedRecordError(key, "no Media entries")
    media = media_list[0]
    parts = media.get("Part") or []
    if not parts:
        raise MalformedRecordError(key, "first Media entry has no Part entries")
    if len(media_list) > 1:
        logger.debug(f"Ignoring {len(media_list) - 1} extra rendition(s) of {key}")
    return media, parts[0]


def metadata_records(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return ``MediaContainer.Metadata`` of a response, or an empty list."""
    return ((data or {}).get("MediaContainer") or {}).get("Metadata") or []


def directory_records(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return ``MediaContainer.Directory`` of a response, or an empty list."""
    return ((data or {}).get("MediaContainer") or {}).get("Directory") or []


def to_movie(record: Dict[str, Any], session: PlexSession) -> Movie:
    """Map a movie metadata record."""
    media, part = first_media_part(record)
    return Movie(
        id=record["key"],
        title=record.get("title", ""),
        sorting_title=record.get("titleSort"),
        description=record.get("summary"),
        duration=record.get("duration"),
        width=media.get("width"),
        height=media.get("height"),
        bitrate=media.get("bitrate"),
        audio_channels=media.get("audioChannels"),
        audio_codec=media.get("audioCodec"),
        video_codec=media.get("videoCodec"),
        container=media.get("container"),
        rating=record.get("rating"),
        studio=record.get("studio"),
        view_count=record.get("viewCount"),
        year=record.get("year"),
        thumbnail=_url(session, record.get("thumb")),
        poster=_url(session, record.get("art")),
        streaming_url=_url(session, part.get("key")),
        collections=collection_tags(record),
    )


def to_song(record: Dict[str, Any], session: PlexSession) -> Song:
    """Map a track metadata record."""
    media, part = first_media_part(record)
    file_path = part.get("file")
    return Song(
        id=record["key"],
        title=record.get("title", ""),
        file_name=posixpath.basename(file_path.replace("\\", "/")) if file_path else None,
        size=part.get("size"),
        sorting_title=record.get("titleSort"),
        description=record.get("summary"),
        thumbnail=_url(session, record.get("thumb")),
        duration=record.get("duration"),
        bitrate=media.get("bitrate"),
        audio_channels=media.get("audioChannels"),
        audio_codec=media.get("audioCodec"),
        container=media.get("container"),
        streaming_url=_url(session, part.get("key")),
    )


def to_album(
    record: Dict[str, Any],
    session: PlexSession,
    fetch_songs: Callable[[str], Awaitable[List[Song]]],
) -> Album:
    """Map an album metadata record and bind its song loader.

    Args:
        record: Album metadata record
        session: Session used to resolve URLs
        fetch_songs: Coroutine function fetching the songs of an album key
    """
    return Album(
        id=record["key"],
        title=record.get("title", ""),
        get_songs=ContentLoader(fetch_songs, record["key"]),
        sorting_title=record.get("titleSort"),
        artist=record.get("parentTitle"),
        description=record.get("summary"),
        year=record.get("year"),
        thumbnail=_url(session, record.get("thumb")),
        poster=_url(session, record.get("art")),
        collections=collection_tags(record),
    )


def to_collection(record: Dict[str, Any], session: PlexSession) -> Collection:
    """Map a full collection metadata record."""
    return Collection(
        id=record["key"],
        title=record.get("title", ""),
        sorting_title=record.get("titleSort"),
        description=record.get("summary"),
        thumbnail=_url(session, record.get("thumb")),
    )


def to_simple_collection(record: Dict[str, Any]) -> Collection:
    """Map a collection directory entry, which only carries key and title."""
    return Collection(id=record["key"], title=record.get("title", ""))


def library_fields(directory: Dict[str, Any], session: PlexSession) -> Dict[str, Any]:
    """Common library fields of a section directory entry."""
    return {
        "id": directory["key"],
        "title": directory.get("title", ""),
        "thumbnail": _url(session, directory.get("thumb")),
        "poster": _url(session, directory.get("art")),
    }
