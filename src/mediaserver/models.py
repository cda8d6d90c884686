"""Server-agnostic catalog models.

A library is one of three dataclass variants, each carrying a fixed
``type`` tag and only the content loaders valid for that tag:

    MovieLibrary  -> get_movies, get_collections
    MusicLibrary  -> get_albums, get_collections
    OtherLibrary  -> get_collections

Loaders are deferred fetches bound to the minimal key they need (a
library or album key). Awaiting a loader issues a fresh request every
time; nothing is memoized.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, ClassVar, Generic, List, Optional, Tuple, TypeVar

from .enums import LibraryType

T = TypeVar("T")


@dataclass(frozen=True)
class ContentLoader(Generic[T]):
    """Deferred fetch of a list of entities for a single key.

    Attributes:
        fetch: Coroutine function taking ``key`` and returning the entities
        key: Identifier captured when the loader was bound
    """

    fetch: Callable[[str], Awaitable[List[T]]]
    key: str

    async def __call__(self) -> List[T]:
        """Issue the request and return the mapped entities.

        Cancelling the awaiting task cancels the in-flight request.
        """
        return await self.fetch(self.key)


def _loader_field():
    return field(compare=False, repr=False)


@dataclass
class Collection:
    """Named grouping of library items.

    The simplified music collection listing only provides ``id`` and
    ``title``; the remaining fields stay ``None`` in that case.
    """

    id: str
    title: str
    sorting_title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None


@dataclass
class Song:
    """Single audio track.

    Attributes:
        duration: Duration in milliseconds
        size: File size in bytes
        streaming_url: Full URL including the auth token
    """

    id: str
    title: str
    file_name: Optional[str] = None
    size: Optional[int] = None
    sorting_title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: Optional[int] = None
    bitrate: Optional[int] = None
    audio_channels: Optional[int] = None
    audio_codec: Optional[str] = None
    container: Optional[str] = None
    streaming_url: Optional[str] = None


@dataclass
class Album:
    """Music album with a deferred loader for its songs."""

    id: str
    title: str
    get_songs: ContentLoader[Song] = _loader_field()
    sorting_title: Optional[str] = None
    artist: Optional[str] = None
    description: Optional[str] = None
    year: Optional[int] = None
    thumbnail: Optional[str] = None
    poster: Optional[str] = None
    collections: List[str] = field(default_factory=list)


@dataclass
class Movie:
    """Single movie, described by its first media rendition."""

    id: str
    title: str
    sorting_title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    bitrate: Optional[int] = None
    audio_channels: Optional[int] = None
    audio_codec: Optional[str] = None
    video_codec: Optional[str] = None
    container: Optional[str] = None
    rating: Optional[float] = None
    studio: Optional[str] = None
    view_count: Optional[int] = None
    year: Optional[int] = None
    thumbnail: Optional[str] = None
    poster: Optional[str] = None
    streaming_url: Optional[str] = None
    collections: List[str] = field(default_factory=list)


@dataclass
class Library:
    """Fields common to every library variant.

    Attributes:
        id: Library key on the server
        title: Display title
        thumbnail: Full thumbnail URL
        poster: Full poster (art) URL
        type: Variant tag, fixed per subclass
    """

    id: str
    title: str
    thumbnail: Optional[str]
    poster: Optional[str]
    type: LibraryType = field(default=LibraryType.OTHER, init=False)

    # Loader attributes present on this variant, in declaration order
    ACCESSORS: ClassVar[Tuple[str, ...]] = ()

    def accessors(self) -> Tuple[str, ...]:
        """Return the names of the content loaders this library exposes."""
        return self.ACCESSORS


@dataclass
class MovieLibrary(Library):
    """Library of movies."""

    get_movies: ContentLoader[Movie] = _loader_field()
    get_collections: ContentLoader[Collection] = _loader_field()
    type: LibraryType = field(default=LibraryType.MOVIE, init=False)

    ACCESSORS = ("get_movies", "get_collections")


@dataclass
class MusicLibrary(Library):
    """Library of music, browsed by album."""

    get_albums: ContentLoader[Album] = _loader_field()
    get_collections: ContentLoader[Collection] = _loader_field()
    type: LibraryType = field(default=LibraryType.MUSIC, init=False)

    ACCESSORS = ("get_albums", "get_collections")


@dataclass
class OtherLibrary(Library):
    """Any library without a dedicated variant (including TV series)."""

    get_collections: ContentLoader[Collection] = _loader_field()
    type: LibraryType = field(default=LibraryType.OTHER, init=False)

    ACCESSORS = ("get_collections",)
