"""Server-agnostic media catalog model."""

from .enums import InitializationStatus, LibraryType
from .models import (
    Album,
    Collection,
    ContentLoader,
    Library,
    Movie,
    MovieLibrary,
    MusicLibrary,
    OtherLibrary,
    Song,
)

__all__ = [
    # Enums
    "InitializationStatus",
    "LibraryType",
    # Libraries
    "Library",
    "MovieLibrary",
    "MusicLibrary",
    "OtherLibrary",
    # Content
    "Album",
    "Collection",
    "Movie",
    "Song",
    "ContentLoader",
]
