"""Enumerations shared by every media server implementation."""

from enum import Enum


class LibraryType(Enum):
    """Kind of content a library holds."""

    MOVIE = "movie"
    TV_SERIES = "tv_series"
    MUSIC = "music"
    OTHER = "other"


class InitializationStatus(Enum):
    """Terminal outcome of a media server initialization.

    Failed initializations are reported with one of these values rather
    than raised, so callers can branch on the outcome directly.
    """

    OK = "ok"
    UNAUTHORISED = "unauthorised"
    NO_SERVERS_DISCOVERED = "no_servers_discovered"
    ERROR = "error"
