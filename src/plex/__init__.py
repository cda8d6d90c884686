"""Plex media catalog client."""

__version__ = "1.0.0"

from .auth import PlexTvAuthenticator, parse_devices, select_first_server
from .config import PlexConfig
from .endpoints import Endpoint
from .exceptions import (
    MalformedRecordError,
    PlexAlreadyInitializedError,
    PlexError,
    PlexNotInitializedError,
)
from .headers import build_basic_headers
from .models import (
    PlexConnection,
    PlexDevice,
    PlexSession,
    PlexUser,
    ServerPreferences,
    ServerSetting,
)
from .preferences import PlexServerPreferencesProvider
from .service import PlexMediaService
from .transform import build_media_url, classify_library_type
from .transport import PlexHttpClient

__all__ = [
    # Service
    "PlexMediaService",
    # Collaborators
    "PlexHttpClient",
    "PlexTvAuthenticator",
    "PlexServerPreferencesProvider",
    "select_first_server",
    "parse_devices",
    "build_basic_headers",
    # Configuration
    "PlexConfig",
    "Endpoint",
    # Models
    "PlexUser",
    "PlexDevice",
    "PlexConnection",
    "PlexSession",
    "ServerPreferences",
    "ServerSetting",
    # Mapping
    "classify_library_type",
    "build_media_url",
    # Exceptions
    "PlexError",
    "PlexNotInitializedError",
    "PlexAlreadyInitializedError",
    "MalformedRecordError",
]
