"""Plex media catalog service.

Usage follows a one-shot lifecycle:

    1. ``await service.initialize(selector)`` signs in, discovers servers,
       selects one and fetches its preferences
    2. ``await service.get_all_libraries()`` returns typed libraries whose
       loaders fetch their content on demand

A service initializes once. To start over, build a new service.

Example:
    >>> service = PlexMediaService.get_default_instance("me@example.com", "secret")
    >>> async with service:
    ...     status = await service.initialize(select_first_server)
    ...     if status is InitializationStatus.OK:
    ...         for library in await service.get_all_libraries():
    ...             print(library.title, library.type)
"""

import asyncio
import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..mediaserver.enums import InitializationStatus, LibraryType
from ..mediaserver.models import (
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
from . import transform
from .auth import PlexTvAuthenticator
from .config import PlexConfig
from .endpoints import ALBUM_TYPE_CODE, Endpoint
from .exceptions import PlexAlreadyInitializedError, PlexNotInitializedError
from .headers import build_basic_headers
from .models import PlexDevice, PlexSession
from .preferences import PlexServerPreferencesProvider
from .transport import PlexHttpClient

logger = logging.getLogger(__name__)

ServerSelector = Callable[[Sequence[PlexDevice]], str]


def _require_id(value: Optional[str], name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value


def _require(value: Any, name: str) -> Any:
    if value is None:
        raise ValueError(f"{name} is required")
    return value


class PlexMediaService:
    """Catalog client for a single Plex server.

    Attributes:
        config: Account credentials and client identity
        status: Terminal initialization outcome, None until initialize() returns
        session: Session snapshot, set only when initialization succeeds
    """

    def __init__(
        self,
        config: PlexConfig,
        http: PlexHttpClient,
        authenticator: PlexTvAuthenticator,
        settings_provider: PlexServerPreferencesProvider,
    ):
        """Initialize the service with its collaborators.

        Raises:
            ValueError: If any collaborator is missing
        """
        self.config = _require(config, "config")
        self._http = _require(http, "http")
        self._authenticator = _require(authenticator, "authenticator")
        self._settings_provider = _require(settings_provider, "settings_provider")
        self._headers = build_basic_headers(config)
        self._initializing = False
        self.status: Optional[InitializationStatus] = None
        self.session: Optional[PlexSession] = None

    @classmethod
    def get_default_instance(cls, username: str, password: str) -> "PlexMediaService":
        """Build a service wired with the default plex.tv collaborators.

        Args:
            username: plex.tv username or email
            password: plex.tv password
        """
        config = PlexConfig(username=username, password=password)
        return cls.from_config(config)

    @classmethod
    def from_config(cls, config: PlexConfig) -> "PlexMediaService":
        """Build a service for ``config`` with the default collaborators."""
        http = PlexHttpClient(timeout=config.timeout)
        headers = build_basic_headers(config)
        return cls(
            config,
            http,
            PlexTvAuthenticator(http, config, headers),
            PlexServerPreferencesProvider(http, headers),
        )

    async def initialize(self, server_selector: ServerSelector) -> InitializationStatus:
        """Sign in, discover servers, select one and load its preferences.

        Sign-in and discovery run concurrently. The outcome is returned,
        not raised; transport errors and cancellation propagate.

        Args:
            server_selector: Picks a server address from the discovered servers

        Returns:
            OK when the service is ready; UNAUTHORISED, NO_SERVERS_DISCOVERED
            or ERROR otherwise

        Raises:
            PlexAlreadyInitializedError: If called more than once
        """
        if self._initializing or self.status is not None:
            raise PlexAlreadyInitializedError(
                "Service already initialized; create a new service to re-initialize"
            )
        self._initializing = True
        self.status = await self._run_initialization(server_selector)
        return self.status

    async def _run_initialization(self, server_selector: ServerSelector) -> InitializationStatus:
        logger.info("Authenticating and discovering servers")
        sign_in = asyncio.ensure_future(self._authenticator.authenticate())
        discovery = asyncio.ensure_future(self._authenticator.get_all_servers())
        try:
            user, servers = await asyncio.gather(sign_in, discovery)
        except Exception:
            # No request outlives a failed initialization
            for task in (sign_in, discovery):
                task.cancel()
            await asyncio.gather(sign_in, discovery, return_exceptions=True)
            raise

        if user is None:
            logger.warning("Initialization failed: not authorised")
            return InitializationStatus.UNAUTHORISED
        if not servers:
            logger.warning("Initialization failed: no servers discovered")
            return InitializationStatus.NO_SERVERS_DISCOVERED

        server_address = server_selector(servers).rstrip("/")
        logger.info(f"Selected Plex server {server_address}")

        preferences = await self._settings_provider.get_server_settings(
            server_address, user.authentication_token
        )
        if preferences is None:
            logger.warning(f"Initialization failed: no preferences from {server_address}")
            return InitializationStatus.ERROR

        self.session = PlexSession(
            server_address=server_address,
            token=user.authentication_token,
            headers=dict(self._headers),
            user=user,
            servers=tuple(servers),
            preferences=preferences,
        )
        logger.info("Plex service ready")
        return InitializationStatus.OK

    def _require_session(self) -> PlexSession:
        if self.session is None:
            raise PlexNotInitializedError(
                "Plex service is not initialized; await initialize() first"
            )
        return self.session

    async def _request(self, session: PlexSession, endpoint: Endpoint, *args: str) -> Dict[str, Any]:
        url = endpoint.resolve(session.server_address, *args)
        return await self._http.get_json(url, token=session.token, headers=session.headers)

    # Libraries

    async def get_all_libraries(self) -> List[Library]:
        """Fetch every library section, typed by its content.

        Returns:
            Libraries in server order, each with its content loaders bound
        """
        session = self._require_session()
        data = await self._request(session, Endpoint.LIBRARIES)
        libraries = [
            self._build_library(directory, session)
            for directory in transform.directory_records(data)
        ]
        logger.info(f"Retrieved {len(libraries)} libraries")
        return libraries

    def _build_library(self, directory: Dict[str, Any], session: PlexSession) -> Library:
        """Create the library variant for a section directory entry."""
        key = directory["key"]
        library_type = transform.classify_library_type(directory.get("type"))
        fields = transform.library_fields(directory, session)

        if library_type is LibraryType.MOVIE:
            return MovieLibrary(
                **fields,
                get_movies=ContentLoader(partial(self._fetch_movies, session), key),
                get_collections=ContentLoader(partial(self._fetch_collections, session), key),
            )
        if library_type is LibraryType.MUSIC:
            return MusicLibrary(
                **fields,
                get_albums=ContentLoader(partial(self._fetch_albums, session), key),
                get_collections=ContentLoader(
                    partial(self._fetch_collections_simple, session), key
                ),
            )
        # TV series have no dedicated variant yet
        return OtherLibrary(
            **fields,
            get_collections=ContentLoader(partial(self._fetch_collections, session), key),
        )

    # Content accessors

    async def get_movies(self, library_id: str) -> List[Movie]:
        """Fetch the movies of a movie library."""
        _require_id(library_id, "library_id")
        return await self._fetch_movies(self._require_session(), library_id)

    async def get_albums(self, library_id: str) -> List[Album]:
        """Fetch the albums of a music library."""
        _require_id(library_id, "library_id")
        return await self._fetch_albums(self._require_session(), library_id)

    async def get_album_songs(self, album_id: str) -> List[Song]:
        """Fetch the songs of an album, given the album's key."""
        _require_id(album_id, "album_id")
        return await self._fetch_album_songs(self._require_session(), album_id)

    async def get_collections(self, library_id: str) -> List[Collection]:
        """Fetch the collections of a library with full metadata."""
        _require_id(library_id, "library_id")
        return await self._fetch_collections(self._require_session(), library_id)

    async def get_collections_simple(self, library_id: str) -> List[Collection]:
        """Fetch the collection directory of a music library (key and title only)."""
        _require_id(library_id, "library_id")
        return await self._fetch_collections_simple(self._require_session(), library_id)

    async def _fetch_movies(self, session: PlexSession, library_id: str) -> List[Movie]:
        data = await self._request(session, Endpoint.LIBRARY_MOVIES, library_id)
        movies = [transform.to_movie(m, session) for m in transform.metadata_records(data)]
        logger.info(f"Retrieved {len(movies)} movies from library {library_id}")
        return movies

    async def _fetch_albums(self, session: PlexSession, library_id: str) -> List[Album]:
        data = await self._request(session, Endpoint.LIBRARY_MUSIC, library_id, ALBUM_TYPE_CODE)
        fetch_songs = partial(self._fetch_album_songs, session)
        albums = [
            transform.to_album(m, session, fetch_songs)
            for m in transform.metadata_records(data)
        ]
        logger.info(f"Retrieved {len(albums)} albums from library {library_id}")
        return albums

    async def _fetch_album_songs(self, session: PlexSession, album_id: str) -> List[Song]:
        data = await self._request(session, Endpoint.CHILDREN, album_id)
        songs = [transform.to_song(m, session) for m in transform.metadata_records(data)]
        logger.info(f"Retrieved {len(songs)} songs from album {album_id}")
        return songs

    async def _fetch_collections(self, session: PlexSession, library_id: str) -> List[Collection]:
        data = await self._request(session, Endpoint.LIBRARY_COLLECTIONS, library_id)
        collections = [
            transform.to_collection(m, session) for m in transform.metadata_records(data)
        ]
        logger.info(f"Retrieved {len(collections)} collections from library {library_id}")
        return collections

    async def _fetch_collections_simple(
        self, session: PlexSession, library_id: str
    ) -> List[Collection]:
        data = await self._request(session, Endpoint.LIBRARY_MUSIC_COLLECTIONS, library_id)
        collections = [
            transform.to_simple_collection(d) for d in transform.directory_records(data)
        ]
        logger.info(f"Retrieved {len(collections)} collections from library {library_id}")
        return collections

    async def aclose(self):
        """Close the HTTP transport."""
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
