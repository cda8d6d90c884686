"""plex.tv authentication and server discovery.

Authentication Flow:
    1. POST https://plex.tv/users/sign_in.json with HTTP basic auth and the
       basic X-Plex headers
    2. Read the account token from the ``user`` object of the response
    3. GET https://plex.tv/devices.xml with that token and keep the devices
       that provide a server

Sign-in happens at most once per authenticator. Concurrent callers of
``authenticate()`` and ``get_all_servers()`` share the same sign-in.
"""

import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from .config import PlexConfig
from .endpoints import Endpoint
from .models import PlexConnection, PlexDevice, PlexUser
from .transport import PlexHttpClient

logger = logging.getLogger(__name__)

# Status codes plex.tv uses for rejected credentials
REJECTED_STATUS_CODES = (401, 422)


def parse_devices(xml_text: str) -> List[PlexDevice]:
    """Parse a plex.tv ``devices.xml`` document.

    Args:
        xml_text: Raw XML body

    Returns:
        Every ``Device`` element, in document order

    Example:
        >>> devices = parse_devices(
        ...     '<MediaContainer><Device name="NAS" clientIdentifier="abc" '
        ...     'provides="server"><Connection uri="http://10.0.0.2:32400"/>'
        ...     '</Device></MediaContainer>'
        ... )
        >>> devices[0].connections[0].uri
        'http://10.0.0.2:32400'
    """
    root = ET.fromstring(xml_text)
    devices = []
    for element in root.iter("Device"):
        provides = [p for p in element.get("provides", "").split(",") if p]
        connections = [
            PlexConnection(
                uri=conn.get("uri", ""),
                local=conn.get("local") == "1",
            )
            for conn in element.findall("Connection")
            if conn.get("uri")
        ]
        devices.append(
            PlexDevice(
                name=element.get("name", ""),
                client_identifier=element.get("clientIdentifier", ""),
                product=element.get("product"),
                provides=provides,
                access_token=element.get("token"),
                public_address=element.get("publicAddress"),
                connections=connections,
            )
        )
    return devices


def select_first_server(servers: Sequence[PlexDevice]) -> str:
    """Default server selector.

    Picks the first server's first local connection, falling back to its
    first connection of any kind.

    Raises:
        ValueError: If the first server has no connections
    """
    server = servers[0]
    for connection in server.connections:
        if connection.local:
            return connection.uri
    if not server.connections:
        raise ValueError(f"Server {server.name} has no connections")
    return server.connections[0].uri


class PlexTvAuthenticator:
    """Authenticates against plex.tv and lists the account's servers."""

    def __init__(self, http: PlexHttpClient, config: PlexConfig, headers: Dict[str, str]):
        """Initialize the authenticator.

        Args:
            http: Shared transport
            config: Account credentials
            headers: Basic X-Plex headers
        """
        self._http = http
        self._config = config
        self._headers = headers
        self._lock = asyncio.Lock()
        self._signed_in = False
        self._user: Optional[PlexUser] = None
        self._error: Optional[Exception] = None

    async def _sign_in(self) -> Optional[PlexUser]:
        response = await self._http.post(
            Endpoint.SIGN_IN.resolve(),
            headers=self._headers,
            auth=(self._config.username, self._config.password),
        )
        if response.status_code in REJECTED_STATUS_CODES:
            logger.warning(f"plex.tv rejected credentials for {self._config.username}")
            return None
        response.raise_for_status()

        user_data = response.json().get("user")
        if not user_data:
            logger.warning("plex.tv sign-in response did not contain a user")
            return None

        user = PlexUser.from_dict(user_data)
        logger.info(f"Signed in to plex.tv as {user.username}")
        return user

    async def authenticate(self) -> Optional[PlexUser]:
        """Sign in to plex.tv.

        Returns:
            The authenticated user, or None if the credentials were rejected

        Raises:
            httpx.HTTPError: For network errors or unexpected statuses; the
                same error is raised again on every later call
        """
        async with self._lock:
            if not self._signed_in:
                try:
                    self._user = await self._sign_in()
                except Exception as error:
                    # Later callers get the same failure; sign-in is never retried
                    self._error = error
                self._signed_in = True
            if self._error is not None:
                raise self._error
        return self._user

    async def get_all_servers(self) -> List[PlexDevice]:
        """List the media servers registered to the account.

        Returns:
            Server devices in plex.tv order; empty if sign-in failed
        """
        user = await self.authenticate()
        if user is None:
            return []

        xml_text = await self._http.get_text(
            Endpoint.GET_DEVICES.resolve(),
            token=user.authentication_token,
            headers=self._headers,
        )
        servers = [device for device in parse_devices(xml_text) if device.is_server]
        logger.info(f"Discovered {len(servers)} Plex server(s)")
        return servers
