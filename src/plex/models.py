"""Data models for Plex accounts, servers and sessions."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class PlexUser:
    """Authenticated plex.tv account.

    Attributes:
        id: Numeric account id
        uuid: Account UUID
        username: Account username
        email: Account email
        title: Display name
        thumb: Avatar URL
        authentication_token: Token sent as X-Plex-Token
    """

    id: int
    username: str
    authentication_token: str
    uuid: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    thumb: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlexUser":
        """Build a user from the ``user`` object of a sign-in response."""
        return cls(
            id=data["id"],
            username=data.get("username", ""),
            authentication_token=data.get("authToken") or data["authentication_token"],
            uuid=data.get("uuid"),
            email=data.get("email"),
            title=data.get("title"),
            thumb=data.get("thumb"),
        )


@dataclass
class PlexConnection:
    """One address a device can be reached at."""

    uri: str
    local: bool = False


@dataclass
class PlexDevice:
    """Device registered to the account, as listed by plex.tv."""

    name: str
    client_identifier: str
    product: Optional[str] = None
    provides: List[str] = field(default_factory=list)
    access_token: Optional[str] = None
    public_address: Optional[str] = None
    connections: List[PlexConnection] = field(default_factory=list)

    @property
    def is_server(self) -> bool:
        """True if the device provides a media server."""
        return "server" in self.provides


@dataclass
class ServerSetting:
    """Single server preference from ``/:/prefs``."""

    id: str
    value: Any = None
    label: Optional[str] = None
    type: Optional[str] = None
    default: Any = None
    hidden: bool = False


@dataclass
class ServerPreferences:
    """Preferences of the selected server."""

    settings: List[ServerSetting] = field(default_factory=list)

    def get(self, setting_id: str, default: Any = None) -> Any:
        """Return the value of ``setting_id``, or ``default`` if absent."""
        for setting in self.settings:
            if setting.id == setting_id:
                return setting.value
        return default


@dataclass(frozen=True)
class PlexSession:
    """Immutable snapshot of a successful initialization.

    Content loaders bind this value, so a loader keeps talking to the
    server it was created for.

    Attributes:
        server_address: Selected server address, without trailing slash
        token: Account token
        headers: Basic headers attached to every request
        user: Authenticated account
        servers: Servers discovered for the account
        preferences: Preferences of the selected server
    """

    server_address: str
    token: str
    headers: Dict[str, str]
    user: PlexUser
    servers: Tuple[PlexDevice, ...]
    preferences: ServerPreferences

    @property
    def query_string_token(self) -> str:
        """Token formatted for appending to a URL query string."""
        return f"X-Plex-Token={self.token}"
