"""Configuration for connecting to Plex.

All configuration is read from environment variables (NO .env files).
"""

import os
import platform
import uuid
from dataclasses import dataclass, field

from . import __version__


@dataclass
class PlexConfig:
    """Credentials and client identity used for every Plex request.

    Attributes:
        username: plex.tv account username or email
        password: plex.tv account password
        client_identifier: Stable unique id for this client installation
        product: Product name reported in X-Plex-Product
        version: Client version reported in X-Plex-Version
        platform: Platform reported in X-Plex-Platform
        device_name: Device name reported in X-Plex-Device-Name
        timeout: HTTP timeout in seconds
    """

    username: str
    password: str
    client_identifier: str = field(default_factory=lambda: str(uuid.uuid4()))
    product: str = "plex-catalog"
    version: str = __version__
    platform: str = field(default_factory=platform.system)
    device_name: str = "plex-catalog"
    timeout: float = 30.0

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.username:
            raise ValueError("username is required")
        if not self.password:
            raise ValueError("password is required")
        if not self.client_identifier:
            raise ValueError("client_identifier must not be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be greater than zero")

    @classmethod
    def from_environment(cls) -> "PlexConfig":
        """Load configuration from environment variables.

        Returns:
            PlexConfig: Loaded configuration object

        Raises:
            EnvironmentError: If required environment variables are missing
        """
        required = {
            "PLEX_USERNAME": os.getenv("PLEX_USERNAME"),
            "PLEX_PASSWORD": os.getenv("PLEX_PASSWORD"),
        }
        missing = [var for var, value in required.items() if not value]
        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"Example: export PLEX_USERNAME='you@example.com'"
            )

        optional = {}
        if os.getenv("PLEX_CLIENT_IDENTIFIER"):
            optional["client_identifier"] = os.getenv("PLEX_CLIENT_IDENTIFIER")
        if os.getenv("PLEX_PRODUCT"):
            optional["product"] = os.getenv("PLEX_PRODUCT")
        if os.getenv("PLEX_DEVICE_NAME"):
            optional["device_name"] = os.getenv("PLEX_DEVICE_NAME")
        if os.getenv("PLEX_TIMEOUT"):
            optional["timeout"] = float(os.getenv("PLEX_TIMEOUT"))

        return cls(
            username=required["PLEX_USERNAME"],
            password=required["PLEX_PASSWORD"],
            **optional,
        )
