"""Basic X-Plex request headers."""

from typing import Dict

from .config import PlexConfig


def build_basic_headers(config: PlexConfig) -> Dict[str, str]:
    """Build the headers Plex expects on every request.

    Args:
        config: Client identity to report

    Returns:
        Header dictionary, requesting JSON responses

    Example:
        >>> headers = build_basic_headers(PlexConfig(username="u", password="p"))
        >>> headers["X-Plex-Product"]
        'plex-catalog'
    """
    return {
        "Accept": "application/json",
        "X-Plex-Client-Identifier": config.client_identifier,
        "X-Plex-Product": config.product,
        "X-Plex-Version": config.version,
        "X-Plex-Platform": config.platform,
        "X-Plex-Device": config.platform,
        "X-Plex-Device-Name": config.device_name,
    }
