"""Plex server preferences provider."""

import logging
from typing import Dict, Optional

from .endpoints import Endpoint
from .models import ServerPreferences, ServerSetting
from .transport import PlexHttpClient

logger = logging.getLogger(__name__)


class PlexServerPreferencesProvider:
    """Fetches ``/:/prefs`` from a Plex server."""

    def __init__(self, http: PlexHttpClient, headers: Dict[str, str]):
        self._http = http
        self._headers = headers

    async def get_server_settings(
        self, server_address: str, token: str
    ) -> Optional[ServerPreferences]:
        """Fetch the preferences of the server at ``server_address``.

        Args:
            server_address: Server address without trailing slash
            token: Account or server token

        Returns:
            ServerPreferences, or None if the response has no setting list

        Raises:
            httpx.HTTPError: For network/HTTP errors
        """
        data = await self._http.get_json(
            Endpoint.SERVER_PREFERENCES.resolve(server_address),
            token=token,
            headers=self._headers,
        )
        container = (data or {}).get("MediaContainer") or {}
        settings = container.get("Setting")
        if not isinstance(settings, list):
            logger.warning(f"No preferences returned by {server_address}")
            return None

        preferences = ServerPreferences(
            settings=[
                ServerSetting(
                    id=s["id"],
                    value=s.get("value"),
                    label=s.get("label"),
                    type=s.get("type"),
                    default=s.get("default"),
                    hidden=bool(s.get("hidden", False)),
                )
                for s in settings
                if isinstance(s, dict) and "id" in s
            ]
        )
        logger.debug(f"Loaded {len(preferences.settings)} preferences from {server_address}")
        return preferences
