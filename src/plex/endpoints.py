"""Plex HTTP endpoint templates.

Templates use positional placeholders. Server-scoped templates take the
server address as ``{0}``, e.g. ``http://192.168.0.5:32400``. The address
must not end with ``/`` or the resolved paths 404.
"""

import string
from enum import Enum

# Plex metadata type code for albums
ALBUM_TYPE_CODE = "9"


class Endpoint(Enum):
    """Known Plex endpoints and their URL templates."""

    SIGN_IN = "https://plex.tv/users/sign_in.json"
    GET_DEVICES = "https://plex.tv/devices.xml"
    SERVER_PREFERENCES = "{0}/:/prefs"
    LIBRARIES = "{0}/library/sections"
    LIBRARY_MOVIES = "{0}/library/sections/{1}/all?includeCollections=1"
    LIBRARY_MUSIC = "{0}/library/sections/{1}/all?type={2}&includeCollections=1"
    LIBRARY_COLLECTIONS = "{0}/library/sections/{1}/collections"
    LIBRARY_MUSIC_COLLECTIONS = "{0}/library/sections/{1}/collection"
    CHILDREN = "{0}{1}"

    @property
    def placeholder_count(self) -> int:
        """Number of positional placeholders in the template."""
        return sum(
            1 for _, name, _, _ in string.Formatter().parse(self.value) if name is not None
        )

    def resolve(self, *args: str) -> str:
        """Substitute ``args`` into the template, in order.

        Args:
            *args: Placeholder values, server address first

        Returns:
            The resolved URL

        Raises:
            ValueError: If the number of arguments does not match the template

        Example:
            >>> Endpoint.LIBRARIES.resolve("http://h:32400")
            'http://h:32400/library/sections'
        """
        expected = self.placeholder_count
        if len(args) != expected:
            raise ValueError(
                f"Endpoint {self.name} takes {expected} argument(s), got {len(args)}"
            )
        return self.value.format(*args)
