"""Shared fixtures for the Plex catalog tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from src.plex.models import PlexSession, PlexUser, ServerPreferences, ServerSetting


@pytest.fixture
def fixtures() -> Dict[str, Any]:
    """Load Plex API response fixtures from JSON file.

    Returns:
        Dictionary containing all fixture responses
    """
    fixtures_path = Path(__file__).parent / "fixtures" / "plex_responses.json"
    with open(fixtures_path, "r") as f:
        return json.load(f)


@pytest.fixture
def user() -> PlexUser:
    """Return an authenticated test user."""
    return PlexUser(id=1234, username="testuser", authentication_token="X")


@pytest.fixture
def session(user: PlexUser) -> PlexSession:
    """Return a ready session for server http://h:32400 with token X."""
    return PlexSession(
        server_address="http://h:32400",
        token="X",
        headers={"Accept": "application/json"},
        user=user,
        servers=(),
        preferences=ServerPreferences(settings=[ServerSetting(id="FriendlyName", value="NAS")]),
    )
