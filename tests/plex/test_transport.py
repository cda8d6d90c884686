"""Tests for PlexHttpClient using httpx.MockTransport."""

import httpx
import pytest

from src.plex.transport import PlexHttpClient


def make_client(handler) -> PlexHttpClient:
    return PlexHttpClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestGetJson:
    """Tests for PlexHttpClient.get_json()."""

    @pytest.mark.asyncio
    async def test_token_merged_into_existing_query(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"MediaContainer": {}})

        async with make_client(handler) as http:
            data = await http.get_json(
                "http://h:32400/library/sections/1/all?includeCollections=1",
                token="abc",
                headers={"Accept": "application/json", "X-Plex-Product": "p"},
            )

        assert data == {"MediaContainer": {}}
        request = seen[0]
        assert request.url.params["includeCollections"] == "1"
        assert request.url.params["X-Plex-Token"] == "abc"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["X-Plex-Product"] == "p"

    @pytest.mark.asyncio
    async def test_no_token(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with make_client(handler) as http:
            await http.get_json("http://h:32400/library/sections")

        assert "X-Plex-Token" not in seen[0].url.params

    @pytest.mark.asyncio
    async def test_http_errors_propagate_unchanged(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        async with make_client(handler) as http:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await http.get_json("http://h:32400/library/sections/99/all", token="abc")

        assert exc_info.value.response.status_code == 404

    @pytest.mark.asyncio
    async def test_network_errors_propagate(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as http:
            with pytest.raises(httpx.ConnectError):
                await http.get_json("http://h:32400/library/sections")


class TestOtherMethods:
    """Tests for get_text() and post()."""

    @pytest.mark.asyncio
    async def test_get_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<MediaContainer/>")

        async with make_client(handler) as http:
            assert await http.get_text("https://plex.tv/devices.xml") == "<MediaContainer/>"

    @pytest.mark.asyncio
    async def test_post_does_not_raise_for_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"].startswith("Basic ")
            return httpx.Response(401, json={"error": "Invalid credentials"})

        async with make_client(handler) as http:
            response = await http.post("https://plex.tv/users/sign_in.json", auth=("u", "p"))

        assert response.status_code == 401
