"""Async HTTP transport shared by every Plex component."""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)


class PlexHttpClient:
    """Thin wrapper around ``httpx.AsyncClient`` for Plex requests.

    Every request gets the caller's headers and, when a token is given,
    ``X-Plex-Token`` merged into the query string. HTTP errors are raised
    as ``httpx.HTTPStatusError`` and are never retried.

    Attributes:
        client: Underlying httpx.AsyncClient

    Example:
        >>> async with PlexHttpClient(timeout=10.0) as http:
        ...     data = await http.get_json(url, token="abc", headers=headers)
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            client: Optional preconfigured client (e.g. with a mock transport)
        """
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    @staticmethod
    def _params(token: Optional[str]) -> Dict[str, str]:
        return {"X-Plex-Token": token} if token else {}

    async def get(
        self,
        url: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Issue a GET request and raise for HTTP error statuses.

        Args:
            url: Absolute URL, may already carry a query string
            token: Optional X-Plex-Token
            headers: Request headers

        Returns:
            The successful response

        Raises:
            httpx.HTTPStatusError: For 4xx/5xx responses
            httpx.HTTPError: For network errors
        """
        logger.debug(f"GET {url}")
        # httpx replaces an existing query when params= is passed, so merge here
        request_url = httpx.URL(url).copy_merge_params(self._params(token))
        response = await self.client.get(request_url, headers=headers)
        response.raise_for_status()
        return response

    async def get_json(
        self,
        url: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """GET ``url`` and decode the JSON body."""
        response = await self.get(url, token=token, headers=headers)
        return response.json()

    async def get_text(
        self,
        url: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """GET ``url`` and return the body as text."""
        response = await self.get(url, token=token, headers=headers)
        return response.text

    async def post(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[Tuple[str, str]] = None,
    ) -> httpx.Response:
        """Issue a POST request without raising for the status code.

        Callers inspect the status themselves, since sign-in reports bad
        credentials as 401.
        """
        logger.debug(f"POST {url}")
        return await self.client.post(url, headers=headers, auth=auth)

    async def aclose(self):
        """Close the underlying client and release connections."""
        await self.client.aclose()
        logger.debug("Closed Plex HTTP client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
