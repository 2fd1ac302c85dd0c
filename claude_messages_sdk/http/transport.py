"""HTTP transport for the Messages API.

Wraps an `httpx.AsyncClient`: builds headers, sends JSON requests and maps
failures to `APIError` / `TransportError`. Streaming requests are exposed as
an async context manager so the response is always closed on exit.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ..config.constants import SUPPORTED_HTTP_METHODS, USER_AGENT
from ..config.settings import ClientSettings
from ..errors import ErrorMapper, UnsupportedMethodError
from ..observability.logging import SDKLogger


logger = SDKLogger("http")


def build_headers(
    api_key: str,
    api_version: str,
    extra_headers: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Build request headers; `extra_headers` override the defaults."""
    headers = {
        "x-api-key": api_key,
        "anthropic-version": api_version,
        "content-type": "application/json",
        "user-agent": USER_AGENT,
    }
    if extra_headers:
        headers.update(extra_headers)
    return headers


class HTTPTransport:
    """Sends requests to the API on behalf of a client."""

    def __init__(self, settings: ClientSettings, client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            settings: Connection settings (key, version, base URL, timeout)
            client: Optional pre-built httpx client; the transport only closes
                clients it created itself
        """
        self.settings = settings
        self._client = client if client is not None else httpx.AsyncClient(timeout=settings.timeout)
        self._owns_client = client is None

    @property
    def headers(self) -> Dict[str, str]:
        return build_headers(
            self.settings.api_key,
            self.settings.api_version,
            self.settings.extra_headers,
        )

    def _build_request(self, method: str, path: str, body: Optional[Dict[str, Any]]) -> httpx.Request:
        if method not in SUPPORTED_HTTP_METHODS:
            raise UnsupportedMethodError(method)
        url = self.settings.url_for(path)
        if method == "POST":
            return self._client.build_request(method, url, headers=self.headers, json=body)
        return self._client.build_request(method, url, headers=self.headers)

    async def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """
        Send a request and return the fully read response.

        Raises:
            UnsupportedMethodError: For verbs other than GET and POST
            TransportError: If the connection fails
            APIError: If the API answers with status >= 400
        """
        request = self._build_request(method, path, body)
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            raise ErrorMapper.from_transport_error(e) from e

        if response.status_code >= 400:
            raise ErrorMapper.from_response(response)
        return response

    @asynccontextmanager
    async def stream(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> AsyncIterator[httpx.Response]:
        """
        Open a streaming request.

        The body of an error response is read before `APIError` is raised.
        The response is closed when the context exits, however it exits.
        """
        request = self._build_request(method, path, body)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise ErrorMapper.from_transport_error(e) from e

        try:
            if response.status_code >= 400:
                try:
                    await response.aread()
                except httpx.HTTPError as e:
                    raise ErrorMapper.from_transport_error(e) from e
                raise ErrorMapper.from_response(response)
            yield response
        finally:
            await response.aclose()
            logger.debug("Closed streaming response", path=path, status=response.status_code)

    async def aiter_bytes(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Iterate the raw body, mapping read failures to TransportError."""
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            raise ErrorMapper.from_transport_error(e) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
