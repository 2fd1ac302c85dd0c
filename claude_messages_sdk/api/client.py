"""Main client interface for the Messages SDK."""

from typing import Dict, Optional

import httpx

from ..config.settings import ClientSettings
from ..http.transport import HTTPTransport
from .messages import Messages


class AnthropicClient:
    """High-level async client for the Messages API.

    Example:
        async with AnthropicClient() as client:
            message = await client.messages.create(
                model="claude-sonnet-4-5-20250929",
                max_tokens=1024,
                messages=[Message.user("Hello!")],
            )
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_version: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        extra_headers: Optional[Dict[str, str]] = None,
        stream_buffer_size: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[ClientSettings] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key; read from ANTHROPIC_API_KEY when omitted
            api_version: Value of the anthropic-version header
            base_url: Override the API base URL
            timeout: Request timeout in seconds
            extra_headers: Headers added to every request
            stream_buffer_size: Events a stream may buffer ahead of its consumer
            http_client: Pre-configured httpx client (not closed by `aclose`)
            settings: Complete settings; other arguments are ignored when given

        Raises:
            ConfigurationError: If no API key is available
        """
        if settings is None:
            settings = ClientSettings.from_env(
                api_key=api_key,
                api_version=api_version,
                base_url=base_url,
                timeout=timeout,
                extra_headers=extra_headers,
                stream_buffer_size=stream_buffer_size,
            )
        self.settings = settings
        self.transport = HTTPTransport(settings, client=http_client)
        self.messages = Messages(self.transport, stream_buffer_size=settings.stream_buffer_size)

    @property
    def api_key(self) -> str:
        return self.settings.api_key

    @property
    def api_version(self) -> str:
        return self.settings.api_version

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "AnthropicClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
