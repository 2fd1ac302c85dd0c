"""Client settings resolved from arguments and the environment."""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..errors import ConfigurationError
from .constants import (
    API_KEY_ENV_VAR,
    BASE_URL,
    BASE_URL_ENV_VAR,
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT_SECONDS,
    STREAM_BUFFER_SIZE,
)


class ClientSettings(BaseModel):
    """Connection settings shared by every request a client makes."""

    api_key: str = Field(..., min_length=1, description="API authentication key")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="Value of the anthropic-version header")
    base_url: str = Field(default=BASE_URL, description="Scheme and host requests are sent to")
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds")
    extra_headers: Dict[str, str] = Field(default_factory=dict, description="Headers merged over the defaults")
    stream_buffer_size: int = Field(
        default=STREAM_BUFFER_SIZE, ge=1, description="Events buffered between producer and consumer"
    )

    @classmethod
    def from_env(cls, api_key: Optional[str] = None, **overrides: Any) -> "ClientSettings":
        """Build settings from explicit values, falling back to the environment.

        Loads a `.env` file when present. Explicit arguments win over
        environment variables; overrides set to None are ignored.

        Raises:
            ConfigurationError: If no API key can be found.
        """
        load_dotenv()

        key = api_key or os.getenv(API_KEY_ENV_VAR)
        if not key:
            raise ConfigurationError(
                "API key must be provided via the `api_key` parameter or "
                f"the {API_KEY_ENV_VAR} environment variable"
            )

        values = {k: v for k, v in overrides.items() if v is not None}
        if "base_url" not in values and os.getenv(BASE_URL_ENV_VAR):
            values["base_url"] = os.getenv(BASE_URL_ENV_VAR)

        return cls(api_key=key, **values)

    def url_for(self, path: str) -> str:
        """Join an endpoint path onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
