"""
API Constants

Central location for endpoint, protocol and default values used by the
client. Runtime overrides live in `ClientSettings` (see settings.py).
"""

# API endpoint
BASE_URL = "https://api.anthropic.com"
DEFAULT_API_VERSION = "2023-06-01"
USER_AGENT = "claude-messages-sdk-python/0.1.0"

MESSAGES_ENDPOINT = "/v1/messages"
COUNT_TOKENS_ENDPOINT = "/v1/messages/count_tokens"

SUPPORTED_HTTP_METHODS = ("GET", "POST")

# Environment variables
API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"
BASE_URL_ENV_VAR = "ANTHROPIC_BASE_URL"

# Request defaults
DEFAULT_TIMEOUT_SECONDS = 600.0
DEFAULT_MAX_TOKENS = 1024  # used by the CLI

# Streaming
STREAM_BUFFER_SIZE = 1  # events the producer may hold ahead of the consumer
SSE_DATA_PREFIX = "data: "
SSE_EVENT_PREFIX = "event: "
SSE_DONE_SENTINEL = "[DONE]"
