"""
Claude Messages SDK - async client for the Anthropic Messages API.

Features:
- Typed request parameters and response models
- Streaming responses decoded into typed events
- Text-only and final-message views over a stream
- Scoped stream consumption that always releases the connection
- Token counting
"""

__version__ = "0.1.0"

from .api.client import AnthropicClient
from .api.messages import Messages
from .config.settings import ClientSettings
from .errors import (
    AnthropicSDKError,
    APIError,
    ConfigurationError,
    EventParseWarning,
    TransportError,
    UnsupportedMethodError,
)
from .models import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    CountTokensResponse,
    ImageContent,
    ImageSource,
    Message,
    MessageDeltaEvent,
    MessageResponse,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    StreamEvent,
    TextContent,
    Tool,
    ToolInputSchema,
    ToolResultContent,
    ToolUseContent,
    UnknownEvent,
    Usage,
)
from .streaming import MessageStream

__all__ = [
    # Main client
    "AnthropicClient",
    "Messages",
    "ClientSettings",
    "MessageStream",

    # Models
    "Message",
    "MessageResponse",
    "Usage",
    "CountTokensResponse",
    "TextContent",
    "ImageContent",
    "ImageSource",
    "ToolUseContent",
    "ToolResultContent",
    "Tool",
    "ToolInputSchema",

    # Stream events
    "StreamEvent",
    "MessageStartEvent",
    "ContentBlockStartEvent",
    "ContentBlockDeltaEvent",
    "ContentBlockStopEvent",
    "MessageDeltaEvent",
    "MessageStopEvent",
    "PingEvent",
    "UnknownEvent",

    # Errors
    "AnthropicSDKError",
    "APIError",
    "ConfigurationError",
    "EventParseWarning",
    "TransportError",
    "UnsupportedMethodError",
]
