"""Data models for the Messages SDK."""

from .messages import (
    CONTENT_BLOCK_TYPES,
    ContentBlock,
    CountTokensResponse,
    ImageContent,
    ImageSource,
    Message,
    MessageResponse,
    TextContent,
    Tool,
    ToolInputSchema,
    ToolResultContent,
    ToolUseContent,
    Usage,
    parse_content_block,
)
from .params import CountTokensParams, MessageCreateParams
from .events import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    StreamEvent,
    UnknownEvent,
)

__all__ = [
    # Conversation and response models
    "Message",
    "MessageResponse",
    "Usage",
    "CountTokensResponse",

    # Content blocks
    "ContentBlock",
    "CONTENT_BLOCK_TYPES",
    "TextContent",
    "ImageContent",
    "ImageSource",
    "ToolUseContent",
    "ToolResultContent",
    "parse_content_block",

    # Tools
    "Tool",
    "ToolInputSchema",

    # Request parameters
    "MessageCreateParams",
    "CountTokensParams",

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
]
