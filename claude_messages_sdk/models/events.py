"""Event models for streamed Messages responses.

One dataclass per `type` value of the wire protocol. Delta and usage
payloads stay plain dicts because their keys vary between protocol
versions; typed accessors cover the keys the SDK relies on.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .messages import MessageResponse


@dataclass
class StreamEvent:
    """Base class for all streaming events."""
    type: str = ""


@dataclass
class MessageStartEvent(StreamEvent):
    """Initial message metadata: id, model, role, empty content, usage so far."""
    type: str = field(default="message_start", init=False)
    message: Optional[MessageResponse] = None


@dataclass
class ContentBlockStartEvent(StreamEvent):
    """A new content block (text or tool use) begins at `index`."""
    type: str = field(default="content_block_start", init=False)
    index: int = 0
    content_block: Dict[str, Any] = field(default_factory=dict)

    @property
    def block_type(self) -> Optional[str]:
        return self.content_block.get("type")


@dataclass
class ContentBlockDeltaEvent(StreamEvent):
    """Incremental content for the block at `index`."""
    type: str = field(default="content_block_delta", init=False)
    index: int = 0
    delta: Dict[str, Any] = field(default_factory=dict)

    @property
    def delta_type(self) -> Optional[str]:
        return self.delta.get("type")

    @property
    def text(self) -> Optional[str]:
        """Text carried by this delta, or None for non-text deltas."""
        value = self.delta.get("text")
        return value if isinstance(value, str) else None

    @property
    def partial_json(self) -> Optional[str]:
        """Fragment of a tool-use input document, if this is a JSON delta."""
        value = self.delta.get("partial_json")
        return value if isinstance(value, str) else None


@dataclass
class ContentBlockStopEvent(StreamEvent):
    """The block at `index` is complete."""
    type: str = field(default="content_block_stop", init=False)
    index: int = 0


@dataclass
class MessageDeltaEvent(StreamEvent):
    """Message-level updates (stop reason) and updated token usage."""
    type: str = field(default="message_delta", init=False)
    delta: Dict[str, Any] = field(default_factory=dict)
    usage: Dict[str, Any] = field(default_factory=dict)

    @property
    def stop_reason(self) -> Optional[str]:
        return self.delta.get("stop_reason")

    @property
    def stop_sequence(self) -> Optional[str]:
        return self.delta.get("stop_sequence")

    @property
    def output_tokens(self) -> Optional[int]:
        value = self.usage.get("output_tokens")
        return value if isinstance(value, int) else None


@dataclass
class MessageStopEvent(StreamEvent):
    """No more content events follow."""
    type: str = field(default="message_stop", init=False)


@dataclass
class PingEvent(StreamEvent):
    """Keep-alive."""
    type: str = field(default="ping", init=False)


@dataclass
class UnknownEvent(StreamEvent):
    """Any event whose `type` is not recognized; `raw` is the full payload."""
    type: str = "unknown"
    raw: Any = None
