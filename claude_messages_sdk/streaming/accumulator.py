"""
Message accumulation for streaming responses.

Folds the event sequence of one stream into a `MessageResponse` snapshot,
so the complete message is available once the stream has been drained.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..models.events import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStartEvent,
    StreamEvent,
)
from ..models.messages import MessageResponse, TextContent, ToolUseContent, parse_content_block
from ..observability.logging import SDKLogger


logger = SDKLogger("streaming")


class MessageAccumulator:
    """Builds the final message from stream events.

    Events seen before `message_start` are ignored. The snapshot is a copy;
    the `MessageStartEvent` handed to the consumer is left untouched.
    """

    def __init__(self):
        self.message: Optional[MessageResponse] = None
        self._json_fragments: Dict[int, List[str]] = {}

    def add_event(self, event: StreamEvent) -> None:
        if isinstance(event, MessageStartEvent):
            if event.message is not None:
                self.message = event.message.model_copy(deep=True)
                self._json_fragments.clear()
            return

        if self.message is None:
            return

        if isinstance(event, ContentBlockStartEvent):
            try:
                block = parse_content_block(dict(event.content_block))
            except ValidationError:
                block = dict(event.content_block)
            self._set_block(event.index, block)
        elif isinstance(event, ContentBlockDeltaEvent):
            self._apply_delta(event)
        elif isinstance(event, ContentBlockStopEvent):
            self._finish_block(event.index)
        elif isinstance(event, MessageDeltaEvent):
            if "stop_reason" in event.delta:
                self.message.stop_reason = event.stop_reason
            if "stop_sequence" in event.delta:
                self.message.stop_sequence = event.stop_sequence
            if event.output_tokens is not None:
                self.message.usage.output_tokens = event.output_tokens

    def _block(self, index: int) -> Any:
        content = self.message.content
        return content[index] if 0 <= index < len(content) else None

    def _set_block(self, index: int, block: Any) -> None:
        content = self.message.content
        while len(content) < index:
            content.append({})
        if index == len(content):
            content.append(block)
        else:
            content[index] = block

    def _apply_delta(self, event: ContentBlockDeltaEvent) -> None:
        block = self._block(event.index)
        if event.text is not None and isinstance(block, TextContent):
            block.text += event.text
        elif event.partial_json is not None:
            self._json_fragments.setdefault(event.index, []).append(event.partial_json)

    def _finish_block(self, index: int) -> None:
        fragments = self._json_fragments.pop(index, None)
        block = self._block(index)
        if not fragments or not isinstance(block, ToolUseContent):
            return

        document = "".join(fragments)
        try:
            parsed = json.loads(document)
        except json.JSONDecodeError as e:
            logger.warning(f"Tool input for block {index} is not valid JSON: {e.msg}", tool=block.name)
            return
        if isinstance(parsed, dict):
            block.input = parsed
