"""
Event parser and classifier for streamed Messages responses.

Each decoded line is handled by these rules, in order:

1. blank line: ignored
2. ``event: <name>``: ignored (the payload carries its own ``type``)
3. ``data: [DONE]``: end of stream, no event
4. ``data: <json>``: decoded and classified by its ``type`` field
5. anything else: ignored

A data line that is not valid JSON, or lacks the fields its ``type``
requires, is logged and skipped; the stream carries on.
"""

import json
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from ..config.constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL, SSE_EVENT_PREFIX
from ..errors import EventParseWarning
from ..models.events import (
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
from ..models.messages import MessageResponse
from ..observability.logging import SDKLogger


logger = SDKLogger("streaming")


def _require(data: Dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise EventParseWarning(f"{data.get('type')} event is missing '{key}'")
    value = data[key]
    # bool is an int subclass but never a valid index
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise EventParseWarning(
            f"{data.get('type')} event has '{key}' of type {type(value).__name__}, expected {kind.__name__}"
        )
    return value


def _message_start(data: Dict[str, Any]) -> MessageStartEvent:
    raw_message = _require(data, "message", dict)
    try:
        message = MessageResponse.model_validate(raw_message)
    except ValidationError as e:
        raise EventParseWarning(f"message_start carries an invalid message: {e.error_count()} error(s)") from e
    return MessageStartEvent(message=message)


def _content_block_start(data: Dict[str, Any]) -> ContentBlockStartEvent:
    return ContentBlockStartEvent(
        index=_require(data, "index", int),
        content_block=_require(data, "content_block", dict),
    )


def _content_block_delta(data: Dict[str, Any]) -> ContentBlockDeltaEvent:
    return ContentBlockDeltaEvent(
        index=_require(data, "index", int),
        delta=_require(data, "delta", dict),
    )


def _content_block_stop(data: Dict[str, Any]) -> ContentBlockStopEvent:
    return ContentBlockStopEvent(index=_require(data, "index", int))


def _message_delta(data: Dict[str, Any]) -> MessageDeltaEvent:
    usage = data.get("usage")
    if usage is None:
        usage = {}
    elif not isinstance(usage, dict):
        raise EventParseWarning(f"message_delta event has 'usage' of type {type(usage).__name__}, expected dict")
    return MessageDeltaEvent(delta=_require(data, "delta", dict), usage=usage)


EVENT_BUILDERS: Dict[str, Callable[[Dict[str, Any]], StreamEvent]] = {
    "message_start": _message_start,
    "content_block_start": _content_block_start,
    "content_block_delta": _content_block_delta,
    "content_block_stop": _content_block_stop,
    "message_delta": _message_delta,
    "message_stop": lambda data: MessageStopEvent(),
    "ping": lambda data: PingEvent(),
}


def classify_event(data: Any) -> StreamEvent:
    """
    Map a decoded JSON payload to its event class.

    Unrecognized `type` values produce an `UnknownEvent` holding the payload.

    Raises:
        EventParseWarning: If the payload is not an object or a known event
            is missing required fields.
    """
    if not isinstance(data, dict):
        raise EventParseWarning(f"event payload is a JSON {type(data).__name__}, expected an object")

    event_type = data.get("type")
    builder = EVENT_BUILDERS.get(event_type) if isinstance(event_type, str) else None
    if builder is None:
        return UnknownEvent(
            type=event_type if isinstance(event_type, str) else "unknown",
            raw=data,
        )
    return builder(data)


def decode_event(payload: str) -> StreamEvent:
    """Decode the text after ``data: `` into an event."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise EventParseWarning(f"invalid JSON at position {e.pos}: {e.msg}") from e
    return classify_event(data)


class SSEEventParser:
    """Stateful line parser for one stream.

    Attributes:
        done: True once the ``[DONE]`` sentinel has been seen; later lines
            are ignored
        events: Number of events produced
        skipped: Number of data lines dropped as malformed
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id
        self.done = False
        self.events = 0
        self.skipped = 0

    def parse_line(self, line: str) -> Optional[StreamEvent]:
        """Return the event carried by `line`, or None if it carries none."""
        if self.done or not line.strip():
            return None
        if line.startswith(SSE_EVENT_PREFIX):
            return None
        if not line.startswith(SSE_DATA_PREFIX):
            return None

        payload = line[len(SSE_DATA_PREFIX):]
        if payload == SSE_DONE_SENTINEL:
            self.done = True
            return None

        try:
            event = decode_event(payload)
        except EventParseWarning as warning:
            self.skipped += 1
            logger.warning(
                f"Failed to parse streaming event: {warning}",
                request_id=self.request_id,
                line=repr(_preview(line)),
            )
            return None

        self.events += 1
        return event


def _preview(line: str, limit: int = 80) -> str:
    return line if len(line) <= limit else line[: limit - 3] + "..."
