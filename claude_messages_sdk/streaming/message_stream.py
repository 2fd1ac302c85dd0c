"""
Consumption wrapper around one streaming Messages request.

A `MessageStream` owns the `EventChannel` for its request. It can be
consumed in one of these ways:

- raw events: ``async for event in stream``
- text only: ``async for text in stream.text_stream()``
- all text at once: ``await stream.get_final_text()``

Every path records text fragments and the message snapshot as it drains the
channel. Use it as an async context manager (or through
`Messages.stream_with`) to guarantee the connection is released however the
block is left.
"""

from typing import AsyncGenerator, List, Optional

from ..models.events import ContentBlockDeltaEvent, MessageStartEvent, StreamEvent
from ..models.messages import MessageResponse
from .accumulator import MessageAccumulator
from .channel import EventChannel


class MessageStream:
    """A single-use view over one stream of events.

    Attributes:
        text_fragments: Text deltas received so far, in order
    """

    def __init__(self, channel: EventChannel):
        self._channel = channel
        self._accumulator = MessageAccumulator()
        self._start_message: Optional[MessageResponse] = None
        self.text_fragments: List[str] = []

    @property
    def channel(self) -> EventChannel:
        return self._channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    async def __aenter__(self) -> "MessageStream":
        self._channel.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the underlying connection. Idempotent."""
        await self._channel.aclose()

    def _record(self, event: StreamEvent) -> Optional[str]:
        """Update accumulated state; return the text the event carries, if any."""
        self._accumulator.add_event(event)
        if isinstance(event, MessageStartEvent):
            self._start_message = event.message
            return None
        if isinstance(event, ContentBlockDeltaEvent) and event.text is not None:
            self.text_fragments.append(event.text)
            return event.text
        return None

    async def __aiter__(self) -> AsyncGenerator[StreamEvent, None]:
        try:
            async for event in self._channel:
                self._record(event)
                yield event
        finally:
            if not self._channel.closed:
                await self.close()

    async def text_stream(self) -> AsyncGenerator[str, None]:
        """Yield text deltas only; other events are consumed silently.

        Single pass: the channel is drained as this is iterated. Abandoning
        the iteration closes the stream, as with raw iteration.
        """
        try:
            async for event in self._channel:
                text = self._record(event)
                if text is not None:
                    yield text
        finally:
            if not self._channel.closed:
                await self.close()

    async def get_final_text(self) -> str:
        """Drain the rest of the stream and return all text received."""
        async for event in self._channel:
            self._record(event)
        return "".join(self.text_fragments)

    def final_message(self) -> Optional[MessageResponse]:
        """The message announced by `message_start`, updated with what
        followed it. None if no `message_start` has been received."""
        return self._accumulator.message

    @property
    def start_message(self) -> Optional[MessageResponse]:
        """The message exactly as announced by `message_start`."""
        return self._start_message
