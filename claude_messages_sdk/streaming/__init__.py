"""Streaming layer for Messages responses.

This layer handles:
- Decoding chunked SSE bytes into lines
- Classifying data lines into typed stream events
- Handing events from the producer task to the consumer
- Text extraction and final-message accumulation
"""

from .accumulator import MessageAccumulator
from .channel import EventChannel
from .decoder import LineDecoder, iter_sse_lines
from .message_stream import MessageStream
from .parser import SSEEventParser, classify_event, decode_event

__all__ = [
    "EventChannel",
    "LineDecoder",
    "MessageAccumulator",
    "MessageStream",
    "SSEEventParser",
    "classify_event",
    "decode_event",
    "iter_sse_lines",
]
