"""Messages API resource: create, stream and count_tokens."""

import inspect
import time
import uuid
from contextlib import aclosing
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, List, Optional, TypeVar, Union

from ..config.constants import COUNT_TOKENS_ENDPOINT, MESSAGES_ENDPOINT, STREAM_BUFFER_SIZE
from ..http.transport import HTTPTransport
from ..models.events import StreamEvent
from ..models.messages import CountTokensResponse, MessageResponse
from ..models.params import CountTokensParams, MessageCreateParams, MessageParam, ToolParam
from ..observability.logging import SDKLogger
from ..streaming.channel import EventChannel
from ..streaming.decoder import iter_sse_lines
from ..streaming.message_stream import MessageStream
from ..streaming.parser import SSEEventParser


logger = SDKLogger("messages")

T = TypeVar("T")


class Messages:
    """Interface for the Messages API, usually reached as `client.messages`."""

    def __init__(self, transport: HTTPTransport, stream_buffer_size: int = STREAM_BUFFER_SIZE):
        self._transport = transport
        self._stream_buffer_size = stream_buffer_size

    async def create(
        self,
        *,
        model: str,
        messages: List[MessageParam],
        max_tokens: int,
        system: Optional[Union[str, List[Dict[str, Any]]]] = None,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        stop_sequences: Optional[List[str]] = None,
        tools: Optional[List[ToolParam]] = None,
        tool_choice: Optional[Dict[str, Any]] = None,
        stream: bool = False,
    ) -> Union[MessageResponse, MessageStream]:
        """Create a message.

        Args:
            model: Model identifier
            messages: Conversation turns (`Message` objects or dicts)
            max_tokens: Maximum tokens to generate
            system: System prompt
            temperature: Sampling temperature
            top_p: Nucleus sampling threshold
            top_k: Top-k sampling parameter
            metadata: Request metadata
            stop_sequences: Custom stop sequences
            tools: Tool definitions (`Tool` objects or dicts)
            tool_choice: Tool selection strategy
            stream: Return a `MessageStream` instead of waiting for the
                complete message

        Returns:
            MessageResponse, or a MessageStream when `stream` is True

        Raises:
            APIError: If the API returns an error status
            TransportError: If the request cannot be sent
        """
        params = MessageCreateParams(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            system=system,
            temperature=temperature,
            top_p=top_p,
            top_k=top_k,
            metadata=metadata,
            stop_sequences=stop_sequences,
            tools=tools,
            tool_choice=tool_choice,
        )
        if stream:
            return self._open_stream(params)

        with logger.track_request("create", model) as request:
            response = await self._transport.request("POST", MESSAGES_ENDPOINT, params.to_body())
            message = MessageResponse.model_validate_json(response.content)
            logger.log_usage(message.usage, model, request["request_id"])
        return message

    def stream(self, **params: Any) -> MessageStream:
        """Start a streaming request.

        Takes the same keyword arguments as `create`. Nothing is sent until
        the returned stream is entered or iterated.
        """
        params.pop("stream", None)
        return self._open_stream(MessageCreateParams(**params))

    async def stream_with(self, handler: Callable[[MessageStream], Union[T, Awaitable[T]]], **params: Any) -> T:
        """Run `handler` on a stream and close the stream afterwards.

        `handler` may be a plain function or a coroutine function. The
        connection is released whether it returns, returns early or raises.
        """
        async with self.stream(**params) as message_stream:
            result = handler(message_stream)
            if inspect.isawaitable(result):
                result = await result
            return result

    async def count_tokens(
        self,
        *,
        model: str,
        messages: List[MessageParam],
        system: Optional[Union[str, List[Dict[str, Any]]]] = None,
        tools: Optional[List[ToolParam]] = None,
    ) -> CountTokensResponse:
        """Count the input tokens of a request without generating anything."""
        params = CountTokensParams(model=model, messages=messages, system=system, tools=tools)

        with logger.track_request("count_tokens", model):
            response = await self._transport.request("POST", COUNT_TOKENS_ENDPOINT, params.to_body())
            return CountTokensResponse.model_validate_json(response.content)

    def _open_stream(self, params: MessageCreateParams) -> MessageStream:
        source = self._stream_events(params.to_body(stream=True), params.model)
        return MessageStream(EventChannel(source, maxsize=self._stream_buffer_size))

    async def _stream_events(self, body: Dict[str, Any], model: str) -> AsyncGenerator[StreamEvent, None]:
        """Producer side of a stream: request, decode lines, classify events."""
        request_id = str(uuid.uuid4())[:8]
        parser = SSEEventParser(request_id=request_id)
        start_time = time.time()
        outcome = "cancelled"

        logger.debug("Starting stream request", model=model, request_id=request_id)
        try:
            async with self._transport.stream("POST", MESSAGES_ENDPOINT, body) as response, \
                    aclosing(iter_sse_lines(self._transport.aiter_bytes(response))) as lines:
                async for line in lines:
                    event = parser.parse_line(line)
                    if parser.done:
                        break
                    if event is not None:
                        yield event
            outcome = "completed"
        except Exception as e:
            outcome = "failed"
            logger.error("Stream failed", model=model, request_id=request_id, error=e)
            raise
        finally:
            logger.log_streaming_metrics(
                events=parser.events,
                skipped_lines=parser.skipped,
                duration=time.time() - start_time,
                model=model,
                request_id=request_id,
                outcome=outcome,
            )
