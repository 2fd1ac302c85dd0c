"""
Bounded hand-off between a stream producer task and its consumer.

The producer is an `asyncio.Task` that drains an async generator of events
(which owns the HTTP response) into a bounded `asyncio.Queue`. It suspends
whenever the consumer has not yet taken what was already handed over, so it
never reads far ahead of the consumer.

Whatever ends the stream (source exhausted, ``[DONE]``, a transport error,
or the consumer calling `aclose()`), the source generator is closed before
the consumer observes the end, which releases the HTTP response.
"""

import asyncio
from contextlib import suppress
from typing import AsyncGenerator, Optional

from ..config.constants import STREAM_BUFFER_SIZE
from ..models.events import StreamEvent


_END = object()


class _Failure:
    """Terminal item carrying the error that stopped the producer."""

    __slots__ = ("error",)

    def __init__(self, error: BaseException):
        self.error = error


class EventChannel:
    """Single-producer, single-consumer event conduit.

    Iterate it with ``async for``; iteration ends when the stream ends and
    re-raises the error that stopped the producer, if any. Not restartable:
    once the end has been observed every further read ends immediately.
    """

    def __init__(self, source: AsyncGenerator[StreamEvent, None], maxsize: int = STREAM_BUFFER_SIZE):
        if maxsize < 1:
            raise ValueError("EventChannel requires a bounded buffer of at least one event")
        self._source = source
        self._queue: "asyncio.Queue" = asyncio.Queue(maxsize=maxsize)
        self._task: Optional[asyncio.Task] = None
        self._closed = False
        self._finished = False

    @property
    def started(self) -> bool:
        return self._task is not None

    @property
    def closed(self) -> bool:
        """True once the end of the stream has been observed or `aclose()` was called."""
        return self._closed or self._finished

    def start(self) -> None:
        """Start the producer task. Requires a running event loop; idempotent."""
        if self._task is None and not self.closed:
            self._task = asyncio.get_running_loop().create_task(self._produce())

    async def _produce(self) -> None:
        terminal: object = _END
        try:
            async for event in self._source:
                await self._queue.put(event)
        except Exception as e:
            terminal = _Failure(e)
        finally:
            await self._source.aclose()
        await self._queue.put(terminal)

    def __aiter__(self) -> "EventChannel":
        return self

    async def __anext__(self) -> StreamEvent:
        if self.closed:
            raise StopAsyncIteration
        self.start()

        item = await self._queue.get()
        if item is _END or isinstance(item, _Failure):
            self._finished = True
            # leave the end marker in place for any other waiter
            self._queue.put_nowait(_END)
            if isinstance(item, _Failure):
                raise item.error
            raise StopAsyncIteration
        return item

    async def receive(self) -> Optional[StreamEvent]:
        """Return the next event, or None at the end of the stream."""
        try:
            return await self.__anext__()
        except StopAsyncIteration:
            return None

    async def aclose(self) -> None:
        """Stop the producer and release the source. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True

        task = self._task
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        # no-op if the producer already closed it
        await self._source.aclose()

        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_END)
