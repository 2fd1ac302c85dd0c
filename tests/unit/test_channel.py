"""Unit tests for the producer/consumer event channel."""

import asyncio

import pytest

from claude_messages_sdk.models.events import PingEvent, UnknownEvent
from claude_messages_sdk.streaming.channel import EventChannel


class SourceProbe:
    """Async event source that records how far it ran and whether it was closed."""

    def __init__(self, count=3, error=None, block_after=None):
        self.count = count
        self.error = error
        self.block_after = block_after
        self.produced = 0
        self.closed = False
        self.gate = asyncio.Event()

    async def events(self):
        try:
            for i in range(self.count):
                if self.block_after is not None and i >= self.block_after:
                    await self.gate.wait()
                self.produced += 1
                yield UnknownEvent(type=f"event_{i}", raw={"n": i})
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


async def _settle():
    for _ in range(5):
        await asyncio.sleep(0)


class TestEventChannel:
    """Test ordering, backpressure and shutdown of the channel."""

    @pytest.mark.asyncio
    async def test_events_arrive_in_order(self):
        probe = SourceProbe(count=5)
        channel = EventChannel(probe.events())

        received = [event.raw["n"] async for event in channel]

        assert received == [0, 1, 2, 3, 4]
        assert channel.closed
        assert probe.closed

    @pytest.mark.asyncio
    async def test_producer_does_not_run_ahead_of_consumer(self):
        probe = SourceProbe(count=10)
        channel = EventChannel(probe.events(), maxsize=1)

        first = await channel.receive()
        await _settle()

        assert first.raw["n"] == 0
        # one event in the queue and one waiting to be put
        assert probe.produced <= 3
        await channel.aclose()

    @pytest.mark.asyncio
    async def test_nothing_runs_before_first_read(self):
        probe = SourceProbe()
        channel = EventChannel(probe.events())
        await _settle()

        assert not channel.started
        assert probe.produced == 0
        await channel.aclose()

    @pytest.mark.asyncio
    async def test_aclose_before_start_closes_source(self):
        source = SourceProbe().events()
        channel = EventChannel(source)

        await channel.aclose()

        assert channel.closed
        assert not channel.started
        assert await channel.receive() is None
        with pytest.raises(StopAsyncIteration):
            await source.__anext__()

    @pytest.mark.asyncio
    async def test_aclose_mid_stream_cancels_and_releases_source(self):
        probe = SourceProbe(count=5, block_after=1)
        channel = EventChannel(probe.events())

        await channel.receive()
        await _settle()
        await channel.aclose()

        assert probe.closed
        assert probe.produced == 1
        assert channel.closed
        assert channel._task.done()

    @pytest.mark.asyncio
    async def test_aclose_is_idempotent(self):
        probe = SourceProbe(count=5, block_after=1)
        channel = EventChannel(probe.events())
        await channel.receive()

        await channel.aclose()
        await channel.aclose()
        await channel.aclose()

        assert probe.closed
        assert await channel.receive() is None

    @pytest.mark.asyncio
    async def test_end_is_observed_repeatedly(self):
        channel = EventChannel(SourceProbe(count=1).events())

        assert isinstance(await channel.receive(), UnknownEvent)
        assert await channel.receive() is None
        assert await channel.receive() is None

    @pytest.mark.asyncio
    async def test_source_error_surfaces_after_buffered_events(self):
        probe = SourceProbe(count=2, error=RuntimeError("connection reset"))
        channel = EventChannel(probe.events())
        received = []

        with pytest.raises(RuntimeError, match="connection reset"):
            async for event in channel:
                received.append(event.raw["n"])

        assert received == [0, 1]
        assert probe.closed
        assert channel.closed

    @pytest.mark.asyncio
    async def test_error_is_raised_once(self):
        channel = EventChannel(SourceProbe(count=0, error=ValueError("bad")).events())

        with pytest.raises(ValueError):
            await channel.receive()
        assert await channel.receive() is None

    @pytest.mark.asyncio
    async def test_larger_buffer(self):
        probe = SourceProbe(count=4)
        channel = EventChannel(probe.events(), maxsize=8)
        channel.start()
        await _settle()

        assert probe.produced == 4
        assert [event.raw["n"] async for event in channel] == [0, 1, 2, 3]

    def test_unbounded_buffer_rejected(self):
        async def source():
            yield PingEvent()

        gen = source()
        with pytest.raises(ValueError):
            EventChannel(gen, maxsize=0)
