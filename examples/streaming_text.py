"""
Example: Streaming Messages

Shows the ways a streamed response can be consumed: text fragments as they
arrive, raw typed events, the final accumulated message, and a handler run
by `stream_with`. Requires ANTHROPIC_API_KEY (or a .env file).
"""

import asyncio

from claude_messages_sdk import (
    AnthropicClient,
    ContentBlockDeltaEvent,
    Message,
    MessageDeltaEvent,
    MessageStartEvent,
    Tool,
)

MODEL = "claude-sonnet-4-5-20250929"


async def example_text_stream(client: AnthropicClient):
    """Print text as it arrives, then the stop reason and usage."""
    print("=== Text Stream ===\n")

    async with client.messages.stream(
        model=MODEL,
        max_tokens=200,
        messages=[Message.user("Write a haiku about rivers")],
    ) as stream:
        async for text in stream.text_stream():
            print(text, end="", flush=True)
    print()

    message = stream.final_message()
    print(f"\nStop reason: {message.stop_reason}")
    print(f"Usage: {message.usage.input_tokens} in / {message.usage.output_tokens} out")


async def example_raw_events(client: AnthropicClient):
    """Inspect the typed events of a stream."""
    print("\n=== Raw Events ===\n")

    async with client.messages.stream(
        model=MODEL,
        max_tokens=100,
        messages=[Message.user("Count from 1 to 5")],
    ) as stream:
        async for event in stream:
            if isinstance(event, MessageStartEvent):
                print(f"[start] id={event.message.id}")
            elif isinstance(event, ContentBlockDeltaEvent) and event.text:
                print(f"[delta] {event.text!r}")
            elif isinstance(event, MessageDeltaEvent):
                print(f"[stop_reason] {event.stop_reason}")
            else:
                print(f"[{event.type}]")


async def example_stream_with(client: AnthropicClient):
    """Collect the full text with a handler; the stream is closed afterwards."""
    print("\n=== stream_with ===\n")

    async def collect(stream):
        return await stream.get_final_text()

    text = await client.messages.stream_with(
        collect,
        model=MODEL,
        max_tokens=100,
        system="Answer in one sentence.",
        messages=[Message.user("Why is the sky blue?")],
    )
    print(text)


async def example_tool_use(client: AnthropicClient):
    """Stream a tool call and read its assembled input from the final message."""
    print("\n=== Tool Use ===\n")

    weather = Tool.from_dict({
        "name": "get_weather",
        "description": "Get the current weather for a location",
        "input_schema": {
            "type": "object",
            "properties": {"location": {"type": "string", "description": "City name"}},
            "required": ["location"],
        },
    })

    async with client.messages.stream(
        model=MODEL,
        max_tokens=300,
        tools=[weather],
        messages=[Message.user("What's the weather in Lisbon?")],
    ) as stream:
        await stream.get_final_text()

    for tool_use in stream.final_message().tool_uses():
        print(f"{tool_use.name}({tool_use.input})")


async def main():
    async with AnthropicClient() as client:
        await example_text_stream(client)
        await example_raw_events(client)
        await example_stream_with(client)
        await example_tool_use(client)


if __name__ == "__main__":
    asyncio.run(main())
