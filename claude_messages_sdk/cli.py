"""CLI entry point for the Claude Messages SDK."""

import argparse
import asyncio
import sys
from typing import List, Optional

from .api.client import AnthropicClient
from .config.constants import DEFAULT_MAX_TOKENS
from .errors import AnthropicSDKError
from .models.messages import Message


async def create_message(model: str, prompt: str, max_tokens: int = DEFAULT_MAX_TOKENS,
                         system: Optional[str] = None, temperature: Optional[float] = None,
                         stream: bool = False):
    """Send a single-turn prompt and print the reply."""
    async with AnthropicClient() as client:
        params = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [Message.user(prompt)],
            "system": system,
            "temperature": temperature,
        }

        if stream:
            async with client.messages.stream(**params) as message_stream:
                async for text in message_stream.text_stream():
                    print(text, end="", flush=True)
            print()  # New line at the end
            message = message_stream.final_message()
        else:
            message = await client.messages.create(**params)
            print(message.get_text())

        if message is not None:
            print(f"\nStop reason: {message.stop_reason}")
            print(f"Tokens used: {message.usage.input_tokens} in / {message.usage.output_tokens} out")


async def count_tokens(model: str, prompt: str, system: Optional[str] = None):
    """Print the input token count of a single-turn prompt."""
    async with AnthropicClient() as client:
        result = await client.messages.count_tokens(
            model=model,
            messages=[Message.user(prompt)],
            system=system,
        )
        print(f"Input tokens: {result.input_tokens}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="claude-messages", description="Claude Messages SDK CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Create command
    create_parser = subparsers.add_parser("create", help="Create a message")
    create_parser.add_argument("model", help='Model identifier (e.g., "claude-sonnet-4-5-20250929")')
    create_parser.add_argument("prompt", help="User prompt")
    create_parser.add_argument("--max-tokens", type=int, default=DEFAULT_MAX_TOKENS,
                               help="Maximum tokens to generate")
    create_parser.add_argument("--system", help="System prompt")
    create_parser.add_argument("--temperature", type=float, help="Sampling temperature")
    create_parser.add_argument("--stream", action="store_true", help="Stream the response")

    # Count tokens command
    count_parser = subparsers.add_parser("count-tokens", help="Count input tokens for a prompt")
    count_parser.add_argument("model", help="Model identifier")
    count_parser.add_argument("prompt", help="User prompt")
    count_parser.add_argument("--system", help="System prompt")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "create":
            asyncio.run(create_message(
                args.model,
                args.prompt,
                args.max_tokens,
                args.system,
                args.temperature,
                args.stream,
            ))
        elif args.command == "count-tokens":
            asyncio.run(count_tokens(args.model, args.prompt, args.system))
        else:
            parser.print_help()
    except AnthropicSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
