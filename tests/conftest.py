"""Shared pytest fixtures for Claude Messages SDK tests."""

import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Make `tests.helpers` importable however pytest is invoked
sys.path.insert(0, str(Path(__file__).parent.parent))

from claude_messages_sdk import AnthropicClient, ClientSettings
from tests.helpers.sse_streams import (
    MODEL,
    MockAPI,
    RecordingByteStream,
    json_response,
    sse_body,
    stream_response,
    text_message_events,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: end-to-end tests against an in-process fake API")


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {"ANTHROPIC_API_KEY": "test-anthropic-key"}
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("ANTHROPIC_BASE_URL", raising=False)
    return env_vars


@pytest.fixture
def no_env_key(monkeypatch):
    """Remove the API key from the environment and disable .env loading."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_BASE_URL", raising=False)
    monkeypatch.setattr("claude_messages_sdk.config.settings.load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def settings():
    return ClientSettings(api_key="test-key", base_url="https://api.test")


@pytest.fixture
def make_client(settings) -> Callable[[MockAPI], AnthropicClient]:
    """Factory for clients whose requests are answered by a `MockAPI`."""
    def factory(api: MockAPI, **overrides) -> AnthropicClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(api))
        client_settings = settings.model_copy(update=overrides) if overrides else settings
        return AnthropicClient(settings=client_settings, http_client=http_client)
    return factory


@pytest.fixture
def sample_message_json():
    """A complete non-streaming response body."""
    return {
        "id": "msg_013Zva2CMHLNnXjNJJKqJ2EF",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": "Hi! My name is Claude."}],
        "model": MODEL,
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 10, "output_tokens": 25},
    }


@pytest.fixture
def hello_stream() -> RecordingByteStream:
    """'Hello, world' streamed as two text deltas, delivered 7 bytes at a time."""
    body = sse_body(text_message_events(["Hello", ", world"]))
    return RecordingByteStream([body[i:i + 7] for i in range(0, len(body), 7)])


@pytest.fixture
def hello_api(hello_stream) -> MockAPI:
    return MockAPI(stream_response(hello_stream, headers={"request-id": "req_stream"}))


@pytest.fixture
def message_api(sample_message_json) -> MockAPI:
    return MockAPI(json_response(sample_message_json, headers={"request-id": "req_create"}))
