"""Public API surface: the client and its Messages resource."""

from .client import AnthropicClient
from .messages import Messages

__all__ = ["AnthropicClient", "Messages"]
