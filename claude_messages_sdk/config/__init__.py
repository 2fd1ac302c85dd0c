"""Configuration module for the Messages SDK."""

from .constants import *
from .settings import ClientSettings

__all__ = [
    "ClientSettings",
    "BASE_URL",
    "DEFAULT_API_VERSION",
    "MESSAGES_ENDPOINT",
    "COUNT_TOKENS_ENDPOINT",
    "STREAM_BUFFER_SIZE",
]
