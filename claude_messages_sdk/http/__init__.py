"""HTTP transport layer."""

from .transport import HTTPTransport, build_headers

__all__ = ["HTTPTransport", "build_headers"]
