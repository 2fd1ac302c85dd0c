"""
Error types and error mapping for the Messages SDK.

Parse problems on a single stream line are contained as warnings; HTTP and
connection failures are raised to the caller as `APIError` or
`TransportError`. Nothing in this package retries.
"""

import json
from typing import Mapping, Optional, Union

import httpx


class AnthropicSDKError(Exception):
    """Base exception for every error raised by this package."""


class ConfigurationError(AnthropicSDKError):
    """Raised when the client cannot be configured (e.g. no API key)."""


class APIError(AnthropicSDKError):
    """
    The API answered with an HTTP status >= 400.

    Attributes:
        status_code: HTTP status code of the response
        message: Error message reported by the API
        error_type: Error type identifier (e.g. "rate_limit_error")
        request_id: Value of the `request-id` response header, if any
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str = "unknown_error",
        request_id: Optional[str] = None,
    ):
        super().__init__(f"APIError({status_code}): {error_type} - {message}")
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.request_id = request_id


class TransportError(AnthropicSDKError):
    """Connection-level failure before or during a request."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class UnsupportedMethodError(AnthropicSDKError, ValueError):
    """An HTTP verb the transport does not implement was requested."""

    def __init__(self, method: str):
        super().__init__(f"Unsupported HTTP method: {method}")
        self.method = method


class EventParseWarning(UserWarning):
    """A single stream line could not be turned into an event.

    Raised by the event classifier and caught by the line parser, which logs
    it and moves on to the next line.
    """


class ErrorMapper:
    """Maps HTTP responses and httpx exceptions to SDK errors."""

    FALLBACK_MESSAGE = "Failed to parse error response"
    FALLBACK_TYPE = "unknown_error"
    MISSING_MESSAGE = "Unknown error"

    @staticmethod
    def from_body(
        status_code: int,
        body: Union[bytes, str],
        headers: Optional[Mapping[str, str]] = None,
    ) -> APIError:
        """
        Build an APIError from an error response body.

        The body is expected to look like
        ``{"type": ..., "error": {"type": ..., "message": ...}}``. The nested
        error type is preferred when present. Bodies that are not a JSON
        object produce the fallback message and type with the real status.

        Args:
            status_code: HTTP status of the response
            body: Raw response body
            headers: Response headers, used for the request id

        Returns:
            APIError describing the failure
        """
        request_id = headers.get("request-id") if headers is not None else None

        try:
            data = json.loads(body)
        except (TypeError, ValueError):
            data = None

        if not isinstance(data, dict):
            return APIError(
                status_code,
                ErrorMapper.FALLBACK_MESSAGE,
                ErrorMapper.FALLBACK_TYPE,
                request_id=request_id,
            )

        error = data.get("error")
        if not isinstance(error, dict):
            error = {}

        error_type = error.get("type") or data.get("type") or ErrorMapper.FALLBACK_TYPE
        message = error.get("message") or ErrorMapper.MISSING_MESSAGE

        return APIError(status_code, str(message), str(error_type), request_id=request_id)

    @staticmethod
    def from_response(response: httpx.Response) -> APIError:
        """Build an APIError from an httpx response whose body has been read."""
        return ErrorMapper.from_body(response.status_code, response.content, response.headers)

    @staticmethod
    def from_transport_error(error: httpx.HTTPError) -> TransportError:
        """Wrap an httpx exception raised while talking to the API."""
        detail = str(error) or type(error).__name__
        return TransportError(f"Transport error: {detail}", original_error=error)

    @staticmethod
    def describe(error: BaseException) -> dict:
        """Summarize an error for structured logging."""
        summary: dict = {"error_type": type(error).__name__}
        if isinstance(error, APIError):
            summary["status_code"] = error.status_code
            summary["api_error_type"] = error.error_type
            if error.request_id:
                summary["request_id"] = error.request_id
        elif isinstance(error, TransportError) and error.original_error is not None:
            summary["cause"] = type(error.original_error).__name__
        return summary

