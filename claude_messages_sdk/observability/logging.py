"""
Structured logging utility for the Messages SDK.

Every component logs through an `SDKLogger`, which prefixes messages with
key=value fields (component, model, request_id, ...) so that log lines from
concurrent requests and streams can be told apart. Fields set to None are
left out.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from ..errors import ErrorMapper


class SDKLogger:
    """Structured logger for one SDK component (e.g. "messages", "streaming")."""

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(f"claude_messages_sdk.{component}")

    def _format_message(self, message: str, fields: Dict[str, Any]) -> str:
        rendered = " ".join(f"{key}={value}" for key, value in fields.items() if value is not None)
        prefix = f"component={self.component}"
        return f"[{prefix} {rendered}] {message}" if rendered else f"[{prefix}] {message}"

    def log(self, level: int, message: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self._format_message(message, fields))

    def debug(self, message: str, **fields: Any) -> None:
        self.log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log(logging.WARNING, message, **fields)

    def error(self, message: str, error: Optional[BaseException] = None, **fields: Any) -> None:
        """Log at ERROR; `error` adds its `ErrorMapper.describe` summary and text."""
        if error is not None:
            fields.update(ErrorMapper.describe(error))
            fields["error_msg"] = str(error)
        self.log(logging.ERROR, message, **fields)

    @contextmanager
    def track_request(self, method: str, model: str, request_id: Optional[str] = None) -> Iterator[Dict[str, Any]]:
        """
        Log the start (DEBUG), completion (INFO) and failure (ERROR) of a call.

        Yields a dict carrying `request_id` (generated when not given), `model`
        and `method`. Exceptions are logged and re-raised.
        """
        request = {
            "request_id": request_id or str(uuid.uuid4())[:8],
            "model": model,
            "method": method,
        }
        started = time.perf_counter()
        self.debug(f"Starting {method} request", **request)

        def elapsed_ms() -> int:
            return int((time.perf_counter() - started) * 1000)

        try:
            yield request
        except Exception as e:
            self.error(f"Failed {method} request", error=e, duration_ms=elapsed_ms(), **request)
            raise
        self.info(f"Completed {method} request", duration_ms=elapsed_ms(), **request)

    def log_usage(self, usage: Any, model: str, request_id: str) -> None:
        """Log token usage from a `Usage` model or a plain usage dict."""
        if hasattr(usage, "model_dump"):
            usage = usage.model_dump()
        counts = {key: int((usage or {}).get(key) or 0) for key in (
            "input_tokens", "output_tokens", "cache_read_input_tokens", "cache_creation_input_tokens",
        )}

        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            input_tokens=counts["input_tokens"],
            output_tokens=counts["output_tokens"],
            total_tokens=counts["input_tokens"] + counts["output_tokens"],
            cache_read_tokens=counts["cache_read_input_tokens"] or None,
            cache_creation_tokens=counts["cache_creation_input_tokens"] or None,
        )

    def log_streaming_metrics(self, events: int, skipped_lines: int, duration: float,
                              model: str, request_id: str, outcome: str = "completed") -> None:
        """Log per-stream counters once the producer stops."""
        self.info(
            "Streaming metrics",
            model=model,
            request_id=request_id,
            outcome=outcome,
            events=events,
            skipped_lines=skipped_lines or None,
            duration_ms=int(duration * 1000),
            events_per_second=int(events / duration) if duration > 0 else 0,
        )
