"""Observability helpers: structured logging for SDK components."""

from .logging import SDKLogger

__all__ = ["SDKLogger"]
