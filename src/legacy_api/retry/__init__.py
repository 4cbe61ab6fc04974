"""Retry handlers - predicate-driven retry and the single-shot null handler."""

from .base import Attempt, BaseRetryHandler
from .factory import create_retry_handler
from .handler import RetryHandler
from .null import NullRetryHandler

__all__ = [
    "Attempt",
    "BaseRetryHandler",
    "RetryHandler",
    "NullRetryHandler",
    "create_retry_handler",
]
