"""Retry handler selection from a retry policy."""

import typing as t

from ..domain.retry import NoRetry, RetryPolicy, RetryUntil
from ..events import BaseEmitter
from ..infrastructure.logging import get_logger
from .base import BaseRetryHandler
from .handler import RetryHandler
from .null import NullRetryHandler

if t.TYPE_CHECKING:
    import loguru


def create_retry_handler(
    policy: RetryPolicy,
    logger: "loguru.Logger" = get_logger(__name__),
    emitter: BaseEmitter | None = None,
) -> BaseRetryHandler:
    """Return the handler that implements ``policy``."""
    match policy:
        case RetryUntil():
            return RetryHandler(policy, logger=logger, emitter=emitter)
        case NoRetry():
            return NullRetryHandler()
        case _:
            raise TypeError(f"Unsupported retry policy: {policy!r}")
