"""Retry policy models.

A policy is a sum type: either the request is sent once (``NoRetry``) or it
is re-sent until a caller-supplied predicate accepts the response
(``RetryUntil``). There is no way to ask for retries without saying what
counts as success.
"""

import typing as t
from dataclasses import dataclass

from .constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_MILLISECONDS
from .request import RequestSpec
from .response import ApiResponse

# True accepts the response (stop), False asks for another attempt.
RetryPredicate = t.Callable[[ApiResponse, RequestSpec], bool]


@dataclass(frozen=True)
class NoRetry:
    """Send the request exactly once and return whatever comes back."""


@dataclass(frozen=True)
class RetryUntil:
    """Re-send the request until ``predicate`` accepts a response.

    Attributes:
        predicate: Decides whether a response is acceptable
        max_attempts: Total attempt budget, including the first call
        delay_ms: Fixed pause between consecutive attempts
        resend_files: Whether retries re-upload the file attachments
    """

    predicate: RetryPredicate
    max_attempts: int = DEFAULT_MAX_RETRIES
    delay_ms: int = DEFAULT_RETRY_DELAY_MILLISECONDS
    resend_files: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {self.delay_ms}")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


RetryPolicy = NoRetry | RetryUntil

NO_RETRY = NoRetry()
