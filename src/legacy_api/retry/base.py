"""Base interface for retry handlers."""

import typing as t
from abc import ABC, abstractmethod

from ..domain.request import RequestSpec
from ..domain.response import ApiResponse, RequestOutcome

# Sends attempt number ``n`` (1-indexed) and returns its response.
Attempt = t.Callable[[int], t.Awaitable[ApiResponse]]


class BaseRetryHandler(ABC):
    """Abstract base class for retry handlers.

    Defines the contract shared by the predicate-driven handler and the
    single-shot null handler so the client can use either interchangeably.
    """

    @abstractmethod
    async def execute_with_retry(
        self,
        operation: Attempt,
        spec: RequestSpec,
        url: str,
    ) -> RequestOutcome:
        """Run ``operation`` until its response is accepted or attempts run out.

        Args:
            operation: Async callable performing one attempt
            spec: The validated request, passed to the retry predicate
            url: Resolved URL, for logging and events

        Returns:
            Ok with the accepted response, or RetriesExhausted.

        Raises:
            Exception: Whatever the operation raises propagates unchanged.
        """
        pass
