"""Retry handler driven by a caller-supplied acceptance predicate."""

import asyncio
import typing as t

from ..domain.exceptions import RetryError
from ..domain.request import RequestSpec
from ..domain.response import ApiResponse, Ok, RequestOutcome, RetriesExhausted
from ..domain.retry import RetryUntil
from ..events import (
    BaseEmitter,
    NullEmitter,
    RequestExhaustedEvent,
    RequestRetryingEvent,
)
from ..infrastructure.logging import get_logger
from .base import Attempt, BaseRetryHandler

if t.TYPE_CHECKING:
    import loguru


class RetryHandler(BaseRetryHandler):
    """Re-sends a request with a fixed delay until the predicate accepts it.

    The handler never looks at status codes itself: a 500 the predicate
    accepts is returned, a 200 it rejects is retried.
    """

    def __init__(
        self,
        policy: RetryUntil,
        logger: "loguru.Logger" = get_logger(__name__),
        emitter: BaseEmitter | None = None,
    ) -> None:
        """
        Initialise retry handler.

        Args:
            policy: Predicate, attempt budget and delay to apply
            logger: Logger for recording retry decisions
            emitter: Event emitter for retry events. If None, events are dropped.
        """
        self.policy = policy
        self.logger = logger
        self.emitter = emitter if emitter is not None else NullEmitter()

    async def execute_with_retry(
        self,
        operation: Attempt,
        spec: RequestSpec,
        url: str,
    ) -> RequestOutcome:
        max_attempts = self.policy.max_attempts
        response: ApiResponse | None = None

        for attempt in range(1, max_attempts + 1):
            response = await operation(attempt)

            if self.policy.predicate(response, spec):
                if attempt > 1:
                    self.logger.info(
                        f"Response accepted on attempt {attempt}/{max_attempts}: {url}"
                    )
                return Ok(response=response, attempts=attempt)

            if attempt >= max_attempts:
                break

            await self.emitter.emit(
                "request.retrying",
                RequestRetryingEvent(
                    method=spec.method.value,
                    url=url,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    status=response.status,
                    delay_ms=self.policy.delay_ms,
                ),
            )
            self.logger.warning(
                f"Retrying request (attempt {attempt + 1}/{max_attempts}) "
                f"in {self.policy.delay_ms}ms after HTTP {response.status}: "
                f"{spec.method.value} {url}"
            )

            await asyncio.sleep(self.policy.delay_seconds)

        if response is None:
            # max_attempts >= 1 is enforced by RetryUntil
            raise RetryError("Retry loop completed without a response")

        self.logger.error(
            f"All {max_attempts} attempts rejected, last HTTP {response.status}: "
            f"{spec.method.value} {url}"
        )
        await self.emitter.emit(
            "request.exhausted",
            RequestExhaustedEvent(
                method=spec.method.value,
                url=url,
                attempts=max_attempts,
                last_status=response.status,
            ),
        )
        return RetriesExhausted(last_response=response, attempts=max_attempts)
