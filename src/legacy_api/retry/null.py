"""Null Object implementation for retry handlers."""

from ..domain.request import RequestSpec
from ..domain.response import Ok, RequestOutcome
from .base import Attempt, BaseRetryHandler


class NullRetryHandler(BaseRetryHandler):
    """Sends once and returns the response as-is, whatever its status."""

    async def execute_with_retry(
        self,
        operation: Attempt,
        spec: RequestSpec,
        url: str,
    ) -> RequestOutcome:
        return Ok(response=await operation(1), attempts=1)
