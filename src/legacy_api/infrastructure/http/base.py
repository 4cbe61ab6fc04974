"""Base interface for HTTP transports."""

import typing as t
from abc import ABC, abstractmethod

from ...domain.request import PreparedRequest
from ...domain.response import ApiResponse


class BaseTransport(ABC):
    """Performs exactly one HTTP call per ``send``.

    Transports never retry and never raise on HTTP error statuses; network
    failures (connection refused, DNS, timeouts) propagate to the caller.
    """

    @abstractmethod
    async def send(self, request: PreparedRequest) -> ApiResponse:
        """Send ``request`` and return the full response."""
        pass

    async def open(self) -> None:
        """Acquire any resources needed before sending. Idempotent."""

    async def close(self) -> None:
        """Release resources acquired by ``open``. Idempotent."""

    async def __aenter__(self) -> t.Self:
        await self.open()
        return self

    async def __aexit__(self, *args: t.Any) -> None:
        await self.close()
