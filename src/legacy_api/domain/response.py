"""Response and request-outcome models."""

import json
import typing as t
from dataclasses import dataclass, field

from multidict import CIMultiDict

from .constants import RETRIES_EXHAUSTED_BODY, RETRIES_EXHAUSTED_STATUS


@dataclass(frozen=True)
class ApiResponse:
    """Read-only view of one HTTP response.

    ``synthetic`` is True only for responses fabricated by the client itself
    (the retries-exhausted sentinel), never for anything the server sent.
    """

    status: int
    body: bytes = b""
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)
    url: str = ""
    synthetic: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> t.Any:
        """Decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        return json.loads(self.body)

    @classmethod
    def retries_exhausted(cls) -> "ApiResponse":
        """Build the sentinel returned when every attempt was rejected."""
        return cls(
            status=RETRIES_EXHAUSTED_STATUS,
            body=RETRIES_EXHAUSTED_BODY.encode(),
            synthetic=True,
        )


@dataclass(frozen=True)
class Ok:
    """The retry predicate accepted a real upstream response."""

    response: ApiResponse
    attempts: int = 1


@dataclass(frozen=True)
class RetriesExhausted:
    """Every attempt was rejected by the retry predicate.

    Keeps the last real upstream response so callers can inspect what the
    server actually said; ``response`` is the legacy sentinel.
    """

    last_response: ApiResponse
    attempts: int

    @property
    def response(self) -> ApiResponse:
        return ApiResponse.retries_exhausted()


RequestOutcome = Ok | RetriesExhausted
