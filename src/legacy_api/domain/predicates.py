"""Ready-made retry predicates.

Each returns True when the response is acceptable and False when another
attempt should be made.
"""

import typing as t

from .request import RequestSpec
from .response import ApiResponse
from .retry import RetryPredicate

TRANSIENT_STATUS_CODES = frozenset(
    {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    }
)


def accept_success(response: ApiResponse, spec: RequestSpec) -> bool:
    """Accept any 2xx response."""
    return response.ok


def accept_unless_status(status_codes: t.Iterable[int]) -> RetryPredicate:
    """Build a predicate that retries only on the given status codes."""
    rejected = frozenset(status_codes)

    def predicate(response: ApiResponse, spec: RequestSpec) -> bool:
        return response.status not in rejected

    return predicate


accept_unless_transient = accept_unless_status(TRANSIENT_STATUS_CODES)
