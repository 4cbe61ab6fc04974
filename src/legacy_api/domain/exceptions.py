"""Custom exceptions for the legacy API client.

Transport failures (aiohttp.ClientError, timeouts) are deliberately absent:
they propagate to the caller unwrapped.
"""


class LegacyApiError(Exception):
    """Base exception for legacy API client errors."""

    pass


class ValidationError(LegacyApiError):
    """Raised when request input does not satisfy its schema.

    Carries a field -> messages map so callers can report every offending
    field at once, not just the first one.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Validation failed - {details}")


class ClientNotInitialisedError(LegacyApiError):
    """Raised when a transport is used before its session is opened."""

    pass


class NotAuthenticatedError(LegacyApiError):
    """Raised when no access token is available for the current session."""

    pass


class RequestDeadlineExceededError(LegacyApiError):
    """Raised when the caller-supplied deadline expires mid-request.

    Covers the in-flight attempt and any pending retry sleep.
    """

    def __init__(self, url: str, deadline: float) -> None:
        self.url = url
        self.deadline = deadline
        super().__init__(f"Deadline of {deadline:.3f}s exceeded for {url}")


class RetryError(LegacyApiError):
    """Raised when retry logic encounters an unexpected state.

    Indicates a programming error in a retry handler, such as finishing the
    attempt loop without a response.
    """

    pass
