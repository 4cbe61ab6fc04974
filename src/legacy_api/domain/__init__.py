"""Domain layer - request/response models, retry policies and exceptions."""

from .exceptions import (
    ClientNotInitialisedError,
    LegacyApiError,
    NotAuthenticatedError,
    RequestDeadlineExceededError,
    RetryError,
    ValidationError,
)
from .predicates import (
    TRANSIENT_STATUS_CODES,
    accept_success,
    accept_unless_status,
    accept_unless_transient,
)
from .request import FileAttachment, FilePart, HttpMethod, PreparedRequest, RequestSpec
from .response import ApiResponse, Ok, RequestOutcome, RetriesExhausted
from .retry import NO_RETRY, NoRetry, RetryPolicy, RetryPredicate, RetryUntil

__all__ = [
    # Request Models
    "HttpMethod",
    "FileAttachment",
    "FilePart",
    "RequestSpec",
    "PreparedRequest",
    # Response Models
    "ApiResponse",
    "Ok",
    "RetriesExhausted",
    "RequestOutcome",
    # Retry
    "NO_RETRY",
    "NoRetry",
    "RetryUntil",
    "RetryPolicy",
    "RetryPredicate",
    "TRANSIENT_STATUS_CODES",
    "accept_success",
    "accept_unless_status",
    "accept_unless_transient",
    # Exceptions
    "LegacyApiError",
    "ValidationError",
    "ClientNotInitialisedError",
    "NotAuthenticatedError",
    "RequestDeadlineExceededError",
    "RetryError",
]
