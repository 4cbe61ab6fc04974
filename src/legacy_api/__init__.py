"""legacy_api - async client for the legacy API with predicate-driven retry."""

from .app import App, create_app
from .auth import BaseTokenProvider, CallableTokenProvider, StaticTokenProvider
from .client import LegacyApiClient
from .config import Settings
from .domain import (
    NO_RETRY,
    ApiResponse,
    FileAttachment,
    HttpMethod,
    LegacyApiError,
    NoRetry,
    Ok,
    RequestDeadlineExceededError,
    RequestOutcome,
    RequestSpec,
    RetriesExhausted,
    RetryUntil,
    ValidationError,
    accept_success,
    accept_unless_status,
    accept_unless_transient,
)
from .infrastructure.http import AiohttpTransport, BaseTransport
from .services import BaseService

__all__ = [
    # App
    "App",
    "create_app",
    "Settings",
    # Client
    "LegacyApiClient",
    "BaseService",
    "AiohttpTransport",
    "BaseTransport",
    "BaseTokenProvider",
    "StaticTokenProvider",
    "CallableTokenProvider",
    # Requests and responses
    "HttpMethod",
    "RequestSpec",
    "FileAttachment",
    "ApiResponse",
    "Ok",
    "RetriesExhausted",
    "RequestOutcome",
    # Retry
    "NO_RETRY",
    "NoRetry",
    "RetryUntil",
    "accept_success",
    "accept_unless_status",
    "accept_unless_transient",
    # Errors
    "LegacyApiError",
    "ValidationError",
    "RequestDeadlineExceededError",
]
