"""Events emitted by the client while sending a request."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BaseEvent(BaseModel):
    """Base class for all client events."""

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(default="request.base", description="Event type identifier")
    timestamp: datetime = Field(default_factory=datetime.now)


class RequestEvent(BaseEvent):
    """Base class for events about a single logical request."""

    method: str = Field(description="HTTP verb")
    url: str = Field(description="Resolved request URL")


class RequestSentEvent(RequestEvent):
    """Emitted after every attempt that produced a response."""

    event_type: str = Field(default="request.sent")
    attempt: int = Field(ge=1, description="Attempt number (1-indexed)")
    status: int = Field(description="HTTP status of the response")
    elapsed_ms: float = Field(default=0.0, ge=0, description="Round-trip time")


class RequestRetryingEvent(RequestEvent):
    """Emitted when the predicate rejected a response and a retry is scheduled."""

    event_type: str = Field(default="request.retrying")
    attempt: int = Field(ge=1, description="Attempt that was rejected (1-indexed)")
    max_attempts: int = Field(ge=1, description="Total attempt budget")
    status: int = Field(description="Status of the rejected response")
    delay_ms: int = Field(ge=0, description="Pause before the next attempt")


class RequestExhaustedEvent(RequestEvent):
    """Emitted when every attempt was rejected by the predicate."""

    event_type: str = Field(default="request.exhausted")
    attempts: int = Field(ge=1, description="Number of attempts made")
    last_status: int = Field(description="Status of the last real response")
