"""Event infrastructure - emitters and event models."""

from .base import BaseEmitter, EventHandler
from .emitter import EventEmitter
from .models import (
    BaseEvent,
    RequestEvent,
    RequestExhaustedEvent,
    RequestRetryingEvent,
    RequestSentEvent,
)
from .null import NullEmitter

__all__ = [
    # Base and implementations
    "BaseEmitter",
    "EventHandler",
    "EventEmitter",
    "NullEmitter",
    # Events
    "BaseEvent",
    "RequestEvent",
    "RequestSentEvent",
    "RequestRetryingEvent",
    "RequestExhaustedEvent",
]
