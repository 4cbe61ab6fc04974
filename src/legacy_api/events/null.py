"""Emitter used when nobody observes the client."""

from .base import BaseEmitter, EventHandler
from .models import BaseEvent


class NullEmitter(BaseEmitter):
    """Accepts subscriptions and drops every event."""

    def on(self, event_type: str, handler: EventHandler) -> None:
        pass

    def off(self, event_type: str, handler: EventHandler) -> None:
        pass

    async def emit(self, event_type: str, event: BaseEvent) -> None:
        pass
