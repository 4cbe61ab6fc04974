"""In-process event emitter."""

import inspect
import typing as t
from collections import defaultdict

from ..infrastructure.logging import get_logger
from .base import BaseEmitter, EventHandler
from .models import BaseEvent

if t.TYPE_CHECKING:
    import loguru


class EventEmitter(BaseEmitter):
    """Dispatches events to subscribed handlers in subscription order.

    Handlers may be plain functions or coroutines. A handler that raises is
    logged and skipped; observers must not be able to fail a request.
    """

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self.logger = logger
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def off(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    async def emit(self, event_type: str, event: BaseEvent) -> None:
        # Copy so handlers can unsubscribe themselves while being called
        for handler in list(self._handlers.get(event_type, ())):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self.logger.error(f"Handler for '{event_type}' failed: {e}")
