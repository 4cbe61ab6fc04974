"""Emitter interface for request lifecycle events."""

import typing as t
from abc import ABC, abstractmethod

from .models import BaseEvent

# Sync handlers return None; async handlers return an awaitable.
EventHandler = t.Callable[[BaseEvent], t.Any]


class BaseEmitter(ABC):
    """Publishes request events (``request.sent``, ``request.retrying``,
    ``request.exhausted``) to subscribed handlers."""

    @abstractmethod
    def on(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe ``handler`` to ``event_type``."""
        pass

    @abstractmethod
    def off(self, event_type: str, handler: EventHandler) -> None:
        """Remove ``handler``; unknown handlers are ignored."""
        pass

    @abstractmethod
    async def emit(self, event_type: str, event: BaseEvent) -> None:
        """Deliver ``event`` to every handler of ``event_type``."""
        pass
