"""CLI state container."""

import typing as t

from ..client import LegacyApiClient
from ..config.settings import Settings
from ..infrastructure.http import AiohttpTransport

ClientFactory = t.Callable[[Settings], LegacyApiClient]


def default_client_factory(settings: Settings) -> LegacyApiClient:
    return LegacyApiClient(transport=AiohttpTransport(), settings=settings)


class CLIState:
    """Application state container for CLI commands.

    Holds Settings and the factory commands use to build a client, so tests
    can swap in a mocked client.
    """

    def __init__(
        self, settings: Settings, client_factory: ClientFactory | None = None
    ) -> None:
        self.settings = settings
        self._client_factory = client_factory or default_client_factory

    def create_client(self) -> LegacyApiClient:
        return self._client_factory(self.settings)
