"""Token provider implementations."""

import inspect
import typing as t

from ..domain.exceptions import NotAuthenticatedError
from .base import BaseTokenProvider

TokenSource = t.Callable[[], str | None | t.Awaitable[str | None]]


class StaticTokenProvider(BaseTokenProvider):
    """Returns a fixed token, e.g. one taken from settings or the CLI."""

    def __init__(self, token: str | None) -> None:
        self._token = token

    async def get_token(self) -> str:
        if not self._token:
            raise NotAuthenticatedError("No access token configured")
        return self._token


class CallableTokenProvider(BaseTokenProvider):
    """Looks the token up on every call through a sync or async callable.

    Use this to bridge to whatever holds the current user's session.
    """

    def __init__(self, source: TokenSource) -> None:
        self._source = source

    async def get_token(self) -> str:
        token = self._source()
        if inspect.isawaitable(token):
            token = await token
        if not token:
            raise NotAuthenticatedError("Current session has no access token")
        return token
