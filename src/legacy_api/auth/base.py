"""Base interface for access-token providers."""

from abc import ABC, abstractmethod


class BaseTokenProvider(ABC):
    """Supplies the bearer token for the current session.

    Injected into the client in place of a global session lookup, so the
    client can be exercised without a real logged-in user.
    """

    @abstractmethod
    async def get_token(self) -> str:
        """Return the access token for the current session.

        Raises:
            NotAuthenticatedError: If there is no authenticated session.
        """
        pass
