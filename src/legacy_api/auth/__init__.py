"""Access-token providers used to build the Authorization header."""

from .base import BaseTokenProvider
from .providers import CallableTokenProvider, StaticTokenProvider

__all__ = ["BaseTokenProvider", "StaticTokenProvider", "CallableTokenProvider"]
