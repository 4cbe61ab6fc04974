"""Factories for secure aiohttp connection objects."""

import ssl
import typing as t

import aiohttp
import certifi


def create_ssl_context() -> ssl.SSLContext:
    """Create an SSL context that verifies against certifi's CA bundle.

    Gives the same verification behaviour on every platform, including
    Python builds that ship without system certificates (e.g. on macOS).
    """
    return ssl.create_default_context(cafile=certifi.where())


def create_secure_connector(
    ssl: ssl.SSLContext | None = None, **kwargs: t.Any
) -> aiohttp.TCPConnector:
    """Create a TCPConnector using ``ssl`` or a certifi-backed context.

    Must be called with a running event loop.
    """
    return aiohttp.TCPConnector(ssl=ssl or create_ssl_context(), **kwargs)
