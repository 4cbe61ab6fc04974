"""aiohttp implementation of the transport."""

import typing as t

import aiohttp
from multidict import CIMultiDict

from ...domain.exceptions import ClientNotInitialisedError
from ...domain.request import PreparedRequest
from ...domain.response import ApiResponse
from ..logging import get_logger
from .base import BaseTransport
from .factories import create_secure_connector
from .tracing import DebugContext, create_debug_trace_config

if t.TYPE_CHECKING:
    import loguru


def _query_value(value: t.Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(key: str, value: t.Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, t.Mapping):
        for sub_key, item in value.items():
            _flatten(f"{key}[{sub_key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _flatten(key, item, pairs)
    else:
        pairs.append((key, _query_value(value)))


def encode_query(params: t.Mapping[str, t.Any]) -> list[tuple[str, str]]:
    """Flatten params into query pairs aiohttp accepts.

    None values are dropped and booleans become ``true``/``false``. Nested
    mappings use bracket keys (``filter[status]=open``) and list or tuple
    values repeat the key once per item.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        _flatten(key, value, pairs)
    return pairs


def build_form(request: PreparedRequest) -> aiohttp.FormData:
    """Build a multipart body from the params and the file parts."""
    form = aiohttp.FormData()
    for key, value in encode_query(request.params):
        form.add_field(key, value)
    for part in request.files:
        form.add_field(part.field_name, part.content, filename=part.file_name)
    return form


class AiohttpTransport(BaseTransport):
    """Sends prepared requests over an aiohttp ClientSession.

    Creates and owns a session on ``open()`` unless one is provided; a
    provided session is never closed by the transport.

    Usage:
        async with AiohttpTransport() as transport:
            response = await transport.send(prepared)
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        """Initialise the transport.

        Args:
            session: Existing session to use. If None, one is created on open().
            timeout: Timeout for sessions created by the transport.
            logger: Logger for the traces of requests with ``debug`` set.
        """
        self._session = session
        self._owns_session = False
        self._timeout = timeout
        self._logger = logger

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    async def open(self) -> None:
        if self._session is not None:
            return

        kwargs: dict[str, t.Any] = {
            "connector": create_secure_connector(),
            "trace_configs": [create_debug_trace_config(self._logger)],
        }
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        self._session = aiohttp.ClientSession(**kwargs)
        self._owns_session = True

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    @property
    def session(self) -> aiohttp.ClientSession:
        """The underlying session.

        Raises:
            ClientNotInitialisedError: If used before open() or after close().
        """
        if self._session is None:
            raise ClientNotInitialisedError(
                "Transport not initialised: use it as a context manager, "
                "call open(), or pass a session"
            )
        return self._session

    async def send(self, request: PreparedRequest) -> ApiResponse:
        session = self.session
        kwargs: dict[str, t.Any] = {
            "headers": request.headers,
            "trace_request_ctx": DebugContext(enabled=request.debug),
        }

        if request.files:
            kwargs["data"] = build_form(request)
        elif request.method.sends_query:
            if request.params:
                kwargs["params"] = encode_query(request.params)
        else:
            kwargs["json"] = request.params

        async with session.request(request.method.value, request.url, **kwargs) as raw:
            body = await raw.read()
            return ApiResponse(
                status=raw.status,
                body=body,
                headers=CIMultiDict(raw.headers),
                url=str(raw.url),
            )
