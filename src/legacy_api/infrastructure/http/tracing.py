"""Per-request debug logging through aiohttp's tracing hooks.

Requests opt in by passing ``trace_request_ctx=DebugContext(enabled=True)``;
every other request on the same session stays silent.
"""

import typing as t
from dataclasses import dataclass
from types import SimpleNamespace

import aiohttp
from multidict import CIMultiDict

from ...domain.constants import HEADER_AUTHORIZATION

if t.TYPE_CHECKING:
    import loguru

_MASK = "***"


@dataclass(frozen=True)
class DebugContext:
    enabled: bool = False


def _debug_enabled(trace_config_ctx: SimpleNamespace) -> bool:
    context = getattr(trace_config_ctx, "trace_request_ctx", None)
    return isinstance(context, DebugContext) and context.enabled


def mask_headers(headers: t.Mapping[str, str]) -> dict[str, str]:
    """Copy headers for logging with the credential value hidden."""
    masked = CIMultiDict(headers)
    if HEADER_AUTHORIZATION in masked:
        scheme, _, _ = masked[HEADER_AUTHORIZATION].partition(" ")
        masked[HEADER_AUTHORIZATION] = f"{scheme} {_MASK}" if scheme else _MASK
    return dict(masked)


def create_debug_trace_config(logger: "loguru.Logger") -> aiohttp.TraceConfig:
    """Build a TraceConfig that logs opted-in requests.

    Traces are logged at INFO so a request that asks for them is heard at
    the default level; requests that do not opt in produce nothing.
    """

    async def on_request_start(
        session: aiohttp.ClientSession,
        trace_config_ctx: SimpleNamespace,
        params: aiohttp.TraceRequestStartParams,
    ) -> None:
        if _debug_enabled(trace_config_ctx):
            logger.info(
                f"--> {params.method} {params.url} "
                f"headers={mask_headers(params.headers)}"
            )

    async def on_request_end(
        session: aiohttp.ClientSession,
        trace_config_ctx: SimpleNamespace,
        params: aiohttp.TraceRequestEndParams,
    ) -> None:
        if _debug_enabled(trace_config_ctx):
            logger.info(
                f"<-- {params.response.status} {params.method} {params.url} "
                f"headers={dict(params.response.headers)}"
            )

    async def on_request_exception(
        session: aiohttp.ClientSession,
        trace_config_ctx: SimpleNamespace,
        params: aiohttp.TraceRequestExceptionParams,
    ) -> None:
        if _debug_enabled(trace_config_ctx):
            logger.info(
                f"<!! {params.method} {params.url} failed: "
                f"{type(params.exception).__name__}: {params.exception}"
            )

    trace_config = aiohttp.TraceConfig()
    trace_config.on_request_start.append(on_request_start)
    trace_config.on_request_end.append(on_request_end)
    trace_config.on_request_exception.append(on_request_exception)
    return trace_config
