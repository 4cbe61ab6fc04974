"""HTTP transport infrastructure."""

from .base import BaseTransport
from .factories import create_secure_connector, create_ssl_context
from .tracing import DebugContext, create_debug_trace_config, mask_headers
from .transport import AiohttpTransport, build_form, encode_query

__all__ = [
    "BaseTransport",
    "AiohttpTransport",
    "DebugContext",
    "build_form",
    "encode_query",
    "create_debug_trace_config",
    "create_secure_connector",
    "create_ssl_context",
    "mask_headers",
]
