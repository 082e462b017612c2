"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- server: listener address and server identity
- security: origin allow-list and protocol versions
- sessions: idle eviction policy
- events: event log bounds and SSE keep-alive
- http: header names and SSE response headers

Logging values live in ``config.logging`` and are read by
``mcpgate.logging.configure_logging``; metric specs live in
``config.telemetry``.
"""

from .server import (
    MCP_HOST,
    MCP_PORT,
    MCP_SERVER_NAME,
    MCP_SERVER_VERSION,
)
from .security import (
    ALLOWED_ORIGINS,
    SUPPORTED_PROTOCOL_VERSIONS,
    LATEST_PROTOCOL_VERSION,
)
from .sessions import (
    SESSION_IDLE_TTL_SECONDS,
    SESSION_SWEEP_INTERVAL_S,
)
from .events import (
    EVENT_STORE_MAX_EVENTS_PER_STREAM,
    EVENT_STORE_DROP_ON_CLOSE,
    SSE_KEEPALIVE_INTERVAL_S,
)
from .http import (
    MCP_SESSION_ID_HEADER,
    MCP_PROTOCOL_VERSION_HEADER,
    LAST_EVENT_ID_HEADER,
    ORIGIN_HEADER,
    CONTENT_TYPE_SSE,
    SSE_RESPONSE_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_HEADERS,
    CORS_EXPOSE_HEADERS,
)

__all__ = [
    # Server
    "MCP_HOST",
    "MCP_PORT",
    "MCP_SERVER_NAME",
    "MCP_SERVER_VERSION",
    # Security
    "ALLOWED_ORIGINS",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "LATEST_PROTOCOL_VERSION",
    # Sessions
    "SESSION_IDLE_TTL_SECONDS",
    "SESSION_SWEEP_INTERVAL_S",
    # Events
    "EVENT_STORE_MAX_EVENTS_PER_STREAM",
    "EVENT_STORE_DROP_ON_CLOSE",
    "SSE_KEEPALIVE_INTERVAL_S",
    # HTTP
    "MCP_SESSION_ID_HEADER",
    "MCP_PROTOCOL_VERSION_HEADER",
    "LAST_EVENT_ID_HEADER",
    "ORIGIN_HEADER",
    "CONTENT_TYPE_SSE",
    "SSE_RESPONSE_HEADERS",
    "CORS_ALLOW_METHODS",
    "CORS_ALLOW_HEADERS",
    "CORS_EXPOSE_HEADERS",
]
