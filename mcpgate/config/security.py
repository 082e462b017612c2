"""Origin allow-list and protocol version configuration.

Origins:
    ALLOWED_ORIGINS: Comma-separated list of origin prefixes. A browser
        request whose ``Origin`` header does not start with one of these is
        rejected before any session logic runs. Requests without an
        ``Origin`` header (CLI clients, server-to-server) are always allowed.

Protocol Versions:
    SUPPORTED_PROTOCOL_VERSIONS: Versions accepted on the
        ``mcp-protocol-version`` header of non-initialization requests.
    LATEST_PROTOCOL_VERSION: Offered during initialization when the client
        asks for a version the server does not speak.
"""

from __future__ import annotations

from ..helpers.env import env_csv

ALLOWED_ORIGINS = env_csv(
    "ALLOWED_ORIGINS",
    (
        "http://localhost",
        "https://localhost",
        "http://127.0.0.1",
        "https://127.0.0.1",
    ),
)

SUPPORTED_PROTOCOL_VERSIONS: tuple[str, ...] = (
    "2024-11-05",
    "2025-03-26",
    "2025-06-18",
)
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[-1]


__all__ = [
    "ALLOWED_ORIGINS",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "LATEST_PROTOCOL_VERSION",
]
