"""Request admission checks (origin allow-list, protocol version)."""

from .gate import (
    check_origin,
    enforce_origin,
    check_protocol_version,
    enforce_protocol_version,
    origin_pattern,
)

__all__ = [
    "check_origin",
    "check_protocol_version",
    "enforce_origin",
    "enforce_protocol_version",
    "origin_pattern",
]
