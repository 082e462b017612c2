"""Origin and protocol-version checks run before any session logic.

Browsers attach an ``Origin`` header to cross-origin requests; checking it
against an allow-list of prefixes blocks DNS-rebinding pages from driving a
locally bound server. Clients that send no ``Origin`` (CLIs, other servers)
are let through.

The protocol-version check is skipped for ``initialize`` so first contact can
always negotiate a version.
"""

from __future__ import annotations

import re
import logging
from collections.abc import Iterable, Mapping

from ..telemetry import get_metrics
from ..config.security import ALLOWED_ORIGINS, SUPPORTED_PROTOCOL_VERSIONS
from ..config.http import ORIGIN_HEADER, MCP_PROTOCOL_VERSION_HEADER
from ..errors import AccessDeniedError, VersionMismatchError

logger = logging.getLogger(__name__)


def check_origin(origin: str | None, allowed: Iterable[str] | None = None) -> bool:
    """Return True if ``origin`` is absent or starts with an allowed prefix."""
    if origin is None:
        return True
    prefixes = ALLOWED_ORIGINS if allowed is None else tuple(allowed)
    return any(origin.startswith(prefix) for prefix in prefixes if prefix)


def origin_pattern(allowed: Iterable[str] | None = None) -> str:
    """Return a regex that fully matches the origins ``check_origin`` accepts."""
    prefixes = ALLOWED_ORIGINS if allowed is None else tuple(allowed)
    alternatives = "|".join(re.escape(prefix) for prefix in prefixes if prefix)
    if not alternatives:
        return r"(?!)"  # matches nothing
    return f"(?:{alternatives}).*"


def check_protocol_version(
    version: str | None,
    *,
    is_initialization: bool,
    supported: Iterable[str] | None = None,
) -> bool:
    """Return True if the declared protocol version may proceed."""
    if version is None or is_initialization:
        return True
    accepted = SUPPORTED_PROTOCOL_VERSIONS if supported is None else tuple(supported)
    return version in accepted


def enforce_origin(headers: Mapping[str, str], *, path: str = "/mcp") -> None:
    """Raise AccessDeniedError when the request origin is not allowed."""
    origin = headers.get(ORIGIN_HEADER)
    if check_origin(origin):
        return
    logger.warning("security gate: rejected origin=%r path=%s", origin, path)
    get_metrics().gate_rejections_total.add(1, {"reason": "origin"})
    raise AccessDeniedError(origin or "")


def enforce_protocol_version(headers: Mapping[str, str], *, is_initialization: bool) -> None:
    """Raise VersionMismatchError for unsupported versions on non-initialize calls."""
    version = headers.get(MCP_PROTOCOL_VERSION_HEADER)
    if check_protocol_version(version, is_initialization=is_initialization):
        return
    logger.warning(
        "security gate: rejected protocol version=%r origin=%r",
        version,
        headers.get(ORIGIN_HEADER),
    )
    get_metrics().gate_rejections_total.add(1, {"reason": "protocol_version"})
    raise VersionMismatchError(version or "", SUPPORTED_PROTOCOL_VERSIONS)


__all__ = [
    "check_origin",
    "check_protocol_version",
    "enforce_origin",
    "enforce_protocol_version",
    "origin_pattern",
]
