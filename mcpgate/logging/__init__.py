"""Logging bootstrap and per-exchange context fields."""

from .setup import configure_logging
from .context import (
    request_scope,
    session_scope,
    new_request_id,
    install_log_context,
)

__all__ = [
    "configure_logging",
    "install_log_context",
    "new_request_id",
    "request_scope",
    "session_scope",
]
