"""Per-exchange log fields for the /mcp endpoint.

Every record emitted while the router handles one HTTP exchange carries
``session_id`` and ``request_id``, even from modules that never see the
request. The fields live in context variables:

- ``request_scope`` opens a fresh request id for one exchange and tags it
  with the session header (``-`` when absent).
- ``session_scope`` re-tags the remainder of an initiation exchange once
  the new session id exists.

Records created outside any scope carry ``-`` for both fields, so format
strings that reference them never fail.
"""

from __future__ import annotations

import uuid
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Token, ContextVar

_UNSET = "-"

_SESSION_ID: ContextVar[str] = ContextVar("session_id", default=_UNSET)
_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default=_UNSET)

# record attribute -> context variable
_RECORD_FIELDS: dict[str, ContextVar[str]] = {
    "session_id": _SESSION_ID,
    "request_id": _REQUEST_ID,
}


def new_request_id() -> str:
    """Short random id used to correlate the records of one exchange."""
    return uuid.uuid4().hex[:12]


@contextmanager
def request_scope(session_id: str | None = None) -> Iterator[str]:
    """Tag records for one /mcp exchange; yields the new request id."""
    request_id = new_request_id()
    session_token = _SESSION_ID.set(session_id or _UNSET)
    request_token = _REQUEST_ID.set(request_id)
    try:
        yield request_id
    finally:
        _REQUEST_ID.reset(request_token)
        _SESSION_ID.reset(session_token)


@contextmanager
def session_scope(session_id: str) -> Iterator[None]:
    token: Token[str] = _SESSION_ID.set(session_id)
    try:
        yield
    finally:
        _SESSION_ID.reset(token)


def install_log_context() -> None:
    """Install a LogRecord factory that stamps the scope fields (once)."""
    if getattr(install_log_context, "_installed", False):
        return

    base_factory = logging.getLogRecordFactory()

    def stamped_record(*args, **kwargs) -> logging.LogRecord:
        record = base_factory(*args, **kwargs)
        for attr, var in _RECORD_FIELDS.items():
            setattr(record, attr, var.get())
        return record

    logging.setLogRecordFactory(stamped_record)
    install_log_context._installed = True  # type: ignore[attr-defined]


__all__ = [
    "install_log_context",
    "new_request_id",
    "request_scope",
    "session_scope",
]
