"""Centralized exception classes for the transport.

Organization:
    - base.py: TransportError, the parent of every request-ending rejection
    - access.py: origin rejections from the security gate
    - protocol.py: malformed envelopes and unsupported protocol versions
    - session.py: unknown or closed session ids
    - dispatch.py: typed failures of the tool dispatcher boundary
    - params.py: unusable params on a known JSON-RPC method
"""

from .base import TransportError
from .access import AccessDeniedError
from .session import SessionNotFoundError
from .dispatch import DispatchError
from .params import InvalidParamsError
from .protocol import MalformedRequestError, VersionMismatchError

__all__ = [
    "TransportError",
    # Security gate
    "AccessDeniedError",
    "VersionMismatchError",
    # Routing
    "MalformedRequestError",
    "SessionNotFoundError",
    # Dispatcher
    "DispatchError",
    "InvalidParamsError",
]
