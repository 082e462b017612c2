"""Session lifecycle phases."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    """Where a session is in its lifecycle.

    UNINITIALIZED -> ACTIVE -> CLOSED. CLOSED is terminal.
    """

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CLOSED = "closed"


__all__ = ["SessionPhase"]
