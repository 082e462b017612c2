"""Session table, lifecycle controller and push channels."""

from .phase import SessionPhase
from .channel import PushChannel
from .sweeper import SessionSweeper
from .controller import SessionController
from .table import SessionTable, new_session_id

__all__ = [
    "PushChannel",
    "SessionController",
    "SessionPhase",
    "SessionSweeper",
    "SessionTable",
    "new_session_id",
]
