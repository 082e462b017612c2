"""Session lifetime configuration.

Idle Eviction:
    SESSION_IDLE_TTL_SECONDS: Sessions with no request and no open push
        channel for this long are closed by the sweeper. Set to 0 to keep
        sessions until the client deletes them.
    SESSION_SWEEP_INTERVAL_S: How often the sweeper checks for idle sessions.
"""

import os


SESSION_IDLE_TTL_SECONDS = float(os.getenv("SESSION_IDLE_TTL_SECONDS", "1800"))  # 30 minutes
SESSION_SWEEP_INTERVAL_S = float(os.getenv("SESSION_SWEEP_INTERVAL_S", "30"))


__all__ = [
    "SESSION_IDLE_TTL_SECONDS",
    "SESSION_SWEEP_INTERVAL_S",
]
