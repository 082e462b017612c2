"""Background idle-session eviction.

A single watchdog task per process wakes every ``SESSION_SWEEP_INTERVAL_S``
and asks the session table to close sessions that have been idle longer
than ``SESSION_IDLE_TTL_SECONDS`` with no push channel open. Setting the
TTL to 0 disables eviction; sessions then live until the client deletes
them or the server shuts down.

Usage:
    sweeper = SessionSweeper(table)
    sweeper.start()   # on startup
    await sweeper.stop()  # on shutdown
"""

from __future__ import annotations

import asyncio
import logging
import contextlib

from .table import SessionTable
from ..config.sessions import SESSION_SWEEP_INTERVAL_S

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Periodically evicts idle sessions from a table."""

    def __init__(self, table: SessionTable, interval_s: float | None = None) -> None:
        self._table = table
        self._interval_s = float(interval_s or SESSION_SWEEP_INTERVAL_S)
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task | None:
        """Start the sweep loop (idempotent); no-op when eviction is disabled."""
        if self._table.idle_ttl_seconds <= 0:
            logger.info("session sweeper disabled (idle ttl <= 0)")
            return None
        if self._task is None:
            self._stop_event.clear()
            self._task = asyncio.create_task(self._sweep_loop())
        return self._task

    async def stop(self) -> None:
        """Stop the sweep loop and wait for it to finish."""
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _sweep_loop(self) -> None:
        logger.info(
            "session sweeper started ttl=%ss interval=%ss",
            self._table.idle_ttl_seconds,
            self._interval_s,
        )
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_s)
            except asyncio.TimeoutError:
                pass
            if self._stop_event.is_set():
                break
            try:
                await self._table.evict_idle()
            except Exception:
                logger.exception("session sweeper: eviction pass failed")


__all__ = ["SessionSweeper"]
