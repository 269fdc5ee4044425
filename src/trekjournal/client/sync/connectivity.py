"""Connectivity monitoring for the offline queue.

This module provides:
- ConnectivityMonitor: Tracks reachability of the backend, emits edge
  commands (ONLINE / OFFLINE) and runs the periodic liveness probe

Architecture:
    platform report ─┐
                     ├─► ConnectivityMonitor ─► command queue ─► JournalRunner
    periodic probe ──┘

Edges are emitted only on transitions. While online, every probe tick also
requests a drain (PROBE), so a missed edge notification cannot leave the
queue stuck.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from trekjournal.client.sync.types import SyncCommand

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_PROBE_INTERVAL = 10.0  # seconds


class ConnectivityMonitor:
    """Current connectivity plus edge-triggered events.

    Usage:
        commands: asyncio.Queue[SyncCommand] = asyncio.Queue()
        monitor = ConnectivityMonitor(commands, probe=store.health_check)
        task = asyncio.create_task(monitor.run(stop_event))

        # Platform notifications can be pushed directly
        monitor.report(False)
    """

    def __init__(
        self,
        commands: asyncio.Queue[SyncCommand],
        probe: Callable[[], Awaitable[bool]] | None = None,
        interval: float = DEFAULT_PROBE_INTERVAL,
        online: bool = True,
    ) -> None:
        """Initialize the monitor.

        Args:
            commands: Queue receiving ONLINE / OFFLINE / PROBE commands.
            probe: Coroutine function returning True when the backend is
                reachable. Without a probe, state only changes via report().
            interval: Seconds between probe ticks.
            online: Initial connectivity.
        """
        self._commands = commands
        self._probe = probe
        self._interval = interval
        self._online = online

    @property
    def is_online(self) -> bool:
        """Check if the backend is currently considered reachable."""
        return self._online

    @property
    def interval(self) -> float:
        """Get the probe interval in seconds."""
        return self._interval

    def report(self, online: bool) -> bool:
        """Record the current connectivity.

        Args:
            online: Whether the backend is reachable.

        Returns:
            True if this was a transition (an edge was emitted).
        """
        if online == self._online:
            return False

        self._online = online
        if online:
            logger.info("Connectivity restored")
            self._commands.put_nowait(SyncCommand.ONLINE)
        else:
            logger.warning("Connectivity lost")
            self._commands.put_nowait(SyncCommand.OFFLINE)
        return True

    async def refresh(self) -> bool:
        """Run the probe once and record the result.

        Returns:
            Current connectivity.
        """
        if self._probe is not None:
            try:
                reachable = await self._probe()
            except Exception as e:
                logger.debug(f"Connectivity probe failed: {e}")
                reachable = False
            self.report(reachable)
        return self._online

    async def tick(self) -> bool:
        """One liveness probe: refresh, then request a drain if online.

        Returns:
            Current connectivity.
        """
        online = await self.refresh()
        if online:
            self._commands.put_nowait(SyncCommand.PROBE)
        return online

    async def run(self, stop_event: asyncio.Event) -> None:
        """Probe periodically until stop_event is set.

        Args:
            stop_event: Event to signal the loop should stop.
        """
        logger.info(f"Starting connectivity probe every {self._interval}s")

        while not stop_event.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval)
            except TimeoutError:
                pass  # Normal timeout, next tick

        logger.info("Connectivity probe stopped")
