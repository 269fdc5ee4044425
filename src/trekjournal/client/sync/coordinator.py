"""Journal runner consuming the command queue.

This module provides:
- JournalRunner: Event loop that turns connectivity edges, probe ticks and
  manual sync requests into drain triggers

Decision table:
    | Command | Action                                   |
    |---------|------------------------------------------|
    | ONLINE  | Banner "syncing", trigger drain          |
    | OFFLINE | Banner "queued-offline"                  |
    | PROBE   | Trigger drain                            |
    | SYNC    | Trigger drain                            |
    | STOP    | Leave the loop                           |

Drain triggers go through SyncEngine.trigger(), which ignores triggers
while a drain is running.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from trekjournal.client.status import MSG_WENT_OFFLINE, MSG_WENT_ONLINE
from trekjournal.client.sync.types import SyncCommand
from trekjournal.core.types import SyncState

if TYPE_CHECKING:
    from trekjournal.client.context import JournalContext
    from trekjournal.client.sync.connectivity import ConnectivityMonitor
    from trekjournal.client.sync.engine import SyncEngine

logger = logging.getLogger(__name__)


class JournalRunner:
    """Single consumer of the journal's command queue.

    Usage:
        runner = JournalRunner(context, engine, monitor, commands)
        stop = asyncio.Event()
        await runner.run(stop)  # until stop is set or STOP is received
    """

    def __init__(
        self,
        context: JournalContext,
        engine: SyncEngine,
        monitor: ConnectivityMonitor,
        commands: asyncio.Queue[SyncCommand],
    ) -> None:
        self._ctx = context
        self._engine = engine
        self._monitor = monitor
        self._commands = commands
        self._running = False

    @property
    def running(self) -> bool:
        """Check if the loop is running."""
        return self._running

    def request_sync(self) -> None:
        """Ask for a drain (manual trigger)."""
        self._commands.put_nowait(SyncCommand.SYNC)

    def handle(self, command: SyncCommand) -> bool:
        """Apply one command.

        Returns:
            False if the runner should stop.
        """
        logger.debug(f"Handling command {command.name}")

        if command is SyncCommand.STOP:
            return False
        if command is SyncCommand.OFFLINE:
            self._ctx.status.report(SyncState.QUEUED_OFFLINE, MSG_WENT_OFFLINE)
            return True
        if command is SyncCommand.ONLINE:
            self._ctx.status.report(SyncState.DRAINING, MSG_WENT_ONLINE)

        # ONLINE, PROBE and SYNC all funnel into the single-flight drain
        if self._ctx.is_online:
            self._engine.trigger()
        return True

    async def run(self, stop_event: asyncio.Event) -> None:
        """Consume commands until stop_event is set or STOP arrives.

        The connectivity probe runs alongside as a task.

        Args:
            stop_event: Event to signal the loop should stop.
        """
        self._running = True
        probe_task = asyncio.create_task(self._monitor.run(stop_event))
        stop_task = asyncio.create_task(stop_event.wait())
        logger.info("Journal runner started")

        try:
            while not stop_event.is_set():
                get_task = asyncio.create_task(self._commands.get())
                done, _ = await asyncio.wait(
                    {get_task, stop_task},
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if get_task not in done:
                    get_task.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await get_task
                    break
                if not self.handle(get_task.result()):
                    break
        finally:
            stop_event.set()
            try:
                await probe_task
            except Exception as e:
                logger.warning(f"Connectivity probe crashed: {e}")
            stop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await stop_task
            # Let an in-flight drain finish, there is no mid-flight abort
            with contextlib.suppress(Exception):
                await self._engine.wait()
            self._running = False
            logger.info("Journal runner stopped")
