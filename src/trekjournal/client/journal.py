"""Assembled journal client.

This module provides:
- Journal: Wires the store, queue, monitor, gate, engine, deleter and
  runner around one JournalContext
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from trekjournal.client.context import JournalContext
from trekjournal.client.sync import (
    ConnectivityMonitor,
    EntryDeleter,
    EntrySubmissionGate,
    EntryUploader,
    JournalRunner,
    SyncCommand,
    SyncEngine,
)
from trekjournal.core.config import SyncConfig
from trekjournal.core.errors import UnknownEntryError

if TYPE_CHECKING:
    from trekjournal.client.api import RemoteStore
    from trekjournal.client.models import Draft, Entry
    from trekjournal.client.sync import DrainResult, PendingQueue, SubmitResult

logger = logging.getLogger(__name__)


class Journal:
    """Memory journal with offline queue.

    Usage:
        async with Journal(store, PendingQueue(path)) as journal:
            await journal.monitor.refresh()
            await journal.submit(Draft(title="Campfire", notes="..."))
            await journal.sync()
    """

    def __init__(
        self,
        store: RemoteStore,
        queue: PendingQueue,
        config: SyncConfig | None = None,
        online: bool = True,
    ) -> None:
        """Initialize the journal.

        Args:
            store: Remote store adapter.
            queue: Local durable queue.
            config: Sync tuning.
            online: Initial connectivity, until the first probe.
        """
        config = config or SyncConfig()
        self.commands: asyncio.Queue[SyncCommand] = asyncio.Queue()
        self.monitor = ConnectivityMonitor(
            self.commands,
            probe=store.health_check,
            interval=config.probe_interval,
            online=online,
        )
        self.context = JournalContext(
            store=store,
            queue=queue,
            monitor=self.monitor,
            config=config,
        )
        uploader = EntryUploader(store)
        self.gate = EntrySubmissionGate(self.context, uploader)
        self.engine = SyncEngine(self.context, uploader)
        self.deleter = EntryDeleter(self.context)
        self.runner = JournalRunner(self.context, self.engine, self.monitor, self.commands)

    async def __aenter__(self) -> Journal:
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the queue and the store client."""
        self.context.queue.close()
        close = getattr(self.context.store, "close", None)
        if close is not None:
            await close()

    # === View layer intents ===

    async def refresh(self) -> list[Entry]:
        """Load the entries from the backend into the entry set."""
        await self.engine.reconcile()
        return list(self.context.entries)

    async def submit(self, draft: Draft) -> SubmitResult:
        """Submit a draft."""
        return await self.gate.submit(draft)

    async def sync(self) -> DrainResult:
        """Drain the pending queue now."""
        return await self.engine.drain()

    async def delete_entry(self, entry_id: int) -> None:
        """Delete an entry shown in the entry set.

        Raises:
            UnknownEntryError: If the entry is not in the entry set.
        """
        entry = self.context.entries.get(entry_id)
        if entry is None:
            raise UnknownEntryError(entry_id)
        await self.deleter.delete_entry(entry)

    async def delete_media(self, entry_id: int, storage_path: str) -> Entry:
        """Delete one media item of an entry."""
        return await self.deleter.delete_media(entry_id, storage_path)

    async def watch(self, stop_event: asyncio.Event | None = None) -> None:
        """Run the event loop until stopped."""
        await self.runner.run(stop_event or asyncio.Event())
