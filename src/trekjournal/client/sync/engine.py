"""Sync engine draining the offline queue.

This module provides:
- SyncEngine: Single-flight drain of the pending queue into the backend

Drain algorithm:
    1. Load the whole queue. Empty queue: return, no remote calls (a
       "syncing" banner left by the ONLINE edge goes back to idle).
    2. Upload-and-insert each record in enqueue order.
    3. On the first failure, abort. The queue is left as it was, so the
       batch is retried on the next trigger. Under FAIL_FAST, entries
       inserted before the failure are inserted again (at-least-once).
       Under MARK_COMPLETED, each insert is recorded in the queue and
       skipped on retry.
    4. On success, remove exactly the records loaded in step 1, re-fetch
       the entries and replace the reconciled entry set.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from trekjournal.client.status import MSG_DRAINED, MSG_DRAINING
from trekjournal.client.sync.types import DrainResult, DrainStatus
from trekjournal.client.sync.upload import EntryUploader
from trekjournal.core.config import DrainPolicy
from trekjournal.core.errors import JournalError
from trekjournal.core.types import SyncState

if TYPE_CHECKING:
    from trekjournal.client.context import JournalContext

logger = logging.getLogger(__name__)


class SyncEngine:
    """Drains the pending queue, one drain at a time.

    A drain requested while another is running returns immediately with
    DrainStatus.SKIPPED; it is not queued for later.
    """

    def __init__(
        self,
        context: JournalContext,
        uploader: EntryUploader | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            context: Shared journal state.
            uploader: Upload-and-insert procedure (defaults to one over context.store).
        """
        self._ctx = context
        self._uploader = uploader or EntryUploader(context.store)
        self._task: asyncio.Task[DrainResult] | None = None

    @property
    def is_draining(self) -> bool:
        """Check if a drain is in progress."""
        return self._ctx.draining

    def trigger(self) -> asyncio.Task[DrainResult] | None:
        """Start a drain in the background unless one is running.

        Returns:
            The drain task, or None if the trigger was coalesced.
        """
        if self._ctx.draining or (self._task is not None and not self._task.done()):
            logger.debug("Drain already in progress, ignoring trigger")
            return None

        self._task = asyncio.create_task(self.drain())
        self._task.add_done_callback(self._on_drain_done)
        return self._task

    def _on_drain_done(self, task: asyncio.Task[DrainResult]) -> None:
        """Log the outcome of a background drain."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Background drain failed, will retry on next trigger: {error}")

    async def wait(self) -> DrainResult | None:
        """Wait for the background drain, if any, and return its result."""
        if self._task is None:
            return None
        return await self._task

    async def drain(self) -> DrainResult:
        """Flush the pending queue to the backend.

        Returns:
            DrainResult describing what happened.

        Raises:
            RemoteStoreError: If an upload, insert or the final query fails.
            LocalPersistenceError: If the queue cannot be read or written.
        """
        if self._ctx.draining:
            logger.debug("Drain already in progress, ignoring trigger")
            return DrainResult(status=DrainStatus.SKIPPED)

        self._ctx.draining = True
        try:
            return await self._drain_once()
        finally:
            self._ctx.draining = False

    async def _drain_once(self) -> DrainResult:
        """Run one drain cycle (guard already held)."""
        status = self._ctx.status
        try:
            pending = await self._ctx.queue.load()
        except JournalError as e:
            logger.error(f"Cannot read pending queue: {e}")
            status.report_error(f"Sync failed: {e}")
            raise
        if not pending:
            # The ONLINE edge announces a sync before the queue is read
            if status.state is SyncState.DRAINING:
                status.report_idle()
            return DrainResult(status=DrainStatus.EMPTY)

        mark_completed = self._ctx.config.drain_policy == DrainPolicy.MARK_COMPLETED
        status.report(SyncState.DRAINING, MSG_DRAINING)
        logger.info(f"Draining {len(pending)} pending memories")

        inserted = 0
        skipped = 0
        try:
            for record in pending:
                if mark_completed and record.remote_id is not None:
                    logger.debug(
                        f"Skipping {record.queue_id}, already stored as {record.remote_id}"
                    )
                    skipped += 1
                    continue

                entry = await self._uploader.upload_and_insert(record)
                inserted += 1
                if mark_completed:
                    await self._ctx.queue.mark_completed(record.queue_id, entry.id)

            removed = await self._ctx.queue.remove({r.queue_id for r in pending})
            entries = await self._ctx.store.query_entries()
        except JournalError as e:
            logger.error(f"Drain aborted after {inserted} inserts: {e}")
            status.report_error(f"Sync failed: {e}")
            raise

        self._ctx.entries.replace(entries)
        status.report(SyncState.DRAINED_SUCCESS, MSG_DRAINED)
        logger.info(f"Drain complete: {inserted} inserted, {skipped} already stored")
        return DrainResult(
            status=DrainStatus.SUCCESS,
            inserted=inserted,
            skipped=skipped,
            removed=removed,
        )

    async def reconcile(self) -> int:
        """Replace the reconciled entry set with the backend's entries.

        Returns:
            Number of entries loaded.
        """
        entries = await self._ctx.store.query_entries()
        self._ctx.entries.replace(entries)
        return len(entries)
