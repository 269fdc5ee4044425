"""Entry submission gate.

This module provides:
- EntrySubmissionGate: Routes a new draft to the backend (online) or to
  the pending queue (offline), never both
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trekjournal.client.status import MSG_QUEUED, MSG_SAVED
from trekjournal.client.sync.types import SubmitResult
from trekjournal.client.sync.upload import EntryUploader
from trekjournal.core.types import SyncState

if TYPE_CHECKING:
    from trekjournal.client.context import JournalContext
    from trekjournal.client.models import Draft

logger = logging.getLogger(__name__)


class EntrySubmissionGate:
    """Decides where a submitted draft goes."""

    def __init__(
        self,
        context: JournalContext,
        uploader: EntryUploader | None = None,
    ) -> None:
        """Initialize the gate.

        Args:
            context: Shared journal state.
            uploader: Upload-and-insert procedure shared with the sync engine.
        """
        self._ctx = context
        self._uploader = uploader or EntryUploader(context.store)

    async def submit(self, draft: Draft) -> SubmitResult:
        """Validate and route a draft.

        Offline, the record is appended to the pending queue and the entry
        set is left alone. Online, the record is uploaded and inserted, then
        prepended to the entry set.

        Args:
            draft: What the user composed.

        Returns:
            SubmitResult telling whether the draft was queued or stored.

        Raises:
            EmptyEntry: If the draft has no title, notes or files.
            RemoteWriteError: If the online upload or insert fails. Nothing
                is queued in that case.
            LocalPersistenceError: If the offline append fails.
        """
        record = draft.validate()

        if not self._ctx.is_online:
            await self._ctx.queue.append(record)
            self._ctx.status.report(SyncState.QUEUED_OFFLINE, MSG_QUEUED)
            return SubmitResult(queued=True, pending=record)

        entry = await self._uploader.upload_and_insert(record)
        self._ctx.entries.prepend(entry)
        self._ctx.status.report_idle(MSG_SAVED)
        return SubmitResult(queued=False, entry=entry)
