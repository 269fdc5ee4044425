"""Deletion of stored entries and single media items.

This module provides:
- EntryDeleter: Removes entries and media from the backend and keeps the
  reconciled entry set consistent
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trekjournal.core.errors import RemoteStoreError, UnknownEntryError

if TYPE_CHECKING:
    from trekjournal.client.context import JournalContext
    from trekjournal.client.models import Entry

logger = logging.getLogger(__name__)


class EntryDeleter:
    """Deletes entries and media items."""

    def __init__(self, context: JournalContext) -> None:
        self._ctx = context

    async def delete_media(self, entry_id: int, storage_path: str) -> Entry:
        """Delete one media item of an entry.

        The object is removed from the bucket, the entry set is updated in
        place, then the new media list is written to the record. If that
        last write fails the entry set and the record disagree until the
        next reconciliation.

        Args:
            entry_id: Id of the entry owning the media.
            storage_path: Storage path of the media item.

        Returns:
            The updated entry.

        Raises:
            UnknownEntryError: If the entry is not in the entry set.
            RemoteWriteError: If the object delete or record update fails.
        """
        entry = self._ctx.entries.get(entry_id)
        if entry is None:
            raise UnknownEntryError(entry_id)

        await self._ctx.store.delete_objects([storage_path])

        media = [m for m in entry.media if m.path != storage_path]
        self._ctx.entries.replace_media(entry_id, media)
        await self._ctx.store.update_entry_media(entry_id, media)

        logger.info(f"Deleted media {storage_path} from memory {entry_id}")
        return entry

    async def delete_entry(self, entry: Entry) -> None:
        """Delete an entry and its media.

        Media cleanup is best-effort: a failed batch delete is logged and
        the record is deleted anyway.

        Raises:
            RemoteWriteError: If the record delete fails.
        """
        if entry.media:
            paths = [m.path for m in entry.media]
            try:
                await self._ctx.store.delete_objects(paths)
            except RemoteStoreError as e:
                logger.warning(
                    f"Could not delete {len(paths)} media objects of memory {entry.id}: {e}"
                )

        await self._ctx.store.delete_entry(entry.id)
        self._ctx.entries.remove(entry.id)
        logger.info(f"Deleted memory {entry.id}")
