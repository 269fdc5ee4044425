"""Upload-and-insert procedure shared by submission and drain.

This module provides:
- make_storage_path: Collision-resistant storage path for a file
- EntryUploader: Uploads the files of a pending entry, then inserts the row
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from pathlib import PurePath
from typing import TYPE_CHECKING

from trekjournal.client.models import MediaReference

if TYPE_CHECKING:
    from trekjournal.client.api import RemoteStore
    from trekjournal.client.models import Entry, PendingEntry

logger = logging.getLogger(__name__)

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 11


def make_storage_path(file_name: str, now: float | None = None) -> str:
    """Build a storage path: epoch millis, random base36 suffix, extension.

    Args:
        file_name: Original file name (its extension is kept).
        now: Unix time override.

    Returns:
        Path such as "1718000000000-k3j9x0q2ab1.jpg".
    """
    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    extension = PurePath(file_name).suffix.lower()
    return f"{millis}-{suffix}{extension}"


class EntryUploader:
    """Uploads media then inserts the entry record.

    The record insert is attempted only after every file is uploaded. Any
    failure propagates; objects uploaded before the failure are left in place.
    """

    def __init__(self, store: RemoteStore) -> None:
        """Initialize the uploader.

        Args:
            store: Remote store adapter.
        """
        self._store = store

    async def upload_and_insert(self, record: PendingEntry) -> Entry:
        """Upload every file of a record and insert the entry.

        Args:
            record: Validated entry with local files.

        Returns:
            The stored entry, with id and creation timestamp.

        Raises:
            RemoteWriteError: If an upload or the insert fails.
        """
        media: list[MediaReference] = []
        for local_file in record.files:
            path = make_storage_path(local_file.name)
            await self._store.upload_object(path, local_file.data, local_file.mime_type)
            media.append(MediaReference(
                url=self._store.get_public_url(path),
                path=path,
                name=local_file.name,
                type=local_file.mime_type,
            ))

        entry = await self._store.insert_entry(record.to_record(media))
        logger.info(
            f"Stored memory {entry.id} ({entry.day}, {len(media)} media): {entry.title!r}"
        )
        return entry
