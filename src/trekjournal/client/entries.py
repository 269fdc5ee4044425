"""In-memory view of the stored entries.

This module provides:
- ReconciledEntrySet: Entries shown to the user, newest first
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from trekjournal.client.models import Entry, MediaReference


class ReconciledEntrySet:
    """Ordered entries, newest first.

    Rebuilt wholesale after a drain, updated incrementally by direct
    submissions and deletions.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: list[Entry] = []
        self.replace(entries)

    def replace(self, entries: Iterable[Entry]) -> None:
        """Replace all entries, sorting by creation time descending."""
        self._entries = sorted(entries, key=lambda e: e.created_at, reverse=True)

    def prepend(self, entry: Entry) -> None:
        """Add a freshly stored entry at the top."""
        self._entries.insert(0, entry)

    def get(self, entry_id: int) -> Entry | None:
        """Get an entry by id."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def remove(self, entry_id: int) -> bool:
        """Remove an entry by id.

        Returns:
            True if the entry was present.
        """
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        return len(self._entries) != before

    def replace_media(self, entry_id: int, media: list[MediaReference]) -> bool:
        """Replace the media list of an entry in place.

        Returns:
            True if the entry was present.
        """
        entry = self.get(entry_id)
        if entry is None:
            return False
        entry.media = list(media)
        return True

    def ids(self) -> list[int]:
        """Get entry ids in display order."""
        return [e.id for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)
