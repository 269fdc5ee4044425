"""Local durable queue of entries submitted while offline.

This module provides:
- PendingQueue: SQLite-backed ordered queue of PendingEntry records

Persistence (SQLite):
    The whole queue lives in a single named slot of a key-value table,
    JSON-encoded (file bytes base64-encoded). Every operation reads the slot,
    modifies the list and writes it back in one commit.

    This is NOT transactional across process crashes: a crash between the
    read and the write of a drain can lose or duplicate the in-flight batch.

    The async methods run the SQLite work in a worker thread, so each queue
    access is a suspension point for the event loop. An RLock serializes the
    read-modify-write cycles.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from trekjournal.client.models import PendingEntry
from trekjournal.core.errors import LocalPersistenceError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "pendingMemories"


class PendingQueue:
    """Ordered queue of pending entries persisted in SQLite.

    Insertion order is submission order. Records are never reordered.

    Attributes:
        path: SQLite database path (":memory:" for a transient queue)
        slot: Name of the key holding the queue
    """

    def __init__(self, path: Path | str, slot: str = DEFAULT_SLOT) -> None:
        """Open (or create) the queue database.

        Args:
            path: Path to the SQLite database file.
            slot: Key under which the queue is stored.

        Raises:
            LocalPersistenceError: If the database cannot be opened.
        """
        self._path = path
        self._slot = slot
        self._lock = threading.RLock()

        try:
            if str(path) != ":memory:":
                Path(path).parent.mkdir(parents=True, exist_ok=True)
            self._db: sqlite3.Connection | None = sqlite3.connect(
                str(path),
                check_same_thread=False,
            )
            self._db.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            self._db.commit()
        except (sqlite3.Error, OSError) as e:
            raise LocalPersistenceError(f"Cannot open queue at {path}: {e}") from e

        logger.debug("Opened pending queue at %s (slot %s)", path, slot)

    @property
    def path(self) -> Path | str:
        """Get the database path."""
        return self._path

    @property
    def slot(self) -> str:
        """Get the slot name."""
        return self._slot

    # === Slot access (worker thread) ===

    def _read(self) -> list[PendingEntry]:
        """Read the whole slot."""
        if self._db is None:
            raise LocalPersistenceError("Queue is closed")
        try:
            row = self._db.execute(
                "SELECT value FROM kv_store WHERE key = ?", (self._slot,)
            ).fetchone()
            if row is None:
                return []
            return [PendingEntry.from_dict(item) for item in json.loads(row[0])]
        except (sqlite3.Error, ValueError, KeyError, TypeError) as e:
            raise LocalPersistenceError(f"Cannot read pending queue: {e}") from e

    def _write(self, records: list[PendingEntry]) -> None:
        """Replace the whole slot."""
        if self._db is None:
            raise LocalPersistenceError("Queue is closed")
        try:
            self._db.execute(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                (self._slot, json.dumps([r.to_dict() for r in records])),
            )
            self._db.commit()
        except sqlite3.Error as e:
            raise LocalPersistenceError(f"Cannot write pending queue: {e}") from e

    def _modify(self, change: Callable[[list[PendingEntry]], Any]) -> Any:
        """Run one read-modify-write cycle under the lock."""
        with self._lock:
            records = self._read()
            result = change(records)
            self._write(records)
            return result

    # === Queue operations ===

    async def append(self, record: PendingEntry) -> int:
        """Append a record at the end of the queue.

        Returns:
            Queue length after the append.
        """

        def change(records: list[PendingEntry]) -> int:
            records.append(record)
            return len(records)

        size: int = await asyncio.to_thread(self._modify, change)
        logger.info("Queued memory %r (queue size: %d)", record.title, size)
        return size

    async def load(self) -> list[PendingEntry]:
        """Read all records in enqueue order (does not remove them)."""

        def read() -> list[PendingEntry]:
            with self._lock:
                return self._read()

        return await asyncio.to_thread(read)

    async def remove(self, queue_ids: set[str]) -> int:
        """Remove the records with the given queue ids.

        Records appended since the caller loaded the queue are kept.

        Returns:
            Number of records removed.
        """

        def change(records: list[PendingEntry]) -> int:
            kept = [r for r in records if r.queue_id not in queue_ids]
            removed = len(records) - len(kept)
            records[:] = kept
            return removed

        removed: int = await asyncio.to_thread(self._modify, change)
        logger.debug("Removed %d records from pending queue", removed)
        return removed

    async def mark_completed(self, queue_id: str, remote_id: int) -> bool:
        """Record that a queued entry was inserted remotely.

        Returns:
            True if the record was found.
        """

        def change(records: list[PendingEntry]) -> bool:
            for record in records:
                if record.queue_id == queue_id:
                    record.remote_id = remote_id
                    return True
            return False

        found: bool = await asyncio.to_thread(self._modify, change)
        return found

    async def clear(self) -> int:
        """Remove all records.

        Returns:
            Number of records removed.
        """

        def change(records: list[PendingEntry]) -> int:
            count = len(records)
            records.clear()
            return count

        count: int = await asyncio.to_thread(self._modify, change)
        logger.info("Cleared %d records from pending queue", count)
        return count

    async def size(self) -> int:
        """Get number of pending records."""
        return len(await self.load())

    def close(self) -> None:
        """Close the database."""
        with self._lock:
            if self._db is not None:
                self._db.close()
                self._db = None
                logger.debug("Pending queue closed")
