"""Offline queue synchronization.

Architecture:
    Draft → EntrySubmissionGate ─online──► EntryUploader ─► backend
                                └offline─► PendingQueue
    ConnectivityMonitor → command queue → JournalRunner → SyncEngine.drain()

Components:
- **PendingQueue**: SQLite-backed durable queue of entries submitted offline
- **ConnectivityMonitor**: Edge-triggered online/offline commands and periodic probe
- **SyncEngine**: Single-flight drain of the pending queue
- **EntrySubmissionGate**: Routes drafts to the backend or the queue
- **EntryDeleter**: Entry and media deletion
- **JournalRunner**: Consumes the command queue

All public symbols are re-exported here.
"""

from trekjournal.client.sync.connectivity import DEFAULT_PROBE_INTERVAL, ConnectivityMonitor
from trekjournal.client.sync.coordinator import JournalRunner
from trekjournal.client.sync.deletion import EntryDeleter
from trekjournal.client.sync.engine import SyncEngine
from trekjournal.client.sync.gate import EntrySubmissionGate
from trekjournal.client.sync.queue import DEFAULT_SLOT, PendingQueue
from trekjournal.client.sync.types import (
    DrainResult,
    DrainStatus,
    SubmitResult,
    SyncCommand,
)
from trekjournal.client.sync.upload import EntryUploader, make_storage_path

__all__ = [
    # Connectivity
    "DEFAULT_PROBE_INTERVAL",
    "ConnectivityMonitor",
    # Coordinator
    "JournalRunner",
    # Deletion
    "EntryDeleter",
    # Engine
    "SyncEngine",
    # Gate
    "EntrySubmissionGate",
    # Queue
    "DEFAULT_SLOT",
    "PendingQueue",
    # Types
    "DrainResult",
    "DrainStatus",
    "SubmitResult",
    "SyncCommand",
    # Upload
    "EntryUploader",
    "make_storage_path",
]
