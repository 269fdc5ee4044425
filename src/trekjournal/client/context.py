"""Shared state of a running journal.

This module provides:
- JournalContext: Explicit owner of the queue handle, connectivity state,
  drain guard, reconciled entries and status banner
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from trekjournal.client.entries import ReconciledEntrySet
from trekjournal.client.status import StatusBanner
from trekjournal.core.config import SyncConfig

if TYPE_CHECKING:
    from trekjournal.client.api import RemoteStore
    from trekjournal.client.sync.connectivity import ConnectivityMonitor
    from trekjournal.client.sync.queue import PendingQueue


@dataclass
class JournalContext:
    """State passed to the gate, the sync engine and the deleter.

    Attributes:
        store: Remote store adapter.
        queue: Local durable queue.
        monitor: Connectivity monitor.
        entries: Reconciled entry set shown to the user.
        status: Status banner.
        config: Sync tuning.
        draining: Single-flight guard, True while a drain runs.
    """

    store: RemoteStore
    queue: PendingQueue
    monitor: ConnectivityMonitor
    entries: ReconciledEntrySet = field(default_factory=ReconciledEntrySet)
    status: StatusBanner = field(default_factory=StatusBanner)
    config: SyncConfig = field(default_factory=SyncConfig)
    draining: bool = False

    @property
    def is_online(self) -> bool:
        """Check current connectivity."""
        return self.monitor.is_online
