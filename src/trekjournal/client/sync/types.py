"""Shared types and dataclasses for sync operations.

This module provides:
- SyncCommand: Commands consumed by the journal runner
- DrainStatus, DrainResult: Outcome of a drain
- SubmitResult: Outcome of a submission

Exception classes live in trekjournal.core.errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trekjournal.client.models import Entry, PendingEntry


class SyncCommand(Enum):
    """Command delivered to the journal runner's command queue."""

    ONLINE = auto()  # Connectivity came back
    OFFLINE = auto()  # Connectivity was lost
    PROBE = auto()  # Periodic probe saw the backend reachable
    SYNC = auto()  # Manual sync request
    STOP = auto()  # Shut the runner down


class DrainStatus(Enum):
    """Outcome of a drain call."""

    SUCCESS = "success"
    EMPTY = "empty"  # Nothing queued, no remote calls made
    SKIPPED = "skipped"  # Another drain was already running


@dataclass
class DrainResult:
    """Result of a drain."""

    status: DrainStatus
    inserted: int = 0
    skipped: int = 0  # Already marked completed in a previous cycle
    removed: int = 0  # Queue records removed after success


@dataclass
class SubmitResult:
    """Result of submitting a draft.

    Attributes:
        queued: True if the draft went to the local queue.
        pending: The queued record (offline path).
        entry: The stored entry (online path).
    """

    queued: bool
    pending: PendingEntry | None = None
    entry: Entry | None = None
