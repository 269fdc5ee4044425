"""Shared types for trekjournal.

This module defines enums and constants used across the client.
"""

from __future__ import annotations

from enum import Enum


class SyncState(str, Enum):
    """State of the journal's status banner.

    Reported by the submission gate and sync engine, rendered by the CLI.
    """

    IDLE = "idle"
    QUEUED_OFFLINE = "queued-offline"
    DRAINING = "draining"
    DRAINED_SUCCESS = "drained-success"
    DRAINED_ERROR = "drained-error"


class Category(str, Enum):
    """Kind of memory an entry records."""

    PHOTO = "photo"
    VIDEO = "video"
    DIARY = "diary"


# Trip days offered by the entry form, in display order
TRIP_DAYS: tuple[str, ...] = ("Day 1", "Day 2", "Day 3", "Travel home")

UNTITLED_MEMORY = "(Untitled memory)"
