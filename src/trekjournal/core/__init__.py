"""Core module - Shared configuration and types."""

from trekjournal.core.config import DrainPolicy, RemoteConfig, SyncConfig
from trekjournal.core.types import TRIP_DAYS, UNTITLED_MEMORY, Category, SyncState

__all__ = [
    # Config
    "DrainPolicy",
    "RemoteConfig",
    "SyncConfig",
    # Types
    "Category",
    "SyncState",
    "TRIP_DAYS",
    "UNTITLED_MEMORY",
]
