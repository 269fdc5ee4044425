"""Configuration classes for trekjournal.

This module defines the remote backend settings and the sync tuning knobs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote


class DrainPolicy(str, Enum):
    """How the sync engine treats entries already inserted in a failed batch.

    FAIL_FAST keeps the whole batch queued after a failure, so entries that
    were inserted before the failing one are inserted again on the next drain
    (at-least-once). MARK_COMPLETED records the remote id of each inserted
    entry in the queue and skips it on retry.
    """

    FAIL_FAST = "fail-fast"
    MARK_COMPLETED = "mark-completed"


@dataclass
class RemoteConfig:
    """Configuration for connecting to the journal backend.

    The backend exposes a REST table for entries and an object storage
    bucket for media (Supabase layout).

    Attributes:
        url: Base URL of the project (e.g., "https://abc.supabase.co").
        api_key: Anonymous or service API key.
        table: Name of the entries table.
        bucket: Name of the media bucket.
        timeout: Request timeout in seconds.
    """

    url: str
    api_key: str
    table: str = "memories"
    bucket: str = "trip-media"
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Normalize base URL."""
        self.url = self.url.rstrip("/")

    @property
    def rest_url(self) -> str:
        """Get the REST endpoint of the entries table."""
        return f"{self.url}/rest/v1/{self.table}"

    @property
    def storage_url(self) -> str:
        """Get the object endpoint of the media bucket."""
        return f"{self.url}/storage/v1/object/{self.bucket}"

    def public_url_for(self, path: str) -> str:
        """Get the public URL of a stored object.

        Args:
            path: Storage path inside the bucket.

        Returns:
            Stable public URL for the object.
        """
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{quote(path)}"


@dataclass
class SyncConfig:
    """Tuning for the offline queue synchronization.

    Attributes:
        probe_interval: Seconds between connectivity probes.
        drain_policy: Failure policy applied by the sync engine.
    """

    probe_interval: float = 10.0
    drain_policy: DrainPolicy = DrainPolicy.FAIL_FAST
