"""Shared fixtures: an in-memory backend and a temporary pending queue."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Generator, Iterable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from trekjournal.client.journal import Journal
from trekjournal.client.models import Entry, MediaReference
from trekjournal.client.sync import PendingQueue
from trekjournal.core.errors import RemoteStoreError, RemoteWriteError


class FakeRemoteStore:
    """In-memory stand-in for the backend.

    Every coroutine yields once so concurrent callers interleave like
    they would against a real network.
    """

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []
        self.objects: dict[str, bytes] = {}
        self.calls: list[str] = []
        self.inserted_titles: list[str] = []
        self.fail_titles: set[str] = set()
        self.fail_uploads = False
        self.fail_delete_objects = False
        self.fail_query = False
        self.reachable = True
        self.deleted_paths: list[list[str]] = []
        self._next_id = 1
        self._clock = datetime(2025, 6, 1, 8, 0, tzinfo=UTC)

    def seed(self, title: str, media: Iterable[MediaReference] = (), day: str = "Day 1") -> Entry:
        """Store a row directly, as if inserted earlier."""
        row = self._make_row({
            "type": "photo",
            "day": day,
            "title": title,
            "notes": "",
            "media": [m.to_dict() for m in media],
        })
        return Entry.from_dict(row)

    def _make_row(self, record: dict[str, Any]) -> dict[str, Any]:
        self._clock += timedelta(minutes=1)
        row = dict(record, id=self._next_id, created_at=self._clock.isoformat())
        self._next_id += 1
        self.rows.append(row)
        return row

    async def insert_entry(self, record: dict[str, Any]) -> Entry:
        await asyncio.sleep(0)
        self.calls.append("insert_entry")
        if record["title"] in self.fail_titles:
            raise RemoteWriteError(f"insert of {record['title']} failed", 500)
        self.inserted_titles.append(record["title"])
        return Entry.from_dict(self._make_row(record))

    async def query_entries(self) -> list[Entry]:
        await asyncio.sleep(0)
        self.calls.append("query_entries")
        if self.fail_query:
            raise RemoteStoreError("query failed", 503)
        rows = sorted(self.rows, key=lambda r: r["created_at"], reverse=True)
        return [Entry.from_dict(r) for r in rows]

    async def delete_entry(self, entry_id: int) -> None:
        await asyncio.sleep(0)
        self.calls.append("delete_entry")
        self.rows = [r for r in self.rows if r["id"] != entry_id]

    async def update_entry_media(self, entry_id: int, media: list[MediaReference]) -> None:
        await asyncio.sleep(0)
        self.calls.append("update_entry_media")
        for row in self.rows:
            if row["id"] == entry_id:
                row["media"] = [m.to_dict() for m in media]

    async def upload_object(self, path: str, data: bytes, content_type: str) -> None:
        await asyncio.sleep(0)
        self.calls.append("upload_object")
        if self.fail_uploads:
            raise RemoteWriteError("upload failed", 500)
        self.objects[path] = data

    def get_public_url(self, path: str) -> str:
        return f"https://cdn.test/trip-media/{path}"

    async def delete_objects(self, paths: Iterable[str]) -> None:
        await asyncio.sleep(0)
        self.calls.append("delete_objects")
        paths = list(paths)
        self.deleted_paths.append(paths)
        if self.fail_delete_objects:
            raise RemoteWriteError("storage unavailable", 503)
        for path in paths:
            self.objects.pop(path, None)

    async def health_check(self) -> bool:
        await asyncio.sleep(0)
        return self.reachable


@pytest.fixture
def store() -> FakeRemoteStore:
    """Create an empty in-memory backend."""
    return FakeRemoteStore()


@pytest.fixture
def queue(tmp_path: Path) -> Generator[PendingQueue, None, None]:
    """Create a pending queue in a temporary directory."""
    pending = PendingQueue(tmp_path / "queue.db")
    yield pending
    pending.close()


@pytest.fixture
def journal(store: FakeRemoteStore, queue: PendingQueue) -> Journal:
    """Create a journal over the fake backend, initially online."""
    return Journal(store, queue)


@pytest.fixture
def media_ref() -> Callable[[str], MediaReference]:
    """Factory for media references."""

    def make(path: str) -> MediaReference:
        return MediaReference(
            url=f"https://cdn.test/trip-media/{path}",
            path=path,
            name=f"original-{path}",
            type="image/jpeg",
        )

    return make
