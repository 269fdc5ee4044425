"""Entry, media and draft models.

This module provides:
- MediaReference: An uploaded media object
- Entry: A memory durably stored by the backend
- LocalFile: Raw bytes of a file picked for upload
- Draft: What the user composed, before validation
- PendingEntry: A validated draft held in the local queue
"""

from __future__ import annotations

import base64
import mimetypes
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from trekjournal.core.errors import EmptyEntry, UnknownDay
from trekjournal.core.types import TRIP_DAYS, UNTITLED_MEMORY, Category


@dataclass
class MediaReference:
    """Media object stored in the bucket.

    Attributes:
        url: Public URL of the object.
        path: Storage path, unique within the bucket.
        name: Original file name shown to the user.
        type: MIME type.
    """

    url: str
    path: str
    name: str
    type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MediaReference:
        """Create from API response dictionary."""
        return cls(
            url=data["url"],
            path=data["path"],
            name=data.get("name", ""),
            type=data.get("type", ""),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON shape stored in the media column."""
        return {"url": self.url, "name": self.name, "path": self.path, "type": self.type}


@dataclass
class Entry:
    """Memory stored by the backend."""

    id: int
    category: Category
    day: str
    title: str
    notes: str
    media: list[MediaReference]
    created_at: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entry:
        """Create from API response dictionary.

        The backend stores the category in the ``type`` column.
        """
        return cls(
            id=data["id"],
            category=Category(data["type"]),
            day=data["day"],
            title=data.get("title") or "",
            notes=data.get("notes") or "",
            media=[MediaReference.from_dict(m) for m in data.get("media") or []],
            created_at=datetime.fromisoformat(data["created_at"]),
        )


@dataclass
class LocalFile:
    """File picked by the user, not uploaded yet."""

    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> LocalFile:
        """Read a file from disk, guessing its MIME type from the extension."""
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            data=path.read_bytes(),
        )

    def to_dict(self) -> dict[str, str]:
        """Serialize with base64-encoded bytes."""
        return {
            "name": self.name,
            "mime_type": self.mime_type,
            "data": base64.b64encode(self.data).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> LocalFile:
        """Deserialize from to_dict() output."""
        return cls(
            name=data["name"],
            mime_type=data["mime_type"],
            data=base64.b64decode(data["data"]),
        )


@dataclass
class Draft:
    """Entry as composed by the user."""

    category: Category = Category.PHOTO
    day: str = "Day 1"
    title: str = ""
    notes: str = ""
    files: list[LocalFile] = field(default_factory=list)

    def validate(self) -> PendingEntry:
        """Check the draft and build the record to store or upload.

        Title and notes are stripped; a blank title is replaced by the
        untitled placeholder.

        Returns:
            PendingEntry ready for the queue or for upload.

        Raises:
            EmptyEntry: If title, notes and files are all empty.
            UnknownDay: If the day is not one of the trip days.
        """
        title = self.title.strip()
        notes = self.notes.strip()
        if not title and not notes and not self.files:
            raise EmptyEntry()
        if self.day not in TRIP_DAYS:
            raise UnknownDay(self.day)

        return PendingEntry(
            category=self.category,
            day=self.day,
            title=title or UNTITLED_MEMORY,
            notes=notes,
            files=list(self.files),
        )


@dataclass
class PendingEntry:
    """Validated entry waiting to be stored remotely.

    Attributes:
        queue_id: Local identifier used to remove the record after a drain.
        queued_at: Unix time the record was created.
        remote_id: Id of the remote entry once inserted (completion marking).
    """

    category: Category
    day: str
    title: str
    notes: str
    files: list[LocalFile] = field(default_factory=list)
    queue_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    queued_at: float = field(default_factory=time.time)
    remote_id: int | None = None

    def to_record(self, media: list[MediaReference]) -> dict[str, Any]:
        """Build the row inserted into the entries table."""
        return {
            "type": self.category.value,
            "day": self.day,
            "title": self.title,
            "notes": self.notes,
            "media": [m.to_dict() for m in media],
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the local queue."""
        return {
            "queue_id": self.queue_id,
            "queued_at": self.queued_at,
            "remote_id": self.remote_id,
            "category": self.category.value,
            "day": self.day,
            "title": self.title,
            "notes": self.notes,
            "files": [f.to_dict() for f in self.files],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingEntry:
        """Deserialize from to_dict() output."""
        return cls(
            category=Category(data["category"]),
            day=data["day"],
            title=data["title"],
            notes=data["notes"],
            files=[LocalFile.from_dict(f) for f in data.get("files", [])],
            queue_id=data["queue_id"],
            queued_at=data["queued_at"],
            remote_id=data.get("remote_id"),
        )
