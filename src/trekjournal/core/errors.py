"""Exception hierarchy for trekjournal."""

from __future__ import annotations


class JournalError(Exception):
    """Base exception for journal errors."""


class EmptyEntry(JournalError):
    """A draft has no title, no notes and no files."""

    def __init__(self) -> None:
        super().__init__("Please enter a title, notes, or at least one photo.")


class UnknownDay(JournalError):
    """A draft names a day outside the trip days."""

    def __init__(self, day: str) -> None:
        super().__init__(f"Unknown trip day: {day!r}")
        self.day = day


class LocalPersistenceError(JournalError):
    """The local durable queue could not be read or written."""


class RemoteStoreError(JournalError):
    """The backend rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteWriteError(RemoteStoreError):
    """A write (insert, update, upload, delete) failed on the backend."""


class UnknownEntryError(JournalError):
    """No entry with this id is in the reconciled entry set."""

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"No memory with id {entry_id}")
        self.entry_id = entry_id
