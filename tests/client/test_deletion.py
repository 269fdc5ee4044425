"""Tests for entry and media deletion."""

from __future__ import annotations

import pytest

from trekjournal.client.journal import Journal
from trekjournal.core.errors import UnknownEntryError


class TestDeleteEntry:
    """Tests for deleting whole entries."""

    @pytest.mark.asyncio
    async def test_batch_deletes_media(self, journal: Journal, store, media_ref) -> None:  # type: ignore[no-untyped-def]
        """All media paths should go in one batch, then the row is deleted."""
        entry = store.seed("album", media=[media_ref("a.jpg"), media_ref("b.jpg"), media_ref("c.jpg")])
        await journal.refresh()

        await journal.delete_entry(entry.id)

        assert store.deleted_paths == [["a.jpg", "b.jpg", "c.jpg"]]
        assert store.rows == []
        assert journal.context.entries.get(entry.id) is None

    @pytest.mark.asyncio
    async def test_media_failure_still_deletes_row(self, journal: Journal, store, media_ref) -> None:  # type: ignore[no-untyped-def]
        """A failed batch media delete should not block the row delete."""
        entry = store.seed("album", media=[media_ref("a.jpg")])
        await journal.refresh()
        store.fail_delete_objects = True

        await journal.delete_entry(entry.id)

        assert "delete_entry" in store.calls
        assert store.rows == []
        assert len(journal.context.entries) == 0

    @pytest.mark.asyncio
    async def test_no_media_skips_storage(self, journal: Journal, store) -> None:  # type: ignore[no-untyped-def]
        """An entry without media should not call the storage delete."""
        entry = store.seed("diary")
        await journal.refresh()

        await journal.delete_entry(entry.id)

        assert "delete_objects" not in store.calls
        assert store.rows == []

    @pytest.mark.asyncio
    async def test_unknown_entry(self, journal: Journal, store) -> None:  # type: ignore[no-untyped-def]
        """Deleting an entry not in the entry set should raise."""
        with pytest.raises(UnknownEntryError):
            await journal.delete_entry(99)

        assert store.calls == []


class TestDeleteMedia:
    """Tests for deleting one media item."""

    @pytest.mark.asyncio
    async def test_removes_one_item(self, journal: Journal, store, media_ref) -> None:  # type: ignore[no-untyped-def]
        """The object, the local entry and the record should all lose the item."""
        entry = store.seed("album", media=[media_ref("a.jpg"), media_ref("b.jpg")])
        await journal.refresh()

        updated = await journal.delete_media(entry.id, "a.jpg")

        assert [m.path for m in updated.media] == ["b.jpg"]
        assert store.deleted_paths == [["a.jpg"]]
        assert [m["path"] for m in store.rows[0]["media"]] == ["b.jpg"]
        local = journal.context.entries.get(entry.id)
        assert local is not None
        assert [m.path for m in local.media] == ["b.jpg"]

    @pytest.mark.asyncio
    async def test_order_of_operations(self, journal: Journal, store, media_ref) -> None:  # type: ignore[no-untyped-def]
        """The object is deleted before the record is updated."""
        entry = store.seed("album", media=[media_ref("a.jpg")])
        await journal.refresh()
        store.calls.clear()

        await journal.delete_media(entry.id, "a.jpg")

        assert store.calls == ["delete_objects", "update_entry_media"]

    @pytest.mark.asyncio
    async def test_unknown_entry(self, journal: Journal) -> None:
        """Deleting media of an unknown entry should raise."""
        with pytest.raises(UnknownEntryError):
            await journal.delete_media(5, "a.jpg")
